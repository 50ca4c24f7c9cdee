"""Static cost model for on-chain proof verification.

Implements simple heuristic estimators for verify compute units, tiered
priority fees and one-time verification-key rent. All functions are pure.
"""

from __future__ import annotations

from typing import Iterable, Optional

from zk_solana_profiler.data.models import CostEstimate, ExtractedMetrics
from zk_solana_profiler.profiling.settings import (
    BASE_VERIFY_CU,
    CONSTRAINT_BUCKET,
    CU_PER_10K_CONSTRAINTS,
    CU_PER_PUBLIC_INPUT,
    FEE_DECIMALS,
    LAMPORTS_PER_SOL,
    MICRO_LAMPORTS_PER_LAMPORT,
    PRIORITY_FEE_TIERS,
    RENT_DECIMALS,
    RENT_SOL_PER_KB,
    FeeTier,
    ProfilerSettings,
)


def predict_compute_units(
    public_inputs: Optional[int] = None,
    constraint_count: Optional[int] = None,
    *,
    base_cu: int = BASE_VERIFY_CU,
    cu_per_input: int = CU_PER_PUBLIC_INPUT,
    cu_per_bucket: int = CU_PER_10K_CONSTRAINTS,
    bucket: int = CONSTRAINT_BUCKET,
) -> int:
    """Return predicted compute units for one verify instruction.

    ``base + inputs * cu_per_input + (constraints // bucket) * cu_per_bucket``.
    Absent counts contribute nothing. Constraints are charged in whole
    buckets, truncated: 10,001 constraints pay for a single bucket.

    Examples
    --------
    >>> predict_compute_units(6, None)
    222000
    >>> predict_compute_units(0, 25_000)
    190000
    """

    inputs = public_inputs or 0
    constraints = constraint_count or 0
    constraint_cu = (constraints // bucket) * cu_per_bucket
    return base_cu + inputs * cu_per_input + constraint_cu


def lamports_to_sol_quote(
    micro_lamports: int,
    *,
    micro_per_lamport: int = MICRO_LAMPORTS_PER_LAMPORT,
    lamports_per_sol: int = LAMPORTS_PER_SOL,
    decimals: int = FEE_DECIMALS,
) -> float:
    """Convert micro-lamports to SOL, rounded to ``decimals`` places."""

    lamports = micro_lamports / micro_per_lamport
    return round(lamports / lamports_per_sol, decimals)


def estimate_priority_fees(
    total_cu: int,
    tiers: Iterable[FeeTier] = PRIORITY_FEE_TIERS,
    *,
    micro_per_lamport: int = MICRO_LAMPORTS_PER_LAMPORT,
    lamports_per_sol: int = LAMPORTS_PER_SOL,
    decimals: int = FEE_DECIMALS,
) -> dict[str, float]:
    """Return a SOL fee quote per tier, in tier-table order."""

    out: dict[str, float] = {}
    for tier in tiers:
        out[tier.name] = lamports_to_sol_quote(
            total_cu * tier.micro_lamports_per_cu,
            micro_per_lamport=micro_per_lamport,
            lamports_per_sol=lamports_per_sol,
            decimals=decimals,
        )
    return out


def estimate_rent(
    vk_bytes: Optional[int],
    *,
    sol_per_kb: float = RENT_SOL_PER_KB,
    decimals: int = RENT_DECIMALS,
) -> Optional[float]:
    """Return one-time rent (SOL) for storing ``vk_bytes``, or ``None`` if absent.

    Examples
    --------
    >>> estimate_rent(2048)
    0.014
    >>> estimate_rent(None) is None
    True
    """

    if vk_bytes is None:
        return None
    return round((vk_bytes / 1024) * sol_per_kb, decimals)


def estimate_costs(metrics: ExtractedMetrics, settings: Optional[ProfilerSettings] = None) -> CostEstimate:
    """Compose compute-unit prediction and fee quotes for extracted metrics."""

    s = settings or ProfilerSettings()
    total_cu = predict_compute_units(
        metrics.public_input_count,
        metrics.constraint_count,
        base_cu=s.base_verify_cu,
        cu_per_input=s.cu_per_public_input,
        cu_per_bucket=s.cu_per_10k_constraints,
        bucket=s.constraint_bucket,
    )
    fees = estimate_priority_fees(
        total_cu,
        s.fee_tiers,
        micro_per_lamport=s.micro_lamports_per_lamport,
        lamports_per_sol=s.lamports_per_sol,
        decimals=s.fee_decimals,
    )
    return CostEstimate(total_cu=total_cu, priority_fees=fees)
