"""Threshold classification of profiled circuits.

Checks are evaluated in a fixed order and each one appends its own warning;
none suppresses another. Status is derived afterwards:

- ``FAIL`` when instruction data exceeds the hard transaction size;
- ``WARN`` when any warning was raised;
- ``PASS`` otherwise.
"""

from __future__ import annotations

from typing import Optional

from zk_solana_profiler.data.models import Classification, CostEstimate, ExtractedMetrics, ProfileStatus
from zk_solana_profiler.profiling.settings import ProfilerSettings


def collect_warnings(
    metrics: ExtractedMetrics,
    cost: CostEstimate,
    uses_alt: bool,
    settings: ProfilerSettings,
) -> list[str]:
    """Return warning messages in evaluation order."""

    size = metrics.instruction_data_bytes
    limit = settings.instruction_limit(uses_alt)
    warnings: list[str] = []

    if size > limit:
        kind = "ALT-adjusted" if uses_alt else "safe"
        warnings.append(f"Instruction data ({size} bytes) exceeds {kind} limit ({limit})")

    if size > settings.tx_max_bytes:
        warnings.append(f"Instruction data exceeds MAX Solana TX size ({settings.tx_max_bytes})")

    n_inputs = metrics.public_input_count
    if n_inputs is not None and n_inputs > settings.max_public_inputs:
        warnings.append(f"High public input count ({n_inputs}). Consider hashing/packing.")

    if cost.total_cu > settings.high_cu_threshold:
        warnings.append(f"High CU usage ({cost.total_cu}). Priority fees required to land.")

    return warnings


def derive_status(instruction_data_bytes: int, warnings: list[str], tx_max_bytes: int) -> ProfileStatus:
    """Map size and collected warnings to PASS/WARN/FAIL."""

    if instruction_data_bytes > tx_max_bytes:
        return "FAIL"
    if warnings:
        return "WARN"
    return "PASS"


def classify(
    metrics: ExtractedMetrics,
    cost: CostEstimate,
    uses_alt: bool = False,
    settings: Optional[ProfilerSettings] = None,
) -> Classification:
    """Classify a circuit against Solana size and compute limits.

    Parameters
    ----------
    metrics : ExtractedMetrics
        Sizes and counts read from the artifacts.
    cost : CostEstimate
        Output of the cost model for the same metrics.
    uses_alt : bool, default False
        Whether the transaction uses address-lookup-table compression; selects
        the tighter 750-byte instruction budget instead of 900 bytes.
    settings : ProfilerSettings or None, optional
        Limit overrides; defaults to the built-in Solana limits.
    """

    s = settings or ProfilerSettings()
    size = metrics.instruction_data_bytes
    warnings = collect_warnings(metrics, cost, uses_alt, s)
    return Classification(
        instruction_data_bytes=size,
        effective_instruction_limit=s.instruction_limit(uses_alt),
        fits_in_solana_tx=size <= s.tx_max_bytes,
        status=derive_status(size, warnings, s.tx_max_bytes),
        warnings=warnings,
    )
