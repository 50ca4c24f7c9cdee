"""Chain limits and cost-model constants.

The module-level constants are the built-in defaults; they match
``conf/profiler.yaml``. :class:`ProfilerSettings` bundles them so a composed
Hydra/OmegaConf config can override any of them for a run.
"""

from __future__ import annotations

from typing import Any, Mapping

from attrs import define, field
from attrs.validators import instance_of

# Solana 2026 limits
SOLANA_TX_MAX_BYTES = 1232
SAFE_INSTRUCTION_DATA_LIMIT = 900
SAFE_INSTRUCTION_DATA_LIMIT_ALT = 750
FIELD_ELEMENT_BYTES = 32
MAX_PUBLIC_INPUTS = 8
HIGH_CU_THRESHOLD = 900_000

# Compute-unit model
BASE_VERIFY_CU = 150_000
CU_PER_PUBLIC_INPUT = 12_000
CU_PER_10K_CONSTRAINTS = 20_000
CONSTRAINT_BUCKET = 10_000

# Economic constants
MICRO_LAMPORTS_PER_LAMPORT = 1_000_000
LAMPORTS_PER_SOL = 1_000_000_000
FEE_DECIMALS = 6
RENT_SOL_PER_KB = 0.007
RENT_DECIMALS = 4


@define(kw_only=True, frozen=True)
class FeeTier:
    """One named priority-fee bid level."""

    name: str = field(validator=[instance_of(str)])
    micro_lamports_per_cu: int = field(validator=[instance_of(int)])


# Ordered: quotes are reported in this order.
PRIORITY_FEE_TIERS: tuple[FeeTier, ...] = (
    FeeTier(name="low", micro_lamports_per_cu=200),
    FeeTier(name="medium", micro_lamports_per_cu=800),
    FeeTier(name="high", micro_lamports_per_cu=2500),
)
FEE_TIER_NAMES: tuple[str, ...] = tuple(t.name for t in PRIORITY_FEE_TIERS)


@define(kw_only=True, frozen=True)
class ProfilerSettings:
    """Constants threaded through a profiling run."""

    build_dir: str = "target"

    tx_max_bytes: int = SOLANA_TX_MAX_BYTES
    safe_instruction_bytes: int = SAFE_INSTRUCTION_DATA_LIMIT
    safe_instruction_bytes_alt: int = SAFE_INSTRUCTION_DATA_LIMIT_ALT
    field_element_bytes: int = field(default=FIELD_ELEMENT_BYTES)
    max_public_inputs: int = MAX_PUBLIC_INPUTS
    high_cu_threshold: int = HIGH_CU_THRESHOLD

    base_verify_cu: int = BASE_VERIFY_CU
    cu_per_public_input: int = CU_PER_PUBLIC_INPUT
    cu_per_10k_constraints: int = CU_PER_10K_CONSTRAINTS
    constraint_bucket: int = field(default=CONSTRAINT_BUCKET)

    fee_tiers: tuple[FeeTier, ...] = field(default=PRIORITY_FEE_TIERS, converter=tuple)
    micro_lamports_per_lamport: int = MICRO_LAMPORTS_PER_LAMPORT
    lamports_per_sol: int = LAMPORTS_PER_SOL
    fee_decimals: int = FEE_DECIMALS

    rent_sol_per_kb: float = RENT_SOL_PER_KB
    rent_decimals: int = RENT_DECIMALS

    @field_element_bytes.validator
    def _check_field_width(self, attribute: Any, value: int) -> None:
        if value <= 0:
            raise ValueError(f"{attribute.name} must be positive, got {value!r}")

    @constraint_bucket.validator
    def _check_bucket(self, attribute: Any, value: int) -> None:
        if value <= 0:
            raise ValueError(f"{attribute.name} must be positive, got {value!r}")

    @fee_tiers.validator
    def _check_tiers(self, attribute: Any, value: tuple[FeeTier, ...]) -> None:
        names = tuple(t.name for t in value)
        if names != FEE_TIER_NAMES:
            raise ValueError(f"{attribute.name} must be named {list(FEE_TIER_NAMES)} in that order, got {list(names)}")

    def instruction_limit(self, uses_alt: bool) -> int:
        """Return the effective instruction-data budget for the ALT mode."""

        return self.safe_instruction_bytes_alt if uses_alt else self.safe_instruction_bytes

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "ProfilerSettings":
        """Build settings from a composed ``profiler`` config.

        Parameters
        ----------
        cfg : Mapping
            An OmegaConf ``DictConfig`` (or plain nested dict) shaped like
            ``conf/profiler.yaml``. Missing sections keep their defaults.
        """

        layout = cfg.get("layout") or {}
        limits = cfg.get("limits") or {}
        compute = cfg.get("compute") or {}
        fees = cfg.get("fees") or {}
        rent = cfg.get("rent") or {}
        d = cls()

        tiers_cfg = fees.get("tiers")
        if tiers_cfg is None:
            tiers = d.fee_tiers
        else:
            tiers = tuple(
                FeeTier(name=str(t["name"]), micro_lamports_per_cu=int(t["micro_lamports_per_cu"])) for t in tiers_cfg
            )

        return cls(
            build_dir=str(layout.get("build_dir", d.build_dir)),
            tx_max_bytes=int(limits.get("tx_max_bytes", d.tx_max_bytes)),
            safe_instruction_bytes=int(limits.get("safe_instruction_bytes", d.safe_instruction_bytes)),
            safe_instruction_bytes_alt=int(limits.get("safe_instruction_bytes_alt", d.safe_instruction_bytes_alt)),
            field_element_bytes=int(limits.get("field_element_bytes", d.field_element_bytes)),
            max_public_inputs=int(limits.get("max_public_inputs", d.max_public_inputs)),
            high_cu_threshold=int(limits.get("high_cu_threshold", d.high_cu_threshold)),
            base_verify_cu=int(compute.get("base_verify_cu", d.base_verify_cu)),
            cu_per_public_input=int(compute.get("cu_per_public_input", d.cu_per_public_input)),
            cu_per_10k_constraints=int(compute.get("cu_per_10k_constraints", d.cu_per_10k_constraints)),
            constraint_bucket=int(compute.get("constraint_bucket", d.constraint_bucket)),
            fee_tiers=tiers,
            micro_lamports_per_lamport=int(fees.get("micro_lamports_per_lamport", d.micro_lamports_per_lamport)),
            lamports_per_sol=int(fees.get("lamports_per_sol", d.lamports_per_sol)),
            fee_decimals=int(fees.get("decimals", d.fee_decimals)),
            rent_sol_per_kb=float(rent.get("sol_per_kb", d.rent_sol_per_kb)),
            rent_decimals=int(rent.get("decimals", d.rent_decimals)),
        )
