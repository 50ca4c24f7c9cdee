"""Domain data models for circuit profiling.

This module defines `attrs`-based records passed along the profiling
pipeline. All records are frozen value types; they may be converted to the
public camelCase report contract using `cattrs` hooks (see
`zk_solana_profiler.contracts.convert`).

Classes
-------
FeeQuotes
    Read-only tier -> SOL quote mapping kept in tier-table order.
CircuitArtifactSet
    Resolved artifact paths for one circuit (not validated to exist).
ExtractedMetrics
    Byte sizes and derived counts read from the artifacts.
CostEstimate
    Predicted compute units and tiered priority-fee quotes.
Classification
    Instruction-size verdict, warnings and status.
ProfileOptions
    Caller options for a profiling run.
ProfileResult
    The engine's single public output record.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Literal, Mapping, Optional

from attrs import Attribute, define, field
from attrs.validators import in_, instance_of, optional

ProfileStatus = Literal["PASS", "WARN", "FAIL"]
PROFILE_STATUSES: tuple[str, ...] = ("PASS", "WARN", "FAIL")

PROOF_EXT = ".proof"
PUBLIC_WITNESS_EXT = ".pw"
WITNESS_EXT = ".gz"
ACIR_EXT = ".json"
VK_EXT = ".vk"


class FeeQuotes(Mapping[str, float]):
    """Read-only, hashable tier -> SOL quote mapping.

    Iteration follows insertion order (the fee-tier table order); equality
    with any other mapping ignores order, as for ``dict``.
    """

    __slots__ = ("_items",)

    def __init__(self, quotes: Any = ()) -> None:
        items = quotes.items() if isinstance(quotes, Mapping) else quotes
        self._items: tuple[tuple[str, float], ...] = tuple((k, v) for k, v in items)

    def __getitem__(self, tier: str) -> float:
        for name, quote in self._items:
            if name == tier:
                return quote
        raise KeyError(tier)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(frozenset(self._items))

    def __repr__(self) -> str:
        return f"FeeQuotes({dict(self._items)!r})"


def _to_fee_quotes(value: Any) -> FeeQuotes:
    return value if isinstance(value, FeeQuotes) else FeeQuotes(value)


def _validate_non_negative_int(_instance: object, attribute: Attribute[int], value: int) -> None:
    """Ensure an integer metric is non-negative."""

    if value < 0:
        raise ValueError(f"{attribute.name} must be non-negative, got {value!r}")


def _validate_optional_non_negative_int(_instance: object, attribute: Attribute[Optional[int]], value: Optional[int]) -> None:
    """Ensure an optional integer metric is either ``None`` or non-negative."""

    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{attribute.name} must be an int or None, got {value!r}")
    _validate_non_negative_int(_instance, attribute, value)


def _validate_fee_mapping(_instance: object, attribute: Attribute["FeeQuotes"], value: "FeeQuotes") -> None:
    """Ensure fee quotes are non-negative floats keyed by tier name."""

    for tier, quote in value.items():
        if not isinstance(tier, str):
            raise TypeError(f"{attribute.name} keys must be tier names, got {tier!r}")
        if quote < 0.0:
            raise ValueError(f"{attribute.name}[{tier!r}] must be non-negative, got {quote!r}")


@define(kw_only=True, frozen=True)
class CircuitArtifactSet:
    """Build outputs belonging to one circuit, keyed by a shared base name.

    Every path is ``<target_dir>/<circuit_name><ext>``; existence is checked
    later, during metric extraction.
    """

    circuit_name: str = field(validator=[instance_of(str)])
    target_dir: Path = field(converter=Path)

    @circuit_name.validator
    def _check_name(self, attribute: Attribute[str], value: str) -> None:
        if not value:
            raise ValueError(f"{attribute.name} must be non-empty")

    def _with_ext(self, ext: str) -> Path:
        return self.target_dir / f"{self.circuit_name}{ext}"

    @property
    def proof_path(self) -> Path:
        return self._with_ext(PROOF_EXT)

    @property
    def public_witness_path(self) -> Path:
        return self._with_ext(PUBLIC_WITNESS_EXT)

    @property
    def witness_path(self) -> Path:
        return self._with_ext(WITNESS_EXT)

    @property
    def acir_path(self) -> Path:
        return self._with_ext(ACIR_EXT)

    @property
    def vk_path(self) -> Path:
        return self._with_ext(VK_EXT)


@define(kw_only=True, frozen=True)
class ExtractedMetrics:
    """Numeric facts derived from a circuit's artifacts.

    Parameters
    ----------
    proof_bytes : int
        Size of the proof file (required artifact).
    public_witness_bytes : int
        Size of the public-witness file (required artifact).
    witness_bytes : int or None
        Size of the compressed private witness, ``None`` when absent.
    acir_bytes : int or None
        Size of the ACIR circuit-definition JSON, ``None`` when absent.
    vk_bytes : int or None
        Size of the verification key, ``None`` when absent.
    public_input_count : int or None
        Public-witness length in whole field elements.
    constraint_count : int or None
        Length of the ACIR ``constraints`` list; ``None`` when the file is
        absent or could not be parsed.
    """

    proof_bytes: int = field(validator=[instance_of(int), _validate_non_negative_int])
    public_witness_bytes: int = field(validator=[instance_of(int), _validate_non_negative_int])
    witness_bytes: Optional[int] = field(default=None, validator=_validate_optional_non_negative_int)
    acir_bytes: Optional[int] = field(default=None, validator=_validate_optional_non_negative_int)
    vk_bytes: Optional[int] = field(default=None, validator=_validate_optional_non_negative_int)
    public_input_count: Optional[int] = field(default=None, validator=_validate_optional_non_negative_int)
    constraint_count: Optional[int] = field(default=None, validator=_validate_optional_non_negative_int)

    @property
    def instruction_data_bytes(self) -> int:
        """Bytes carried inside the verify instruction (proof + public witness)."""

        return self.proof_bytes + self.public_witness_bytes


@define(kw_only=True, frozen=True)
class CostEstimate:
    """Predicted compute units and priority-fee quotes in SOL, keyed by tier."""

    total_cu: int = field(validator=[instance_of(int), _validate_non_negative_int])
    priority_fees: FeeQuotes = field(factory=FeeQuotes, converter=_to_fee_quotes, validator=[_validate_fee_mapping])


@define(kw_only=True, frozen=True)
class Classification:
    """Threshold verdict for one circuit."""

    instruction_data_bytes: int = field(validator=[instance_of(int), _validate_non_negative_int])
    effective_instruction_limit: int = field(validator=[instance_of(int), _validate_non_negative_int])
    fits_in_solana_tx: bool = field(validator=[instance_of(bool)])
    status: ProfileStatus = field(validator=[in_(PROFILE_STATUSES)])
    warnings: tuple[str, ...] = field(factory=tuple, converter=tuple)


@define(kw_only=True, frozen=True)
class ProfileOptions:
    """Caller options for a profiling run.

    Parameters
    ----------
    uses_alt : bool, default False
        Whether the verify transaction will use an address lookup table.
    circuit_name : str or None, default None
        Pick ``<circuit_name>.proof`` when several proofs share a build dir.
    """

    uses_alt: bool = field(default=False, validator=[instance_of(bool)])
    circuit_name: Optional[str] = field(default=None, validator=optional(instance_of(str)))


@define(kw_only=True, frozen=True)
class ProfileResult:
    """Profiling report for one circuit.

    A pure value type: two results carrying the same data compare equal.
    """

    circuit_name: str = field(validator=[instance_of(str)])

    # Size
    proof_bytes: int = field(validator=[instance_of(int), _validate_non_negative_int])
    public_witness_bytes: int = field(validator=[instance_of(int), _validate_non_negative_int])
    instruction_data_bytes: int = field(validator=[instance_of(int), _validate_non_negative_int])
    effective_instruction_limit: int = field(validator=[instance_of(int), _validate_non_negative_int])

    # Circuit
    public_input_count: Optional[int] = field(default=None, validator=_validate_optional_non_negative_int)
    constraint_count: Optional[int] = field(default=None, validator=_validate_optional_non_negative_int)

    # Costs
    total_cu: int = field(validator=[instance_of(int), _validate_non_negative_int])
    priority_fees: FeeQuotes = field(factory=FeeQuotes, converter=_to_fee_quotes, validator=[_validate_fee_mapping])
    vk_rent_estimate_sol: Optional[float] = field(default=None, validator=optional(instance_of(float)))

    # Files
    witness_bytes: Optional[int] = field(default=None, validator=_validate_optional_non_negative_int)
    acir_bytes: Optional[int] = field(default=None, validator=_validate_optional_non_negative_int)

    # Status
    fits_in_solana_tx: bool = field(validator=[instance_of(bool)])
    status: ProfileStatus = field(validator=[in_(PROFILE_STATUSES)])
    warnings: tuple[str, ...] = field(factory=tuple, converter=tuple)

    @property
    def fits_budget(self) -> bool:
        """Whether instruction data stays within the effective (soft) limit."""

        return self.instruction_data_bytes <= self.effective_instruction_limit
