"""Report contract conversion utilities using `cattrs`.

Provides a shared converter that maps :class:`ProfileResult` to and from the
camelCase JSON report consumed by dashboards and CI tooling. Optional fields
that are absent are omitted from the payload rather than emitted as ``null``.
"""

from __future__ import annotations

from typing import Any, Dict

from cattrs import Converter

from zk_solana_profiler.data.models import ProfileResult

# Public converter instance; register hooks as needed.
converter = Converter()

# (attribute name, contract key, optional?) in report order.
_RESULT_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("circuit_name", "circuitName", False),
    ("proof_bytes", "proofBytes", False),
    ("public_witness_bytes", "publicWitnessBytes", False),
    ("instruction_data_bytes", "instructionDataBytes", False),
    ("effective_instruction_limit", "effectiveInstructionLimit", False),
    ("public_input_count", "publicInputCount", True),
    ("constraint_count", "constraintCount", True),
    ("total_cu", "totalCU", False),
    ("priority_fees", "priorityFees", False),
    ("vk_rent_estimate_sol", "vkRentEstimateSOL", True),
    ("witness_bytes", "witnessBytes", True),
    ("acir_bytes", "acirBytes", True),
    ("fits_in_solana_tx", "fitsInSolanaTx", False),
    ("status", "status", False),
    ("warnings", "warnings", False),
)


def _unstructure_result(result: ProfileResult) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for attr_name, key, is_optional in _RESULT_FIELDS:
        value = getattr(result, attr_name)
        if is_optional and value is None:
            continue
        if attr_name == "priority_fees":
            value = dict(value)
        elif attr_name == "warnings":
            value = list(value)
        out[key] = value
    return out


def _structure_result(payload: Dict[str, Any], _: type) -> ProfileResult:
    kwargs: Dict[str, Any] = {}
    for attr_name, key, is_optional in _RESULT_FIELDS:
        if key not in payload:
            if is_optional:
                continue
            raise KeyError(f"report payload is missing required key {key!r}")
        kwargs[attr_name] = payload[key]
    kwargs["priority_fees"] = {str(k): float(v) for k, v in dict(kwargs["priority_fees"]).items()}
    if kwargs.get("vk_rent_estimate_sol") is not None:
        kwargs["vk_rent_estimate_sol"] = float(kwargs["vk_rent_estimate_sol"])
    kwargs["warnings"] = tuple(str(w) for w in kwargs["warnings"])
    return ProfileResult(**kwargs)


def register_report_hooks(conv: Converter) -> None:
    """Register ProfileResult <-> camelCase report contract hooks."""

    conv.register_unstructure_hook(ProfileResult, _unstructure_result)
    conv.register_structure_hook(ProfileResult, _structure_result)


def result_to_contract(result: ProfileResult) -> Dict[str, Any]:
    """Return the camelCase report payload for ``result``."""

    return converter.unstructure(result)


def result_from_contract(payload: Dict[str, Any]) -> ProfileResult:
    """Rebuild a :class:`ProfileResult` from a camelCase report payload."""

    return converter.structure(payload, ProfileResult)


# Configure the shared converter on import so downstream callers can rely on it.
register_report_hooks(converter)
