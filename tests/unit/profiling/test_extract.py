"""Unit tests for metric extraction."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from zk_solana_profiler.data.models import CircuitArtifactSet
from zk_solana_profiler.profiling.artifacts import InMemoryArtifactSource
from zk_solana_profiler.profiling.errors import RequiredArtifactMissing
from zk_solana_profiler.profiling.extract import count_public_inputs, extract_metrics, parse_constraint_count

ARTS = CircuitArtifactSet(circuit_name="main", target_dir="/c/target")


def _src(**files: bytes) -> InMemoryArtifactSource:
    """Build a source from ``ext=bytes`` keyword pairs (``proof``, ``pw``, ``gz``, ``json``, ``vk``)."""

    return InMemoryArtifactSource({f"/c/target/main.{ext}": data for ext, data in files.items()})


def test_required_proof_missing() -> None:
    with pytest.raises(RequiredArtifactMissing) as info:
        extract_metrics(ARTS, _src(pw=b"\x00" * 32))
    assert info.value.role == "proof"
    assert info.value.path == ARTS.proof_path


def test_required_public_witness_missing() -> None:
    with pytest.raises(RequiredArtifactMissing, match="public witness"):
        extract_metrics(ARTS, _src(proof=b"\x00" * 10))


def test_optional_artifacts_absent() -> None:
    m = extract_metrics(ARTS, _src(proof=b"\x00" * 300, pw=b"\x00" * 200))

    assert m.proof_bytes == 300
    assert m.public_witness_bytes == 200
    assert m.public_input_count == 6
    assert m.witness_bytes is None
    assert m.acir_bytes is None
    assert m.vk_bytes is None
    assert m.constraint_count is None


def test_empty_public_witness_counts_zero_inputs() -> None:
    m = extract_metrics(ARTS, _src(proof=b"\x00", pw=b""))
    assert m.public_input_count == 0


def test_public_input_count_floors() -> None:
    assert count_public_inputs(63) == 1
    assert count_public_inputs(64) == 2
    assert count_public_inputs(0) == 0


def test_constraint_count_from_acir() -> None:
    acir = json.dumps({"constraints": [{}, {}, {}]}).encode()
    m = extract_metrics(ARTS, _src(proof=b"p", pw=b"", json=acir, gz=b"w" * 7, vk=b"k" * 5))

    assert m.constraint_count == 3
    assert m.acir_bytes == len(acir)
    assert m.witness_bytes == 7
    assert m.vk_bytes == 5


def test_malformed_acir_degrades_to_absent() -> None:
    m = extract_metrics(ARTS, _src(proof=b"p", pw=b"", json=b"{not json"))

    assert m.acir_bytes == 9
    assert m.constraint_count is None


def test_parse_constraint_count_shapes() -> None:
    assert parse_constraint_count(b'{"constraints": []}') == 0
    assert parse_constraint_count(b'{"opcodes": [1, 2]}') is None
    assert parse_constraint_count(b'{"constraints": 12}') is None
    assert parse_constraint_count(b"[1, 2, 3]") is None
    assert parse_constraint_count(b"\xff\xfe") is None


def test_deeply_nested_acir_degrades_to_absent() -> None:
    nested = b"[" * 100_000 + b"]" * 100_000

    assert parse_constraint_count(nested) is None
    m = extract_metrics(ARTS, _src(proof=b"p", pw=b"", json=nested))
    assert m.acir_bytes == len(nested)
    assert m.constraint_count is None


def test_oversized_integer_literal_in_acir_is_tolerated() -> None:
    huge = b'{"n": ' + b"1" * 5000 + b"}"

    assert parse_constraint_count(huge) is None
    m = extract_metrics(ARTS, _src(proof=b"p", pw=b"", json=huge))
    assert m.constraint_count is None


def test_filesystem_extraction(tmp_path: Path) -> None:
    target = tmp_path / "target"
    target.mkdir()
    (target / "c.proof").write_bytes(b"\x01" * 256)
    (target / "c.pw").write_bytes(b"\x02" * 96)
    arts = CircuitArtifactSet(circuit_name="c", target_dir=target)

    m = extract_metrics(arts)

    assert (m.proof_bytes, m.public_witness_bytes, m.public_input_count) == (256, 96, 3)
