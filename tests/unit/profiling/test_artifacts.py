"""Unit tests for circuit artifact discovery."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from zk_solana_profiler.profiling.artifacts import InMemoryArtifactSource, locate_artifacts
from zk_solana_profiler.profiling.errors import MissingBuildOutput, NoProofArtifact


def _touch(path: Path, size: int = 1) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x00" * size)


def test_missing_target_dir_raises(tmp_path: Path) -> None:
    with pytest.raises(MissingBuildOutput, match="Missing target/ directory"):
        locate_artifacts(tmp_path)


def test_no_proof_file_suggests_proving(tmp_path: Path) -> None:
    _touch(tmp_path / "target" / "main.pw")

    with pytest.raises(NoProofArtifact, match="sunspot prove"):
        locate_artifacts(tmp_path)


def test_single_proof_defines_circuit_name(tmp_path: Path) -> None:
    _touch(tmp_path / "target" / "one.proof")

    arts = locate_artifacts(tmp_path)

    assert arts.circuit_name == "one"
    assert arts.target_dir == tmp_path / "target"
    assert arts.public_witness_path == tmp_path / "target" / "one.pw"
    # Paths are derived, not checked.
    assert not arts.vk_path.exists()


def test_directory_named_like_proof_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "target" / "dir.proof").mkdir(parents=True)

    with pytest.raises(NoProofArtifact):
        locate_artifacts(tmp_path)


def test_multiple_proofs_pick_lexicographic_first(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    for name in ("zeta", "alpha", "mid"):
        _touch(tmp_path / "target" / f"{name}.proof")

    with caplog.at_level(logging.WARNING):
        arts = locate_artifacts(tmp_path)

    assert arts.circuit_name == "alpha"
    assert "Multiple proof files" in caplog.text


def test_explicit_circuit_name_wins(tmp_path: Path) -> None:
    for name in ("alpha", "beta"):
        _touch(tmp_path / "target" / f"{name}.proof")

    assert locate_artifacts(tmp_path, "beta").circuit_name == "beta"
    with pytest.raises(NoProofArtifact, match="gamma.proof"):
        locate_artifacts(tmp_path, "gamma")


def test_custom_build_dir(tmp_path: Path) -> None:
    _touch(tmp_path / "out" / "c.proof")

    assert locate_artifacts(tmp_path, build_dir="out").circuit_name == "c"


def test_in_memory_source() -> None:
    src = InMemoryArtifactSource({"/proj/target/b.proof": b"p", "/proj/target/a.proof": b"p", "/proj/target/a.pw": b""})

    arts = locate_artifacts("/proj", source=src)

    assert arts.circuit_name == "a"
    with pytest.raises(MissingBuildOutput):
        locate_artifacts("/other", source=src)
