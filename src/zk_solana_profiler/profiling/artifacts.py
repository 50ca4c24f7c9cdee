"""Artifact discovery for compiled circuits.

A circuit project keeps its build outputs under ``<root>/target/`` as
``<circuit_name>.{proof,pw,gz,json,vk}``. This module locates that directory,
picks the circuit by its ``.proof`` file and returns the resolved
:class:`CircuitArtifactSet`.

Classes
-------
ArtifactSource
    Protocol for the minimal filesystem queries the pipeline needs.
FilesystemArtifactSource
    Source backed by the local filesystem.
InMemoryArtifactSource
    Source backed by a ``{path: bytes}`` mapping (tests, dry runs).

Functions
---------
locate_artifacts
    Resolve the artifact set for a circuit project root.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePath
from typing import Mapping, Optional, Protocol

from zk_solana_profiler.data.models import PROOF_EXT, CircuitArtifactSet
from zk_solana_profiler.profiling.errors import MissingBuildOutput, NoProofArtifact

logger = logging.getLogger(__name__)

DEFAULT_BUILD_DIR = "target"


class ArtifactSource(Protocol):
    """Read-only view over the files of a circuit project."""

    def is_dir(self, path: Path) -> bool: ...

    def list_files(self, path: Path) -> list[str]:
        """Return the names of regular files directly inside ``path``."""
        ...

    def exists(self, path: Path) -> bool: ...

    def size(self, path: Path) -> int: ...

    def read_bytes(self, path: Path) -> bytes: ...


class FilesystemArtifactSource:
    """Artifact source backed by the local filesystem."""

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def list_files(self, path: Path) -> list[str]:
        return [p.name for p in Path(path).iterdir() if p.is_file()]

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def size(self, path: Path) -> int:
        return Path(path).stat().st_size

    def read_bytes(self, path: Path) -> bytes:
        return Path(path).read_bytes()


class InMemoryArtifactSource:
    """Artifact source over an in-memory ``{path: bytes}`` mapping.

    Directories are implied by the parents of the stored file paths.

    Examples
    --------
    >>> src = InMemoryArtifactSource({"/c/target/main.proof": b"x" * 300})
    >>> src.list_files(Path("/c/target"))
    ['main.proof']
    """

    def __init__(self, files: Mapping[str | PurePath, bytes] | None = None) -> None:
        self.m_files: dict[PurePath, bytes] = {PurePath(k): bytes(v) for k, v in (files or {}).items()}

    def is_dir(self, path: Path) -> bool:
        p = PurePath(path)
        return any(p in f.parents for f in self.m_files)

    def list_files(self, path: Path) -> list[str]:
        p = PurePath(path)
        return [f.name for f in self.m_files if f.parent == p]

    def exists(self, path: Path) -> bool:
        return PurePath(path) in self.m_files

    def size(self, path: Path) -> int:
        return len(self._get(path))

    def read_bytes(self, path: Path) -> bytes:
        return self._get(path)

    def _get(self, path: Path) -> bytes:
        try:
            return self.m_files[PurePath(path)]
        except KeyError:
            raise FileNotFoundError(str(path)) from None


def _proof_candidates(names: list[str]) -> list[str]:
    """Return circuit names of ``.proof`` files, sorted lexicographically."""

    stems = [n[: -len(PROOF_EXT)] for n in names if n.endswith(PROOF_EXT) and len(n) > len(PROOF_EXT)]
    return sorted(stems)


def locate_artifacts(
    circuit_root: Path | str,
    circuit_name: Optional[str] = None,
    *,
    source: Optional[ArtifactSource] = None,
    build_dir: str = DEFAULT_BUILD_DIR,
) -> CircuitArtifactSet:
    """Resolve the artifact set for a circuit project root.

    Parameters
    ----------
    circuit_root : Path or str
        Circuit project root containing the build-output directory.
    circuit_name : str or None, optional
        Explicit circuit to pick when the build directory holds several
        proofs. When ``None``, the lexicographically first proof wins.
    source : ArtifactSource or None, optional
        File access backend; defaults to the local filesystem.
    build_dir : str, default 'target'
        Name of the build-output subdirectory.

    Returns
    -------
    CircuitArtifactSet
        Paths for proof, public witness, private witness, ACIR and
        verification key, none of them checked for existence.

    Raises
    ------
    MissingBuildOutput
        If ``<circuit_root>/<build_dir>`` does not exist.
    NoProofArtifact
        If no matching ``.proof`` file is present.
    """

    src = source if source is not None else FilesystemArtifactSource()
    root = Path(circuit_root)
    target_dir = root / build_dir

    if not src.is_dir(target_dir):
        raise MissingBuildOutput(root, build_dir)

    candidates = _proof_candidates(src.list_files(target_dir))
    if circuit_name is not None:
        if circuit_name not in candidates:
            raise NoProofArtifact(target_dir, circuit_name)
        name = circuit_name
    else:
        if not candidates:
            raise NoProofArtifact(target_dir)
        name = candidates[0]
        if len(candidates) > 1:
            logger.warning(
                "Multiple proof files in %s; using %s (ignored: %s). Pass a circuit name to choose explicitly.",
                str(target_dir),
                name,
                ", ".join(candidates[1:]),
            )

    logger.info("Located circuit %s in %s", name, str(target_dir))
    return CircuitArtifactSet(circuit_name=name, target_dir=target_dir)
