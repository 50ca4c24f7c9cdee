"""Fatal profiling errors.

Only missing build outputs and missing required artifacts abort a run;
everything else degrades to absent optional fields.
"""

from __future__ import annotations

from pathlib import Path


class ProfilerError(Exception):
    """Base class for errors that abort a profiling run."""


class MissingBuildOutput(ProfilerError, FileNotFoundError):
    """The circuit root has no build-output directory."""

    def __init__(self, circuit_root: Path | str, build_dir_name: str = "target") -> None:
        self.circuit_root = Path(circuit_root)
        super().__init__(f"Missing {build_dir_name}/ directory in {self.circuit_root}")


class NoProofArtifact(ProfilerError, FileNotFoundError):
    """No ``.proof`` file was found in the build-output directory."""

    def __init__(self, target_dir: Path | str, circuit_name: str | None = None) -> None:
        self.target_dir = Path(target_dir)
        self.circuit_name = circuit_name
        if circuit_name:
            msg = f"No {circuit_name}.proof file found in {self.target_dir}. Did you run `sunspot prove`?"
        else:
            msg = "No .proof file found. Did you run `sunspot prove`?"
        super().__init__(msg)


class RequiredArtifactMissing(ProfilerError, FileNotFoundError):
    """A required artifact (proof or public witness) does not exist."""

    def __init__(self, role: str, path: Path | str) -> None:
        self.role = role
        self.path = Path(path)
        super().__init__(f"Required {role} file is missing: {self.path}")


__all__ = ["ProfilerError", "MissingBuildOutput", "NoProofArtifact", "RequiredArtifactMissing"]
