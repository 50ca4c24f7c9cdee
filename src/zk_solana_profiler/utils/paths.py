"""Path utilities.

Helpers to normalize user-provided paths and to locate the packaged Hydra
config directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def resolve_user_path(value: Optional[str], cwd: Optional[Path] = None) -> Optional[str]:
    """
    Return an absolute path string for a user- or config-provided path.

    Parameters
    ----------
    value : str or None
        Path value. May be absolute or relative. ``None`` or
        empty/whitespace-only strings yield ``None``; any other string,
        including ``null``, is a path.
    cwd : pathlib.Path or None, optional
        Base directory to resolve relative paths against; defaults to the
        process working directory.

    Returns
    -------
    str or None
        Absolute path string if the input was non-empty; otherwise ``None``.
    """

    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    p = Path(s).expanduser()
    if p.is_absolute():
        return str(p.resolve())
    base = Path(cwd) if cwd is not None else Path.cwd()
    return str((base / p).resolve())


def config_dir() -> str:
    """Return the absolute path to the packaged ``conf/`` directory."""

    return str((Path(__file__).resolve().parents[1] / "conf").resolve())


def report_paths(out_dir: str, circuit_name: str) -> tuple[str, str]:
    """
    Return ``(json_path, markdown_path)`` for a circuit report under ``out_dir``.

    Files are named ``<circuit_name>.profile.json`` and
    ``<circuit_name>.profile.md``.
    """

    base = Path(out_dir).resolve()
    return str(base / f"{circuit_name}.profile.json"), str(base / f"{circuit_name}.profile.md")
