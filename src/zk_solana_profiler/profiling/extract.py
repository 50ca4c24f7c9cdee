"""Metric extraction from circuit artifacts.

Reads byte sizes and derived counts from a resolved
:class:`~zk_solana_profiler.data.models.CircuitArtifactSet`. The proof and the
public witness are required; every other artifact is optional and degrades to
``None`` when absent or malformed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from zk_solana_profiler.data.models import CircuitArtifactSet, ExtractedMetrics
from zk_solana_profiler.profiling.artifacts import ArtifactSource, FilesystemArtifactSource
from zk_solana_profiler.profiling.errors import RequiredArtifactMissing
from zk_solana_profiler.profiling.settings import FIELD_ELEMENT_BYTES

logger = logging.getLogger(__name__)


def _required_size(source: ArtifactSource, path: Path, role: str) -> int:
    if not source.exists(path):
        raise RequiredArtifactMissing(role, path)
    return source.size(path)


def _size_if_exists(source: ArtifactSource, path: Path) -> Optional[int]:
    if not source.exists(path):
        return None
    return source.size(path)


def count_public_inputs(public_witness_bytes: int, field_element_bytes: int = FIELD_ELEMENT_BYTES) -> int:
    """Return the number of whole field elements in the public witness.

    The remainder is discarded; an empty witness yields ``0``.

    Examples
    --------
    >>> count_public_inputs(200)
    6
    """

    return public_witness_bytes // field_element_bytes


def parse_constraint_count(raw: bytes) -> Optional[int]:
    """Return the length of the ACIR ``constraints`` list, or ``None``.

    ``None`` is returned when the payload is not valid JSON, is not an object,
    or lacks a list-valued ``constraints`` field.
    """

    try:
        doc = json.loads(raw.decode("utf-8"))
    except (ValueError, RecursionError) as exc:
        # ValueError covers bad UTF-8, bad JSON and over-long integer literals
        logger.debug("ACIR could not be decoded: %s", exc)
        return None
    if not isinstance(doc, dict):
        return None
    constraints = doc.get("constraints")
    if not isinstance(constraints, list):
        return None
    return len(constraints)


def extract_metrics(
    artifacts: CircuitArtifactSet,
    source: Optional[ArtifactSource] = None,
    *,
    field_element_bytes: int = FIELD_ELEMENT_BYTES,
) -> ExtractedMetrics:
    """Read sizes and derived counts for a circuit's artifacts.

    Parameters
    ----------
    artifacts : CircuitArtifactSet
        Resolved artifact paths.
    source : ArtifactSource or None, optional
        File access backend; defaults to the local filesystem.
    field_element_bytes : int, default 32
        Width of one serialized public-witness field element.

    Returns
    -------
    ExtractedMetrics
        Metrics with optional fields set to ``None`` when their source is
        missing or unparsable.

    Raises
    ------
    RequiredArtifactMissing
        If the proof or the public-witness file does not exist.
    """

    src = source if source is not None else FilesystemArtifactSource()

    proof_bytes = _required_size(src, artifacts.proof_path, "proof")
    public_witness_bytes = _required_size(src, artifacts.public_witness_path, "public witness")

    acir_bytes: Optional[int] = None
    constraint_count: Optional[int] = None
    if src.exists(artifacts.acir_path):
        raw = src.read_bytes(artifacts.acir_path)
        acir_bytes = len(raw)
        constraint_count = parse_constraint_count(raw)
        if constraint_count is None:
            logger.debug("No constraint count available from %s", str(artifacts.acir_path))

    metrics = ExtractedMetrics(
        proof_bytes=proof_bytes,
        public_witness_bytes=public_witness_bytes,
        witness_bytes=_size_if_exists(src, artifacts.witness_path),
        acir_bytes=acir_bytes,
        vk_bytes=_size_if_exists(src, artifacts.vk_path),
        public_input_count=count_public_inputs(public_witness_bytes, field_element_bytes),
        constraint_count=constraint_count,
    )
    logger.debug("Extracted metrics for %s: %s", artifacts.circuit_name, metrics)
    return metrics
