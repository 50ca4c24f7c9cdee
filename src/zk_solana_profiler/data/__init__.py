"""Domain models for ``zk_solana_profiler``.

This package hosts the attrs-based records flowing through the profiling
pipeline (artifact set, metrics, cost estimate, classification, result).
"""

from __future__ import annotations

from .models import (
    PROFILE_STATUSES,
    FeeQuotes,
    CircuitArtifactSet,
    Classification,
    CostEstimate,
    ExtractedMetrics,
    ProfileOptions,
    ProfileResult,
    ProfileStatus,
)

__all__ = [
    "PROFILE_STATUSES",
    "FeeQuotes",
    "CircuitArtifactSet",
    "Classification",
    "CostEstimate",
    "ExtractedMetrics",
    "ProfileOptions",
    "ProfileResult",
    "ProfileStatus",
]
