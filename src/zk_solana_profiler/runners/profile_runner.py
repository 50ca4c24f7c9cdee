"""Circuit profiling pipeline.

Composes artifact discovery, metric extraction, the cost model and the
classifier into one :class:`~zk_solana_profiler.data.models.ProfileResult`:

    Locate -> Extract -> Model -> Classify -> Assemble

Configuration is composed via Hydra from the packaged ``conf/profiler.yaml``
and converted to :class:`ProfilerSettings`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from hydra import compose, initialize_config_dir
from omegaconf import DictConfig

from zk_solana_profiler.data.models import (
    CircuitArtifactSet,
    Classification,
    CostEstimate,
    ExtractedMetrics,
    ProfileOptions,
    ProfileResult,
)
from zk_solana_profiler.profiling.artifacts import ArtifactSource, locate_artifacts
from zk_solana_profiler.profiling.classify import classify
from zk_solana_profiler.profiling.cost_model import estimate_costs, estimate_rent
from zk_solana_profiler.profiling.extract import extract_metrics
from zk_solana_profiler.profiling.settings import ProfilerSettings
from zk_solana_profiler.utils.paths import config_dir

logger = logging.getLogger(__name__)


def load_config(overrides: List[str] | None = None, *, config_name: str = "profiler") -> DictConfig:
    """Compose the profiler config from the packaged ``conf/`` directory.

    Parameters
    ----------
    overrides : list of str or None, optional
        Hydra override strings (e.g., ``limits.tx_max_bytes=1300``).
    config_name : str, default 'profiler'
        Config file name (without ``.yaml``) inside ``conf/``.
    """

    overrides = overrides or []
    with initialize_config_dir(config_dir=config_dir(), version_base=None):
        cfg: DictConfig = compose(config_name=str(config_name), overrides=overrides)
    return cfg


def assemble_result(
    artifacts: CircuitArtifactSet,
    metrics: ExtractedMetrics,
    cost: CostEstimate,
    verdict: Classification,
    vk_rent_estimate_sol: Optional[float],
) -> ProfileResult:
    """Merge pipeline outputs into a :class:`ProfileResult` (no extra computation)."""

    return ProfileResult(
        circuit_name=artifacts.circuit_name,
        proof_bytes=metrics.proof_bytes,
        public_witness_bytes=metrics.public_witness_bytes,
        instruction_data_bytes=verdict.instruction_data_bytes,
        effective_instruction_limit=verdict.effective_instruction_limit,
        public_input_count=metrics.public_input_count,
        constraint_count=metrics.constraint_count,
        total_cu=cost.total_cu,
        priority_fees=cost.priority_fees,
        vk_rent_estimate_sol=vk_rent_estimate_sol,
        witness_bytes=metrics.witness_bytes,
        acir_bytes=metrics.acir_bytes,
        fits_in_solana_tx=verdict.fits_in_solana_tx,
        status=verdict.status,
        warnings=verdict.warnings,
    )


class CircuitProfiler:
    """Profile compiled circuits against Solana verification limits.

    Holds only immutable settings, so one instance may profile any number of
    circuits, sequentially or from several threads.

    Examples
    --------
    >>> profiler = CircuitProfiler.from_config(load_config())
    >>> result = profiler.run("circuits/one")  # doctest: +SKIP
    """

    def __init__(self, settings: Optional[ProfilerSettings] = None, source: Optional[ArtifactSource] = None) -> None:
        self.m_settings = settings or ProfilerSettings()
        self.m_source = source

    @property
    def settings(self) -> ProfilerSettings:
        """Active limits and cost constants (read-only)."""

        return self.m_settings

    @classmethod
    def from_config(cls, cfg: DictConfig, source: Optional[ArtifactSource] = None) -> "CircuitProfiler":
        """Factory building a profiler from a composed config."""

        return cls(ProfilerSettings.from_config(cfg), source)

    def run(self, circuit_root: Path | str, options: Optional[ProfileOptions] = None) -> ProfileResult:
        """Profile one circuit project root.

        Raises
        ------
        MissingBuildOutput, NoProofArtifact, RequiredArtifactMissing
            When the build directory or a required artifact is missing.
        """

        opts = options or ProfileOptions()
        s = self.m_settings

        artifacts = locate_artifacts(
            circuit_root,
            opts.circuit_name,
            source=self.m_source,
            build_dir=s.build_dir,
        )
        metrics = extract_metrics(artifacts, self.m_source, field_element_bytes=s.field_element_bytes)
        cost = estimate_costs(metrics, s)
        rent = estimate_rent(metrics.vk_bytes, sol_per_kb=s.rent_sol_per_kb, decimals=s.rent_decimals)
        verdict = classify(metrics, cost, opts.uses_alt, s)

        result = assemble_result(artifacts, metrics, cost, verdict, rent)
        logger.info(
            "Profiled %s | status=%s instruction_bytes=%d limit=%d total_cu=%d warnings=%d",
            result.circuit_name,
            result.status,
            result.instruction_data_bytes,
            result.effective_instruction_limit,
            result.total_cu,
            len(result.warnings),
        )
        return result

    def run_many(self, circuit_roots: Iterable[Path | str], options: Optional[ProfileOptions] = None) -> list[ProfileResult]:
        """Profile several circuit roots independently, preserving input order."""

        return [self.run(root, options) for root in circuit_roots]


def profile(
    circuit_root: Path | str,
    options: Optional[ProfileOptions] = None,
    *,
    settings: Optional[ProfilerSettings] = None,
    source: Optional[ArtifactSource] = None,
) -> ProfileResult:
    """Profile one circuit with default (or given) settings.

    Parameters
    ----------
    circuit_root : Path or str
        Circuit project root containing ``target/``.
    options : ProfileOptions or None, optional
        ALT mode and explicit circuit name.
    settings : ProfilerSettings or None, optional
        Limit and cost-model overrides.
    source : ArtifactSource or None, optional
        File access backend; defaults to the local filesystem.
    """

    return CircuitProfiler(settings, source).run(circuit_root, options)


def profile_many(
    circuit_roots: Iterable[Path | str],
    options: Optional[ProfileOptions] = None,
    *,
    settings: Optional[ProfilerSettings] = None,
    source: Optional[ArtifactSource] = None,
) -> list[ProfileResult]:
    """Profile several circuits; results follow input order."""

    return CircuitProfiler(settings, source).run_many(circuit_roots, options)
