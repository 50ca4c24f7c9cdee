"""Unit tests for the compute-unit, fee and rent estimators."""

from __future__ import annotations

import pytest

from zk_solana_profiler.data.models import ExtractedMetrics
from zk_solana_profiler.profiling.cost_model import (
    estimate_costs,
    estimate_priority_fees,
    estimate_rent,
    predict_compute_units,
)
from zk_solana_profiler.profiling.settings import FeeTier, ProfilerSettings


def test_compute_units_base_only() -> None:
    assert predict_compute_units() == 150_000
    assert predict_compute_units(None, None) == 150_000
    assert predict_compute_units(0, 0) == 150_000


def test_compute_units_inputs_and_constraints() -> None:
    assert predict_compute_units(6, None) == 222_000
    assert predict_compute_units(2, 35_000) == 150_000 + 24_000 + 3 * 20_000


def test_constraint_buckets_truncate() -> None:
    assert predict_compute_units(0, 9_999) == 150_000
    assert predict_compute_units(0, 10_000) == 170_000
    assert predict_compute_units(0, 10_001) == 170_000
    assert predict_compute_units(0, 19_999) == 170_000


def test_compute_units_monotone() -> None:
    by_inputs = [predict_compute_units(n, 50_000) for n in range(0, 40)]
    by_constraints = [predict_compute_units(4, c) for c in range(0, 200_000, 2_500)]

    assert by_inputs == sorted(by_inputs)
    assert by_constraints == sorted(by_constraints)


def test_fee_tiers_present_in_order() -> None:
    fees = estimate_priority_fees(222_000)
    assert list(fees) == ["low", "medium", "high"]


def test_fee_values_in_sol() -> None:
    fees = estimate_priority_fees(10_000_000)

    # 10M CU * 200 micro-lamports = 2000 lamports = 2e-6 SOL
    assert fees["low"] == pytest.approx(0.000002)
    assert fees["medium"] == pytest.approx(0.000008)
    assert fees["high"] == pytest.approx(0.000025)


def test_fee_rounding_to_six_decimals() -> None:
    fees = estimate_priority_fees(222_000)

    # 222k CU * 2500 = 555 lamports = 5.55e-7 SOL -> 0.000001
    assert fees["high"] == pytest.approx(0.000001)
    assert fees["low"] == 0.0


def test_custom_tier_table() -> None:
    tiers = (FeeTier(name="turbo", micro_lamports_per_cu=100_000), FeeTier(name="low", micro_lamports_per_cu=200))
    fees = estimate_priority_fees(1_000_000, tiers)

    assert list(fees) == ["turbo", "low"]
    assert fees["turbo"] == pytest.approx(0.0001)


def test_rent_estimate() -> None:
    assert estimate_rent(None) is None
    assert estimate_rent(0) == 0.0
    assert estimate_rent(1024) == pytest.approx(0.007)
    assert estimate_rent(2048) == pytest.approx(0.014)
    # 1500 / 1024 * 0.007 = 0.01025... -> 4 decimals
    assert estimate_rent(1500) == pytest.approx(0.0103)


def test_estimate_costs_treats_absent_counts_as_zero() -> None:
    m = ExtractedMetrics(proof_bytes=300, public_witness_bytes=200, public_input_count=None, constraint_count=None)
    cost = estimate_costs(m)

    assert cost.total_cu == 150_000
    assert list(cost.priority_fees) == ["low", "medium", "high"]


def test_estimate_costs_uses_settings() -> None:
    m = ExtractedMetrics(proof_bytes=1, public_witness_bytes=64, public_input_count=2)
    cost = estimate_costs(m, ProfilerSettings(base_verify_cu=100_000, cu_per_public_input=1_000))

    assert cost.total_cu == 102_000
