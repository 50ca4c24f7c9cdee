"""Unit tests for threshold classification."""

from __future__ import annotations

from zk_solana_profiler.data.models import CostEstimate, ExtractedMetrics
from zk_solana_profiler.profiling.classify import classify
from zk_solana_profiler.profiling.settings import ProfilerSettings


def _metrics(proof: int, pw: int, inputs: int | None = None) -> ExtractedMetrics:
    return ExtractedMetrics(proof_bytes=proof, public_witness_bytes=pw, public_input_count=inputs)


def _cost(cu: int = 222_000) -> CostEstimate:
    return CostEstimate(total_cu=cu, priority_fees={"low": 0.0, "medium": 0.0, "high": 0.0})


def test_pass_within_all_limits() -> None:
    v = classify(_metrics(300, 200, 6), _cost())

    assert v.instruction_data_bytes == 500
    assert v.effective_instruction_limit == 900
    assert v.fits_in_solana_tx is True
    assert v.warnings == ()
    assert v.status == "PASS"


def test_alt_mode_tightens_budget() -> None:
    m = _metrics(500, 300, 2)

    off = classify(m, _cost(), uses_alt=False)
    on = classify(m, _cost(), uses_alt=True)

    assert (off.effective_instruction_limit, on.effective_instruction_limit) == (900, 750)
    assert off.status == "PASS"
    assert on.status == "WARN"
    assert on.warnings == ("Instruction data (800 bytes) exceeds ALT-adjusted limit (750)",)
    assert off.fits_in_solana_tx is on.fits_in_solana_tx is True


def test_soft_budget_warning_wording() -> None:
    v = classify(_metrics(800, 200), _cost())
    assert v.warnings == ("Instruction data (1000 bytes) exceeds safe limit (900)",)
    assert v.status == "WARN"


def test_hard_limit_fails_regardless() -> None:
    v = classify(_metrics(1000, 300, 0), _cost(150_000))

    assert v.warnings[:2] == (
        "Instruction data (1300 bytes) exceeds safe limit (900)",
        "Instruction data exceeds MAX Solana TX size (1232)",
    )
    assert v.fits_in_solana_tx is False
    assert v.status == "FAIL"


def test_hard_limit_boundary() -> None:
    at = classify(_metrics(1000, 232), _cost())
    over = classify(_metrics(1000, 233), _cost())

    assert at.fits_in_solana_tx is True
    assert at.status == "WARN"
    assert over.fits_in_solana_tx is False
    assert over.status == "FAIL"


def test_warning_order_all_conditions() -> None:
    v = classify(_metrics(1000, 320, 10), _cost(1_000_000), uses_alt=True)

    assert [w.split(" (")[0] for w in v.warnings] == [
        "Instruction data",
        "Instruction data exceeds MAX Solana TX size",
        "High public input count",
        "High CU usage",
    ]
    assert "ALT-adjusted" in v.warnings[0]
    assert v.status == "FAIL"


def test_public_input_threshold() -> None:
    assert classify(_metrics(100, 256, 8), _cost()).status == "PASS"
    nine = classify(_metrics(100, 288, 9), _cost())
    assert nine.warnings == ("High public input count (9). Consider hashing/packing.",)


def test_absent_public_inputs_never_warn() -> None:
    assert classify(_metrics(100, 100, None), _cost()).warnings == ()


def test_high_compute_warning() -> None:
    assert classify(_metrics(100, 100), _cost(900_000)).status == "PASS"
    v = classify(_metrics(100, 100), _cost(900_001))
    assert v.warnings == ("High CU usage (900001). Priority fees required to land.",)
    assert v.status == "WARN"


def test_settings_override_limits() -> None:
    v = classify(_metrics(1000, 300), _cost(), settings=ProfilerSettings(tx_max_bytes=2000, safe_instruction_bytes=1500))
    assert v.fits_in_solana_tx is True
    assert v.status == "PASS"
