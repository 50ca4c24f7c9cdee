"""Export helpers for circuit profiling reports.

Functions
---------
write_report_json
    Persist a result as the camelCase JSON report contract.
load_report_json
    Read a JSON report back into a :class:`ProfileResult`.
write_report_markdown
    Emit a Markdown report with size, circuit, cost and summary tables.
render_console_report
    Render the human-readable terminal report as a string.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from mdutils.mdutils import MdUtils  # type: ignore[import-untyped]

from zk_solana_profiler.contracts.convert import result_from_contract, result_to_contract
from zk_solana_profiler.data.models import ProfileResult
from zk_solana_profiler.profiling.settings import HIGH_CU_THRESHOLD


def _yes_no(flag: bool) -> str:
    return "✅ YES" if flag else "❌ NO"


def write_report_json(result: ProfileResult, path: str) -> None:
    """Write ``result`` as indented camelCase JSON to ``path``."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(result_to_contract(result), indent=2) + "\n", encoding="utf-8")


def load_report_json(path: str) -> ProfileResult:
    """Load a report previously written by :func:`write_report_json`."""

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return result_from_contract(payload)


def _table(md: MdUtils, header: list[str], rows: list[list[str]]) -> None:
    # mdutils expects a flattened list row-wise (including header)
    data: list[str] = header.copy()
    for r in rows:
        data.extend(r)
    md.new_table(columns=len(header), rows=len(rows) + 1, text=data, text_align="left")


def write_report_markdown(result: ProfileResult, path: str) -> None:
    """Write a Markdown profiling report using mdutils.

    Parameters
    ----------
    result : ProfileResult
        Report to render.
    path : str
        Destination file path. A trailing ``.md`` is stripped to satisfy
        mdutils' file naming (which appends ``.md`` automatically).
    """

    Path(path).parent.mkdir(parents=True, exist_ok=True)
    file_base = path[:-3] if path.endswith(".md") else path
    md = MdUtils(file_name=file_base)
    md.new_header(level=1, title=f"Solana ZK Profiling Report: {result.circuit_name}")
    md.new_list(items=[f"Generated: {datetime.now(timezone.utc).isoformat()}", f"Status: {result.status}"])

    md.new_header(level=2, title="Transaction Size")
    _table(
        md,
        ["Metric", "Value"],
        [
            ["Proof size", f"{result.proof_bytes} bytes"],
            ["Public witness size", f"{result.public_witness_bytes} bytes"],
            ["Instruction data size", f"{result.instruction_data_bytes} bytes"],
            ["Instruction budget", f"{result.effective_instruction_limit} bytes"],
            ["Fits budget", "YES" if result.fits_budget else "NO"],
        ],
    )

    circuit_rows: list[list[str]] = []
    if result.public_input_count is not None:
        circuit_rows.append(["Public inputs", str(result.public_input_count)])
    if result.constraint_count is not None:
        circuit_rows.append(["Constraint count", str(result.constraint_count)])
    if circuit_rows:
        md.new_header(level=2, title="Circuit Characteristics")
        _table(md, ["Metric", "Value"], circuit_rows)

    md.new_header(level=2, title="Compute Cost")
    md.new_paragraph(f"Estimated compute units: {result.total_cu:,}")

    md.new_header(level=2, title="Priority Fee Estimate (SOL)")
    _table(md, ["Tier", "SOL"], [[tier, f"{sol}"] for tier, sol in result.priority_fees.items()])

    if result.vk_rent_estimate_sol is not None:
        md.new_header(level=2, title="Storage (Rent)")
        md.new_paragraph(f"Verification key rent: ~{result.vk_rent_estimate_sol} SOL (one-time)")

    artifact_rows: list[list[str]] = []
    if result.acir_bytes is not None:
        artifact_rows.append(["ACIR size", f"{result.acir_bytes} bytes"])
    if result.witness_bytes is not None:
        artifact_rows.append(["Private witness size", f"{result.witness_bytes} bytes"])
    if artifact_rows:
        md.new_header(level=2, title="Artifact Sizes")
        _table(md, ["Artifact", "Size"], artifact_rows)

    md.new_header(level=2, title="Summary")
    _table(
        md,
        ["Check", "Result"],
        [["Solana tx fit", "YES" if result.fits_in_solana_tx else "NO"], ["Status", result.status]],
    )
    if result.warnings:
        md.new_header(level=2, title="Warnings")
        md.new_list(items=list(result.warnings))

    md.create_md_file()


def render_console_report(result: ProfileResult, high_cu_threshold: int = HIGH_CU_THRESHOLD) -> str:
    """Return the terminal report for ``result`` (no trailing newline)."""

    lines: list[str] = ["", "🔍 Solana ZK Profiling Report", "", f"Circuit: {result.circuit_name}", ""]

    lines.append("📦 Transaction Size")
    lines.append(f"  Proof size:              {result.proof_bytes} bytes")
    lines.append(f"  Public witness size:     {result.public_witness_bytes} bytes")
    lines.append(f"  Instruction data size:   {result.instruction_data_bytes} bytes")
    lines.append(f"  Instruction budget:      {result.effective_instruction_limit} bytes")
    lines.append(f"  Fits budget:             {_yes_no(result.fits_budget)}")

    lines.extend(["", "🧠 Circuit Characteristics"])
    if result.public_input_count is not None:
        lines.append(f"  Public inputs:           {result.public_input_count}")
    if result.constraint_count is not None:
        lines.append(f"  Constraint count:        {result.constraint_count}")

    lines.extend(["", "⚡ Compute Cost"])
    lines.append(f"  Estimated compute units: {result.total_cu:,}")
    if result.total_cu > high_cu_threshold:
        lines.append("  ⚠️  High-CU transaction: priority fee required to land")

    lines.extend(["", "💸 Priority Fee Estimate (SOL)"])
    for tier, sol in result.priority_fees.items():
        lines.append(f"  {tier:<6}: {sol}")

    if result.vk_rent_estimate_sol is not None:
        lines.extend(["", "🏦 Storage (Rent)"])
        lines.append(f"  Verification key rent:   ~{result.vk_rent_estimate_sol} SOL (one-time)")

    lines.extend(["", "📁 Artifact Sizes"])
    if result.acir_bytes is not None:
        lines.append(f"  ACIR size:               {result.acir_bytes} bytes")
    if result.witness_bytes is not None:
        lines.append(f"  Private witness size:    {result.witness_bytes} bytes")

    lines.extend(["", "🧾 Summary"])
    lines.append(f"  Solana tx fit:           {_yes_no(result.fits_in_solana_tx)}")
    lines.append(f"  Status:                  {result.status}")

    if result.warnings:
        lines.extend(["", "⚠️  Warnings:"])
        for w in result.warnings:
            lines.append(f"  - {w}")

    return "\n".join(lines)
