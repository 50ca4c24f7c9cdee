"""Command-line entry point for Solana ZK circuit profiling.

Usage::

    zk-profiler circuits/one
    zk-profiler circuits/one --alt --json-out tmp/one.profile.json
    zk-profiler circuits/one --out-dir reports
    zk-profiler circuits/one --override limits.tx_max_bytes=1300

Exit codes: ``0`` for PASS/WARN, ``2`` for FAIL, ``1`` for profiling errors
or invalid configuration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from hydra.errors import HydraException

from zk_solana_profiler.data.models import ProfileOptions
from zk_solana_profiler.profiling.errors import ProfilerError
from zk_solana_profiler.profiling.export import render_console_report, write_report_json, write_report_markdown
from zk_solana_profiler.runners.profile_runner import CircuitProfiler, load_config
from zk_solana_profiler.utils.paths import report_paths, resolve_user_path

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FAIL = 2


def _validate_overrides(values: list[str] | None) -> list[str]:
    if not values:
        return []
    for item in values:
        if "=" not in item:
            raise ValueError(f"Invalid override (expected key=value): {item!r}")
    return list(values)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="zk-profiler",
        description="Estimate whether a circuit's proof can be verified within Solana transaction limits.",
    )
    parser.add_argument("circuit_root", type=str, help="Circuit project root containing target/.")
    parser.add_argument("--alt", action="store_true", help="Assume an address lookup table (750-byte budget).")
    parser.add_argument("--circuit-name", type=str, default=None, help="Circuit to pick when target/ holds several proofs.")
    parser.add_argument("--json-out", type=str, default=None, help="Write the JSON report to this path.")
    parser.add_argument("--md-out", type=str, default=None, help="Write a Markdown report to this path.")
    parser.add_argument(
        "--out-dir",
        type=str,
        default=None,
        help="Write <circuit>.profile.json and <circuit>.profile.md into this directory.",
    )
    parser.add_argument(
        "--override",
        action="append",
        default=None,
        help="Config override in key=value form (e.g., limits.tx_max_bytes=1300). May be repeated.",
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level (default: WARNING).")
    return parser.parse_args(argv)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    _setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        cfg = load_config(_validate_overrides(args.override))
        profiler = CircuitProfiler.from_config(cfg)
    except (ValueError, TypeError, KeyError, HydraException) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_ERROR

    circuit_root = resolve_user_path(args.circuit_root)
    if circuit_root is None:
        print("Profiling failed: circuit root must be a non-empty path", file=sys.stderr)
        return EXIT_ERROR

    options = ProfileOptions(uses_alt=bool(args.alt or cfg.get("uses_alt", False)), circuit_name=args.circuit_name)
    try:
        result = profiler.run(circuit_root, options)
    except ProfilerError as exc:
        print(f"Profiling failed: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print(render_console_report(result, profiler.settings.high_cu_threshold))
    print()

    json_out = resolve_user_path(args.json_out)
    md_out = resolve_user_path(args.md_out)
    out_dir = resolve_user_path(args.out_dir)
    if out_dir:
        json_out, md_out = report_paths(out_dir, result.circuit_name)

    if json_out:
        write_report_json(result, json_out)
        logger.info("Wrote JSON report to %s", json_out)
    if md_out:
        write_report_markdown(result, md_out)
        logger.info("Wrote Markdown report to %s", md_out)

    return EXIT_FAIL if result.status == "FAIL" else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
