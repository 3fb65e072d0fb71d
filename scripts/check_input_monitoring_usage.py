#!/usr/bin/env python3
"""Check that the built Hermes.app declares NSInputMonitoringUsageDescription.

Usage:
    python3 scripts/check_input_monitoring_usage.py
    BUILT_PRODUCTS_DIR=build/Release FULL_PRODUCT_NAME=Hermes.app \\
      python3 scripts/check_input_monitoring_usage.py --json

Outputs a JSON report to stdout, log messages to stderr.
Exit code 0 when the check passes, 1 otherwise.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from hermes_check.io_utils import dump_json, save_json
from hermes_check.verdict import run_check

log = logging.getLogger("check_input_monitoring_usage")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check Hermes.app Info.plist for an Input Monitoring usage description",
    )
    parser.add_argument(
        "--executable",
        type=Path,
        default=None,
        help="Treat this path as the running binary when locating the sibling Hermes.app",
    )
    parser.add_argument("--json", action="store_true", help="Print the full report")
    parser.add_argument("--report", type=Path, default=None, help="Also write the full report here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    verdict = run_check(os.environ, args.executable)
    payload = verdict.to_payload()
    if verdict.ok:
        log.info("PASS: %s present in %s", verdict.key, verdict.bundle_path)
    else:
        log.error("FAIL (%s): %s", verdict.stage, verdict.message)

    if args.report is not None:
        save_json(payload, args.report)
    dump_json(
        payload if args.json
        else {"status": payload["status"], "stage": verdict.stage, "message": verdict.message},
    )
    return 0 if verdict.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
