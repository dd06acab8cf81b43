#!/usr/bin/env python3
"""Local CLI entrypoint to validate VPM package manifests.

Usage:
  python scripts/scan.py --root . [--index path_or_url ...] [--refresh] [--warn-only]

Exit codes: 0 clean, 10 when any manifest has errors, 1 when an index or
the settings file cannot be loaded.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from vpm_validator.core import scan_repository
from vpm_validator.ingestion import ConfigError, IndexFeedError
from vpm_validator.summary import render_summary


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "y"}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--root", type=Path, default=Path("."))
    parser.add_argument(
        "--index",
        dest="index_sources",
        action="append",
        default=None,
        help="VPM index URL or path (repeatable); overrides the configured indices",
    )
    parser.add_argument("--settings", type=Path, default=None)
    parser.add_argument("--cache", type=Path, default=None)
    parser.add_argument("--refresh", action="store_true", help="Re-fetch configured indices")
    parser.add_argument(
        "--summary",
        type=Path,
        default=os.getenv("GITHUB_STEP_SUMMARY") or None,
        help="Append a Markdown summary to this file",
    )
    parser.add_argument("--warn-only", action="store_true")
    args = parser.parse_args(argv)

    try:
        report = scan_repository(
            args.root,
            args.index_sources,
            settings_path=args.settings,
            cache_path=args.cache,
            refresh=args.refresh,
        )
    except (ConfigError, IndexFeedError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(report, indent=2))

    if args.summary:
        with Path(args.summary).open("a", encoding="utf-8") as fh:
            fh.write(render_summary(report))

    # Default behavior: fail on errors unless --warn-only or env override set
    if report.get("hasErrors"):
        if args.warn_only or _env_flag("VPM_VALIDATOR_WARN_ONLY"):
            return 0
        return 10

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
