"""Command-line entry point for the guideline scanner."""

from __future__ import annotations

import argparse
import dataclasses
import json
from pathlib import Path
from typing import List

from . import orchestrator
from .config import DEFAULT_CONFIG_FILENAME, ScanConfig, load_config
from .errors import ConfigurationError
from .logging import init_logging
from .report import aggregate, format_summary_table
from .result import ScanResult
from .utils import iter_code_files

DEFAULT_PATHS = (".",)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guidelint",
        description="Scan source files for coding guideline violations",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to scan (defaults to the current directory).",
    )
    parser.add_argument(
        "--ext",
        dest="extensions",
        action="append",
        default=[],
        help="File extension to include when walking directories (repeatable, e.g. .cs).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"YAML configuration file (defaults to ./{DEFAULT_CONFIG_FILENAME} when present).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the JSON report (e.g., artifacts/guidelint.json).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files to scan concurrently (overrides the config file).",
    )
    parser.add_argument(
        "--log-style",
        choices=["auto", "json", "pretty"],
        default="auto",
        help="Log output format on stderr.",
    )
    return parser


def resolve_config(config_path: str | None) -> ScanConfig:
    if config_path:
        return load_config(config_path)
    default = Path(DEFAULT_CONFIG_FILENAME)
    if default.is_file():
        return load_config(default)
    return ScanConfig()


def run_scan(paths: List[str], config: ScanConfig) -> ScanResult:
    files = list(iter_code_files(paths, extensions=config.extensions, exclude_dirs=config.exclude_dirs))
    return orchestrator.run(files, config=config)


def write_output(result: ScanResult, output_path: str | None) -> None:
    print(format_summary_table(result))

    report = result.to_dict()
    report["report"] = aggregate(result).to_dict()
    payload = json.dumps(report, indent=2)
    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload, encoding="utf-8")
        print(f"\nReport written to {output_path}")
    else:
        print("\nJSON Report")
        print(payload)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    init_logging(args.log_style)

    try:
        config = resolve_config(args.config)
    except ConfigurationError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc

    overrides = {}
    if args.extensions:
        overrides["extensions"] = tuple(ext if ext.startswith(".") else f".{ext}" for ext in args.extensions)
    if args.workers is not None:
        if args.workers < 1:
            parser.error("--workers must be a positive integer")
        overrides["max_workers"] = args.workers
    if overrides:
        config = dataclasses.replace(config, **overrides)

    result = run_scan(args.paths or list(DEFAULT_PATHS), config)
    write_output(result, args.output_path)
    return result.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
