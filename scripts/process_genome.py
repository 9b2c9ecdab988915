#!/usr/bin/env python3
"""Parse a 23andMe export (.txt or .zip) into a DuckDB genome database."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from snpmatch import AnalysisConfigLoader, SnpMatchError, process_genome_file  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Parse a genome export into a DuckDB database")
    parser.add_argument("--file", required=True, help="23andMe .txt or .zip export")
    parser.add_argument("--output", required=True, help="Output directory (created if missing)")
    parser.add_argument("--name", help="Name for the genome (defaults to the input file stem)")
    parser.add_argument("--config", help="Analysis config name or JSON path")
    parser.add_argument("--json", action="store_true", help="Print a JSON payload instead of the path")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("snpmatch.process_genome")

    input_path = Path(args.file)
    if not input_path.exists():
        logger.error("Input file not found: %s", input_path)
        return 1

    output_dir = Path(args.output)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Failed to create output directory %s: %s", output_dir, exc)
        return 1
    if not output_dir.is_dir():
        logger.error("Output path is not a directory: %s", output_dir)
        return 1

    try:
        config = AnalysisConfigLoader().load(args.config) if args.config else None
        report = process_genome_file(
            input_path,
            output_dir,
            name=args.name,
            config=config,
        )
    except (SnpMatchError, FileExistsError) as exc:
        logger.error("Processing failed: %s", exc)
        return 1

    if args.json:
        payload = {
            "db_path": str(report.db_path),
            "total_variants": report.metadata.total_variants,
            "rsid_count": report.metadata.rsid_count,
            "parse_errors": report.metadata.parse_errors,
        }
        print(json.dumps(payload))
    else:
        print(report.db_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
