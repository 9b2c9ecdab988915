#!/usr/bin/env python3
"""Load ClinVar tabular extracts into a DuckDB annotation database."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from snpmatch.adapters import ClinVarTableReader  # noqa: E402
from snpmatch.stores import DuckDBAnnotationStorage  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a DuckDB ClinVar annotation store")
    parser.add_argument("--input", nargs="+", required=True, help="Files, directories or globs")
    parser.add_argument("--db", required=True, help="Output DuckDB path (replaced if present)")
    parser.add_argument("--table-name", default="variants")
    parser.add_argument("--chunksize", type=int, default=100_000)
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

    reader = ClinVarTableReader(input_paths=args.input, chunksize=args.chunksize)
    if not reader.input_paths:
        raise ValueError("No input files matched --input.")

    written = DuckDBAnnotationStorage(db_path=args.db, table_name=args.table_name).persist(
        reader.read()
    )

    print(
        json.dumps(
            {
                "db_path": str(Path(args.db)),
                "input_files": len(reader.input_paths),
                "rows_written": written,
                "rows_skipped": reader.skipped,
            },
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
