#!/usr/bin/env python3
"""Match a processed genome database against a ClinVar annotation database."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from snpmatch import (  # noqa: E402
    AnalysisConfig,
    AnalysisConfigLoader,
    BatchingPolicy,
    SerializationError,
    SnpMatchError,
    analyze_genome_database,
    result_to_json,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run ClinVar matching for a genome database")
    parser.add_argument("--user-db", required=True, help="DuckDB database from process_genome.py")
    parser.add_argument("--clinvar-db", required=True, help="DuckDB annotation database")
    parser.add_argument("--config", help="Analysis config name or JSON path")
    parser.add_argument("--batch-size", type=int, help="Override keys per annotation query")
    parser.add_argument("--output", help="Write JSON here instead of stdout")
    parser.add_argument("--indent", type=int, default=2)
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
    logger = logging.getLogger("snpmatch.analyze")

    try:
        config = AnalysisConfigLoader().load(args.config) if args.config else AnalysisConfig()
        if args.batch_size is not None:
            config = replace(config, batching=BatchingPolicy(max_keys=args.batch_size))

        result = analyze_genome_database(args.user_db, args.clinvar_db, config=config)
        payload = result_to_json(result, indent=args.indent)
    except SerializationError as exc:
        logger.error("Serialization failed: %s", exc)
        return 3
    except SnpMatchError as exc:
        logger.error("Analysis failed: %s", exc)
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload + "\n", encoding="utf-8")
        logger.info(
            "Wrote %d matches across %d genes to %s",
            result.matches_found,
            len(result.gene_groups),
            output_path,
        )
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
