"""Composable snpmatch pipelines."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from snpmatch.aggregation import GeneAggregator
from snpmatch.config import AnalysisConfig
from snpmatch.index import build_key_index, build_key_index_from_store
from snpmatch.matcher import BatchedMatcher
from snpmatch.models import AnalysisResult, GenomeMetadata, ParseIssue, VariantRecord
from snpmatch.parsers import TwentyThreeAndMeParser
from snpmatch.stores import (
    AnnotationStore,
    DuckDBAnnotationStore,
    DuckDBGenomeStorage,
    DuckDBVariantStore,
    VariantStore,
)

logger = logging.getLogger(__name__)


@dataclass
class ProcessReport:
    """Summary of parsing and persisting one genome export."""

    db_path: Path
    metadata: GenomeMetadata
    issues: list[ParseIssue] = field(default_factory=list)


class AnalysisPipeline:
    """Run indexing, batched matching and gene aggregation in order."""

    def __init__(
        self,
        *,
        annotation_store: AnnotationStore,
        config: AnalysisConfig | None = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self.matcher = BatchedMatcher(annotation_store, batching=self.config.batching)
        self.aggregator = GeneAggregator(
            unknown_gene_label=self.config.unknown_gene_label,
            max_conditions=self.config.max_conditions,
            condition_placeholders=self.config.condition_placeholders,
        )

    def run(self, index: Mapping[str, str]) -> AnalysisResult:
        logger.info("Searching %d identifiers", len(index))

        matches = self.matcher.match(index)
        logger.info("Found %d annotation matches", len(matches))

        gene_groups = self.aggregator.aggregate(matches)
        logger.info("Grouped into %d genes", len(gene_groups))

        return AnalysisResult(
            matches=matches,
            gene_groups=gene_groups,
            identifiers_searched=len(index),
            matches_found=len(matches),
        )

    def run_records(self, records: Iterable[VariantRecord]) -> AnalysisResult:
        return self.run(build_key_index(records))

    def run_store(self, variant_store: VariantStore) -> AnalysisResult:
        return self.run(build_key_index_from_store(variant_store))


def analyze_genome_database(
    user_db_path: str | Path,
    clinvar_db_path: str | Path,
    *,
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Analyze a persisted genome against a DuckDB annotation database."""

    config = config or AnalysisConfig()
    pipeline = AnalysisPipeline(
        annotation_store=DuckDBAnnotationStore(db_path=clinvar_db_path),
        config=config,
    )
    return pipeline.run_store(DuckDBVariantStore(db_path=user_db_path))


def process_genome_file(
    input_path: str | Path,
    output_dir: str | Path,
    *,
    name: str | None = None,
    config: AnalysisConfig | None = None,
) -> ProcessReport:
    """Parse a genome export and persist it as a new DuckDB database."""

    config = config or AnalysisConfig()
    input_path = Path(input_path)
    name = name or input_path.stem or "genome"

    parser = TwentyThreeAndMeParser(config.parser)
    result = parser.parse_path(input_path)
    logger.info(
        "Parsed %d variants, %d with rsIDs, %d rows skipped with errors",
        result.metadata.total_variants,
        result.metadata.rsid_count,
        result.metadata.parse_errors,
    )

    db_path = Path(output_dir) / f"{name.replace(' ', '_')}_{int(time.time())}.duckdb"
    DuckDBGenomeStorage(db_path=db_path).persist(result, name=name)

    return ProcessReport(db_path=db_path, metadata=result.metadata, issues=result.issues)
