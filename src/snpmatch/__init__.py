"""Core snpmatch pipeline primitives.

This package parses consumer genotype exports, matches their rs identifiers
against a clinical annotation store in bounded batches, and aggregates the
matches per gene.
"""

from .aggregation import GeneAggregator, group_variants_by_gene
from .config import (
    SQLITE_MAX_VARIABLE_NUMBER,
    AnalysisConfig,
    AnalysisConfigLoader,
    BatchingPolicy,
    ParserSettings,
)
from .errors import (
    ArchiveMemberNotFoundError,
    ConfigurationError,
    InputError,
    SerializationError,
    SnpMatchError,
    StoreQueryError,
)
from .index import KeyGenotypeIndex, build_key_index, build_key_index_from_store
from .matcher import BatchedMatcher, chunk_keys
from .models import (
    AnalysisResult,
    AnnotationRecord,
    GeneGroup,
    GenomeMetadata,
    MatchedVariant,
    ParseIssue,
    ParseResult,
    VariantRecord,
)
from .parsers import GenomeParser, TwentyThreeAndMeParser, read_genome_text
from .pipeline import AnalysisPipeline, ProcessReport, analyze_genome_database, process_genome_file
from .serialization import result_from_json, result_to_dict, result_to_json
from .significance import rank_and_label, significance_label, significance_rank

__all__ = [
    "AnalysisConfig",
    "AnalysisConfigLoader",
    "AnalysisPipeline",
    "AnalysisResult",
    "AnnotationRecord",
    "ArchiveMemberNotFoundError",
    "BatchedMatcher",
    "BatchingPolicy",
    "ConfigurationError",
    "GeneAggregator",
    "GeneGroup",
    "GenomeMetadata",
    "GenomeParser",
    "InputError",
    "KeyGenotypeIndex",
    "MatchedVariant",
    "ParseIssue",
    "ParseResult",
    "ParserSettings",
    "ProcessReport",
    "SQLITE_MAX_VARIABLE_NUMBER",
    "SerializationError",
    "SnpMatchError",
    "StoreQueryError",
    "TwentyThreeAndMeParser",
    "VariantRecord",
    "analyze_genome_database",
    "build_key_index",
    "build_key_index_from_store",
    "chunk_keys",
    "group_variants_by_gene",
    "process_genome_file",
    "rank_and_label",
    "read_genome_text",
    "result_from_json",
    "result_to_dict",
    "result_to_json",
    "significance_label",
    "significance_rank",
]
