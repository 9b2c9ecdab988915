"""Canonical in-memory data models used by snpmatch."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any


@dataclass(frozen=True)
class VariantRecord:
    """Single normalized genotype call from a consumer export.

    ``snp_id`` is only set for ``rs``-prefixed identifiers; vendor-internal
    markers (for example ``i3000001``) keep their coordinates but no id.
    """

    snp_id: str | None
    chromosome: str
    position: int
    genotype: str
    source_format: str

    def to_row(self) -> dict[str, Any]:
        """Serialize into a plain dict for storage backends."""

        return {
            "rsid": self.snp_id,
            "chromosome": self.chromosome,
            "position": self.position,
            "genotype": self.genotype,
            "source_format": self.source_format,
        }


@dataclass(frozen=True)
class ParseIssue:
    """A non-fatal problem with one input line."""

    line_number: int
    message: str


@dataclass(frozen=True)
class GenomeMetadata:
    """Summary of one parsed genome file."""

    file_name: str
    source_format: str
    total_variants: int
    rsid_count: int
    parse_errors: int = 0
    assembly: str | None = None


@dataclass
class ParseResult:
    """Parsed variants plus diagnostics for skipped rows."""

    metadata: GenomeMetadata
    variants: list[VariantRecord] = field(default_factory=list)
    issues: list[ParseIssue] = field(default_factory=list)


@dataclass(frozen=True)
class AnnotationRecord:
    """Clinical annotation row as held by the reference store."""

    snp_id: str
    chromosome: str
    position: int
    reference_allele: str
    alternate_allele: str
    gene: str
    clinical_significance_raw: str
    review_status: str
    condition: str

    def to_row(self) -> dict[str, Any]:
        """Serialize into the annotation-store column layout."""

        return {
            "rsid": self.snp_id,
            "chrom": self.chromosome,
            "pos": self.position,
            "ref": self.reference_allele,
            "alt": self.alternate_allele,
            "gene": self.gene,
            "clnsig": self.clinical_significance_raw,
            "clnrevstat": self.review_status,
            "condition": self.condition,
        }


@dataclass(frozen=True)
class MatchedVariant(AnnotationRecord):
    """Annotation row enriched with the genotype the user carries there."""

    user_genotype: str | None = None

    @classmethod
    def from_annotation(
        cls,
        annotation: AnnotationRecord,
        user_genotype: str | None,
    ) -> MatchedVariant:
        values = {item.name: getattr(annotation, item.name) for item in fields(AnnotationRecord)}
        return cls(**values, user_genotype=user_genotype)


@dataclass
class GeneGroup:
    """All matched variants that fall within one gene, with summary stats."""

    gene: str
    variants: list[MatchedVariant]
    most_significant_label: str
    significance_rank: int
    pathogenic_count: int
    likely_pathogenic_count: int
    uncertain_count: int
    conflicting_count: int
    total_variants: int
    unique_identifier_count: int
    conditions: list[str] = field(default_factory=list)


@dataclass
class AnalysisResult:
    """Terminal output of one analysis run."""

    matches: list[MatchedVariant]
    gene_groups: list[GeneGroup]
    identifiers_searched: int
    matches_found: int
