"""Gene-level aggregation of matched variants."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from snpmatch.config import CONDITION_PLACEHOLDERS, UNKNOWN_GENE
from snpmatch.models import GeneGroup, MatchedVariant
from snpmatch.significance import (
    is_conflicting,
    is_likely_pathogenic,
    is_uncertain,
    mentions_pathogenic,
    significance_label,
    significance_rank,
)


class GeneAggregator:
    """Group matches by gene and rank the groups.

    The four significance counters are independent substring tests, so one
    variant may contribute to several of them. A group's representative is
    its lowest-rank variant, earliest in input order on ties.
    """

    def __init__(
        self,
        *,
        unknown_gene_label: str = UNKNOWN_GENE,
        max_conditions: int = 3,
        condition_placeholders: Iterable[str] = CONDITION_PLACEHOLDERS,
    ) -> None:
        self.unknown_gene_label = unknown_gene_label
        self.max_conditions = max_conditions
        self.condition_placeholders = frozenset(condition_placeholders)

    def aggregate(self, matches: Iterable[MatchedVariant]) -> list[GeneGroup]:
        by_gene: dict[str, list[MatchedVariant]] = {}
        for variant in matches:
            gene = variant.gene or self.unknown_gene_label
            by_gene.setdefault(gene, []).append(variant)

        groups = [self._build_group(gene, variants) for gene, variants in by_gene.items()]
        groups.sort(key=lambda group: (group.significance_rank, group.gene))
        return groups

    def _build_group(self, gene: str, variants: list[MatchedVariant]) -> GeneGroup:
        significances = [variant.clinical_significance_raw for variant in variants]
        representative = min(significances, key=significance_rank)

        return GeneGroup(
            gene=gene,
            variants=list(variants),
            most_significant_label=significance_label(representative),
            significance_rank=significance_rank(representative),
            pathogenic_count=sum(1 for sig in significances if mentions_pathogenic(sig)),
            likely_pathogenic_count=sum(1 for sig in significances if is_likely_pathogenic(sig)),
            uncertain_count=sum(1 for sig in significances if is_uncertain(sig)),
            conflicting_count=sum(1 for sig in significances if is_conflicting(sig)),
            total_variants=len(variants),
            unique_identifier_count=len({variant.snp_id for variant in variants}),
            conditions=self._conditions(variants),
        )

    def _conditions(self, variants: Sequence[MatchedVariant]) -> list[str]:
        distinct = {
            variant.condition.replace("_", " ")
            for variant in variants
            if variant.condition and variant.condition not in self.condition_placeholders
        }
        return sorted(distinct)[: self.max_conditions]


def group_variants_by_gene(matches: Iterable[MatchedVariant]) -> list[GeneGroup]:
    """Aggregate with default settings."""

    return GeneAggregator().aggregate(matches)
