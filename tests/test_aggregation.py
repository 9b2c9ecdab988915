import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from snpmatch import GeneAggregator, MatchedVariant, group_variants_by_gene  # noqa: E402


def _match(
    snp_id: str,
    gene: str,
    clnsig: str,
    condition: str = "",
    genotype: str = "AG",
) -> MatchedVariant:
    return MatchedVariant(
        snp_id=snp_id,
        chromosome="17",
        position=41_000_000,
        reference_allele="A",
        alternate_allele="G",
        gene=gene,
        clinical_significance_raw=clnsig,
        review_status="reviewed_by_expert_panel",
        condition=condition,
        user_genotype=genotype,
    )


def test_groups_and_orders_by_rank_then_gene() -> None:
    groups = group_variants_by_gene(
        [
            _match("rs1", "BRCA1", "Pathogenic"),
            _match("rs2", "BRCA1", "Uncertain_significance"),
            _match("rs3", "TP53", "Benign"),
        ]
    )

    assert [group.gene for group in groups] == ["BRCA1", "TP53"]

    brca1, tp53 = groups
    assert brca1.pathogenic_count == 1
    assert brca1.uncertain_count == 1
    assert brca1.likely_pathogenic_count == 0
    assert brca1.total_variants == 2
    assert brca1.significance_rank == 1
    assert brca1.most_significant_label == "Pathogenic"

    assert tp53.total_variants == 1
    assert tp53.significance_rank == 5
    assert tp53.most_significant_label == "Benign"


def test_gene_name_breaks_rank_ties_case_sensitively() -> None:
    groups = group_variants_by_gene(
        [
            _match("rs1", "abc", "Benign"),
            _match("rs2", "ZNF", "Benign"),
            _match("rs3", "ABC", "Benign"),
        ]
    )

    assert [group.gene for group in groups] == ["ABC", "ZNF", "abc"]


def test_conditions_are_distinct_cleaned_sorted_and_truncated() -> None:
    conditions = [
        "Hereditary_cancer",
        "Breast_cancer",
        "not_provided",
        "Ovarian_cancer",
        "not_specified",
        "",
        "Fanconi_anemia",
        "Breast_cancer",
        "Anemia",
    ]
    matches = [
        _match(f"rs{i}", "BRCA2", "Pathogenic", condition)
        for i, condition in enumerate(conditions)
    ]

    (group,) = group_variants_by_gene(matches)

    assert group.conditions == ["Anemia", "Breast cancer", "Fanconi anemia"]


def test_empty_gene_grouped_under_unknown() -> None:
    groups = group_variants_by_gene(
        [
            _match("rs1", "", "Pathogenic"),
            _match("rs2", "", "Benign"),
        ]
    )

    assert [group.gene for group in groups] == ["Unknown"]
    assert groups[0].total_variants == 2


def test_counters_are_independent_substring_tests() -> None:
    (group,) = group_variants_by_gene(
        [
            _match("rs1", "MYH7", "Uncertain_significance|Conflicting_interpretations"),
            _match("rs2", "MYH7", "Likely_pathogenic"),
            _match("rs3", "MYH7", "Conflicting_interpretations_of_pathogenicity"),
        ]
    )

    assert group.uncertain_count == 1
    assert group.conflicting_count == 2
    assert group.likely_pathogenic_count == 1
    assert group.pathogenic_count == 1
    assert group.significance_rank == 2
    assert group.most_significant_label == "Likely_pathogenic"


def test_counts_partition_and_total_matches_variants() -> None:
    (group,) = group_variants_by_gene(
        [
            _match("rs1", "LDLR", "Pathogenic"),
            _match("rs1", "LDLR", "Pathogenic"),
            _match("rs2", "LDLR", "Likely_pathogenic"),
            _match("rs3", "LDLR", "Benign"),
        ]
    )

    assert group.total_variants == len(group.variants) == 4
    assert group.unique_identifier_count == 3
    assert group.pathogenic_count == 2


def test_representative_ties_use_first_encountered() -> None:
    (group,) = group_variants_by_gene(
        [
            _match("rs1", "APOE", "Benign"),
            _match("rs2", "APOE", "drug_response"),
        ]
    )

    # Both rank 5; the first one seen supplies the label.
    assert group.significance_rank == 5
    assert group.most_significant_label == "Benign"


def test_aggregator_settings_are_configurable() -> None:
    aggregator = GeneAggregator(
        unknown_gene_label="Intergenic",
        max_conditions=1,
        condition_placeholders=("not_provided",),
    )

    (group,) = aggregator.aggregate(
        [
            _match("rs1", "", "Benign", "not_specified"),
            _match("rs2", "", "Benign", "Zeta_syndrome"),
        ]
    )

    assert group.gene == "Intergenic"
    assert group.conditions == ["Zeta syndrome"]


def test_empty_input_gives_no_groups() -> None:
    assert group_variants_by_gene([]) == []


def test_pathogenicity_wording_hits_pathogenic_and_conflicting_counters() -> None:
    (group,) = group_variants_by_gene(
        [_match("rs1", "KCNQ1", "Conflicting_interpretations_of_pathogenicity")]
    )

    assert group.pathogenic_count == 1
    assert group.conflicting_count == 1
    # Ranking still treats it as conflicting.
    assert group.significance_rank == 4
    assert group.most_significant_label == "Conflicting"
