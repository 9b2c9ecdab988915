import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from snpmatch import (  # noqa: E402
    AnnotationRecord,
    BatchedMatcher,
    BatchingPolicy,
    ConfigurationError,
    StoreQueryError,
    chunk_keys,
)
from snpmatch.stores import InMemoryAnnotationStore  # noqa: E402


def _annotation(snp_id: str, gene: str, clnsig: str, condition: str = "") -> AnnotationRecord:
    return AnnotationRecord(
        snp_id=snp_id,
        chromosome="1",
        position=100,
        reference_allele="A",
        alternate_allele="G",
        gene=gene,
        clinical_significance_raw=clnsig,
        review_status="criteria_provided",
        condition=condition,
    )


def test_chunk_keys_respects_size() -> None:
    chunks = list(chunk_keys([str(i) for i in range(5)], 2))

    assert chunks == [["0", "1"], ["2", "3"], ["4"]]


def test_chunk_keys_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        list(chunk_keys(["a"], 0))


def test_thousand_keys_issue_two_queries() -> None:
    index = {f"rs{i}": "AA" for i in range(1000)}
    store = InMemoryAnnotationStore()

    BatchedMatcher(store).match(index)

    assert [len(keys) for keys in store.queries] == [999, 1]
    assert sorted(key for keys in store.queries for key in keys) == sorted(index)


def test_batching_policy_is_adjustable_and_bounded() -> None:
    index = {f"rs{i}": "AA" for i in range(10)}
    store = InMemoryAnnotationStore()

    BatchedMatcher(store, batching=BatchingPolicy(max_keys=4)).match(index)

    assert [len(keys) for keys in store.queries] == [4, 4, 2]

    with pytest.raises(ConfigurationError):
        BatchingPolicy(max_keys=1000)
    with pytest.raises(ConfigurationError):
        BatchingPolicy(max_keys=0)


def test_store_limit_caps_chunk_size() -> None:
    index = {f"rs{i}": "AA" for i in range(7)}
    store = InMemoryAnnotationStore(max_keys=3)

    BatchedMatcher(store).match(index)

    assert [len(keys) for keys in store.queries] == [3, 3, 1]


def test_results_ordered_within_chunk_and_enriched_with_genotype() -> None:
    store = InMemoryAnnotationStore(
        [
            _annotation("rs1", "TP53", "Benign"),
            _annotation("rs2", "BRCA2", "Uncertain_significance"),
            _annotation("rs3", "BRCA1", "Pathogenic"),
            _annotation("rs2", "ATM", "Uncertain_significance"),
            _annotation("rs9", "MYH7", "Pathogenic"),
        ]
    )
    index = {"rs1": "AG", "rs2": "CC", "rs3": "TT"}

    matches = BatchedMatcher(store).match(index)

    assert [(m.snp_id, m.gene) for m in matches] == [
        ("rs3", "BRCA1"),
        ("rs2", "ATM"),
        ("rs2", "BRCA2"),
        ("rs1", "TP53"),
    ]
    assert [m.user_genotype for m in matches] == ["TT", "CC", "CC", "AG"]


def test_chunks_are_concatenated_without_global_sort() -> None:
    store = InMemoryAnnotationStore(
        [
            _annotation("rs1", "AAA", "Benign"),
            _annotation("rs2", "ZZZ", "Pathogenic"),
        ]
    )
    index = {"rs1": "AA", "rs2": "GG"}

    matches = BatchedMatcher(store, batching=BatchingPolicy(max_keys=1)).match(index)

    assert [m.snp_id for m in matches] == ["rs1", "rs2"]


def test_every_match_identifier_is_in_index() -> None:
    store = InMemoryAnnotationStore([_annotation(f"rs{i}", "G", "Benign") for i in range(50)])
    index = {f"rs{i}": "AA" for i in range(0, 50, 3)}

    matches = BatchedMatcher(store, batching=BatchingPolicy(max_keys=5)).match(index)

    assert {m.snp_id for m in matches} == set(index)
    assert all(m.user_genotype == "AA" for m in matches)


def test_empty_index_issues_no_queries() -> None:
    store = InMemoryAnnotationStore([_annotation("rs1", "G", "Benign")])

    assert BatchedMatcher(store).match({}) == []
    assert store.queries == []


class _FailingStore(InMemoryAnnotationStore):
    def __init__(self, fail_on: int) -> None:
        super().__init__([_annotation("rs0", "G", "Pathogenic")])
        self.fail_on = fail_on

    def _query(self, keys):
        if len(self.queries) + 1 == self.fail_on:
            raise ConnectionError("store went away")
        return super()._query(keys)


def test_failed_chunk_aborts_whole_match() -> None:
    store = _FailingStore(fail_on=2)
    index = {f"rs{i}": "AA" for i in range(5)}

    with pytest.raises(StoreQueryError) as excinfo:
        BatchedMatcher(store, batching=BatchingPolicy(max_keys=2)).match(index)

    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert store.is_open is False


def test_store_rejects_oversized_query() -> None:
    store = InMemoryAnnotationStore(max_keys=2)
    store.open()

    with pytest.raises(StoreQueryError):
        store.query(["rs1", "rs2", "rs3"])
