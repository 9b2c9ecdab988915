"""Batched lookup of user identifiers against a clinical annotation store."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence

from snpmatch.config import BatchingPolicy
from snpmatch.errors import StoreQueryError
from snpmatch.models import AnnotationRecord, MatchedVariant
from snpmatch.significance import significance_rank
from snpmatch.stores.base import AnnotationStore, opened

logger = logging.getLogger(__name__)


def chunk_keys(keys: Sequence[str], size: int) -> Iterator[list[str]]:
    """Yield consecutive slices of ``keys`` holding at most ``size`` items."""

    if size < 1:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(keys), size):
        yield list(keys[start : start + size])


def order_chunk(rows: Sequence[AnnotationRecord]) -> list[AnnotationRecord]:
    """Most clinically significant first, then by gene; stable otherwise."""

    return sorted(rows, key=lambda row: (significance_rank(row.clinical_significance_raw), row.gene))


class BatchedMatcher:
    """Match a key/genotype index against an annotation store.

    Keys are sent in chunks no larger than the batching policy (and the
    store's own limit). Each chunk's rows are ordered by significance rank
    then gene; chunks are concatenated in issue order without a global sort.
    Any store failure aborts the whole match.
    """

    def __init__(
        self,
        store: AnnotationStore,
        *,
        batching: BatchingPolicy | None = None,
    ) -> None:
        self.store = store
        self.batching = batching or BatchingPolicy()

    @property
    def chunk_size(self) -> int:
        return min(self.batching.max_keys, self.store.max_keys)

    def match(self, index: Mapping[str, str]) -> list[MatchedVariant]:
        keys = list(index.keys())
        results: list[MatchedVariant] = []

        if not keys:
            return results

        with opened(self.store):
            for chunk_number, chunk in enumerate(chunk_keys(keys, self.chunk_size), start=1):
                rows = self._query_chunk(chunk, chunk_number)
                logger.debug("Chunk %d: %d keys -> %d rows", chunk_number, len(chunk), len(rows))
                for row in order_chunk(rows):
                    results.append(MatchedVariant.from_annotation(row, index.get(row.snp_id)))

        return results

    def _query_chunk(self, chunk: list[str], chunk_number: int) -> list[AnnotationRecord]:
        try:
            rows = self.store.query(chunk)
        except StoreQueryError:
            raise
        except Exception as exc:
            raise StoreQueryError(f"Annotation query for chunk {chunk_number} failed: {exc}") from exc

        requested = set(chunk)
        unexpected = sorted({row.snp_id for row in rows if row.snp_id not in requested})
        if unexpected:
            raise StoreQueryError(
                f"Annotation store returned identifiers that were not requested: {unexpected[:5]}"
            )
        return rows
