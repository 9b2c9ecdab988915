"""In-memory stores for tests and small embedded annotation sets."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from snpmatch.config import RSID_PREFIX, SQLITE_MAX_VARIABLE_NUMBER
from snpmatch.models import AnnotationRecord, VariantRecord
from snpmatch.stores.base import AnnotationStore, VariantStore


class InMemoryAnnotationStore(AnnotationStore):
    """Annotation store backed by a list; records each query for inspection."""

    def __init__(
        self,
        records: Iterable[AnnotationRecord] = (),
        *,
        max_keys: int = SQLITE_MAX_VARIABLE_NUMBER,
    ) -> None:
        self.records = list(records)
        self.max_keys = max_keys
        self.queries: list[list[str]] = []
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        self._open = True

    def close(self) -> None:
        self._open = False

    def _query(self, keys: Sequence[str]) -> list[AnnotationRecord]:
        self.queries.append(list(keys))
        wanted = set(keys)
        return [record for record in self.records if record.snp_id in wanted]


class InMemoryVariantStore(VariantStore):
    """Variant store over parsed records, keeping their insertion sequence."""

    def __init__(self, records: Iterable[VariantRecord] = ()) -> None:
        self.records = list(records)
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        self._open = True

    def close(self) -> None:
        self._open = False

    def iter_rsid_genotypes(self) -> Iterable[tuple[str, str]]:
        rows = [
            (record.snp_id, sequence, record.genotype)
            for sequence, record in enumerate(self.records)
            if record.snp_id and record.snp_id.startswith(RSID_PREFIX)
        ]
        rows.sort(key=lambda row: (row[0], row[1]))
        return [(snp_id, genotype) for snp_id, _, genotype in rows]
