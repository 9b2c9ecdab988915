"""Build the identifier -> genotype lookup used for batched matching."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping

from snpmatch.config import RSID_PREFIX
from snpmatch.models import VariantRecord
from snpmatch.stores.base import VariantStore, opened

logger = logging.getLogger(__name__)


class KeyGenotypeIndex(Mapping[str, str]):
    """Read-only mapping from rs identifier to the user's genotype.

    Iteration follows first-insertion order of each identifier; a later
    duplicate replaces the genotype but keeps the original position.
    """

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        entries: dict[str, str] = {}
        duplicates = 0
        for snp_id, genotype in pairs:
            if not snp_id or not snp_id.startswith(RSID_PREFIX):
                continue
            if snp_id in entries:
                duplicates += 1
            entries[snp_id] = genotype
        self._entries = entries
        self.duplicates = duplicates

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"KeyGenotypeIndex(size={len(self)}, duplicates={self.duplicates})"


def build_key_index(records: Iterable[VariantRecord]) -> KeyGenotypeIndex:
    """Index parsed records; records without an rs identifier are ignored.

    Duplicate identifiers resolve last-write-wins in the order given.
    """

    index = KeyGenotypeIndex(
        (record.snp_id, record.genotype) for record in records if record.snp_id is not None
    )
    if index.duplicates:
        logger.warning("Resolved %d duplicate identifiers (last write wins)", index.duplicates)
    return index


def build_key_index_from_store(store: VariantStore) -> KeyGenotypeIndex:
    """Index the rs identifiers held by a persisted variant store."""

    with opened(store):
        index = KeyGenotypeIndex(store.iter_rsid_genotypes())
    if index.duplicates:
        logger.warning("Resolved %d duplicate identifiers (last write wins)", index.duplicates)
    return index
