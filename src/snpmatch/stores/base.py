"""Capability interfaces for the stores the pipeline reads and writes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

from snpmatch.config import SQLITE_MAX_VARIABLE_NUMBER
from snpmatch.errors import StoreQueryError
from snpmatch.models import AnnotationRecord, ParseResult


class Store(ABC):
    """Open/close lifecycle shared by all read-side stores."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True between a successful ``open`` and ``close``."""

    @abstractmethod
    def open(self) -> None:
        """Acquire the backing connection. Idempotent."""

    @abstractmethod
    def close(self) -> None:
        """Release the backing connection. Idempotent."""

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


StoreT = TypeVar("StoreT", bound=Store)


@contextmanager
def opened(store: StoreT) -> Iterator[StoreT]:
    """Ensure ``store`` is open, closing it afterwards only if we opened it."""

    if store.is_open:
        yield store
        return

    store.open()
    try:
        yield store
    finally:
        store.close()


class AnnotationStore(Store):
    """Read-only clinical annotation set queried by rs identifier."""

    max_keys: int = SQLITE_MAX_VARIABLE_NUMBER

    def query(self, keys: Sequence[str]) -> list[AnnotationRecord]:
        """Return every annotation row whose identifier is in ``keys``.

        Unknown keys yield no rows. Row order is backend-defined.
        """

        if len(keys) > self.max_keys:
            raise StoreQueryError(
                f"Query carries {len(keys)} keys; store accepts at most {self.max_keys}"
            )
        if not self.is_open:
            raise StoreQueryError(f"{type(self).__name__} is not open")
        if not keys:
            return []
        return self._query(keys)

    @abstractmethod
    def _query(self, keys: Sequence[str]) -> list[AnnotationRecord]:
        """Backend-specific lookup; ``keys`` is non-empty and within bounds."""


class VariantStore(Store):
    """Persisted user variants, read back as identifier/genotype pairs."""

    @abstractmethod
    def iter_rsid_genotypes(self) -> Iterable[tuple[str, str]]:
        """Yield ``(rsid, genotype)`` for ``rs`` identifiers.

        Rows come ordered by identifier, then by insertion sequence, so that
        last-write-wins resolution is reproducible.
        """


class GenomeStorage(ABC):
    """Persists a parsed genome for later analysis."""

    @abstractmethod
    def persist(self, result: ParseResult, *, name: str) -> Path:
        """Persist parsed variants into a new location and return it.

        Raises ``FileExistsError`` rather than replacing an existing genome.
        """


class AnnotationStorage(ABC):
    """Loads annotation records into a queryable store."""

    @abstractmethod
    def persist(self, records: Iterable[AnnotationRecord]) -> int:
        """Persist records and return how many were written."""
