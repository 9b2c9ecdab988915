"""Annotation and genome stores for snpmatch."""

from .base import (
    AnnotationStorage,
    AnnotationStore,
    GenomeStorage,
    Store,
    VariantStore,
    opened,
)
from .duckdb_backend import (
    DuckDBAnnotationStorage,
    DuckDBAnnotationStore,
    DuckDBGenomeStorage,
    DuckDBVariantStore,
)
from .memory import InMemoryAnnotationStore, InMemoryVariantStore

__all__ = [
    "Store",
    "AnnotationStore",
    "VariantStore",
    "GenomeStorage",
    "AnnotationStorage",
    "opened",
    "InMemoryAnnotationStore",
    "InMemoryVariantStore",
    "DuckDBAnnotationStore",
    "DuckDBVariantStore",
    "DuckDBGenomeStorage",
    "DuckDBAnnotationStorage",
]
