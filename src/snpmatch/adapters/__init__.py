"""Readers for external annotation sources."""

from .clinvar import COLUMN_ALIASES, ClinVarTableReader
from .common import TabularReaderMixin, expand_input_paths

__all__ = [
    "COLUMN_ALIASES",
    "ClinVarTableReader",
    "TabularReaderMixin",
    "expand_input_paths",
]
