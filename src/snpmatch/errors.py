"""Typed error hierarchy for snpmatch.

Callers distinguish failure kinds by exception class rather than by message
text. Row-level parse problems are not exceptions; see ``ParseIssue``.
"""

from __future__ import annotations


class SnpMatchError(Exception):
    """Base class for all fatal snpmatch errors."""


class ConfigurationError(SnpMatchError):
    """Configuration values or files are invalid."""


class InputError(SnpMatchError):
    """Genome input could not be read or decoded."""


class ArchiveMemberNotFoundError(InputError):
    """No archive member matched the expected name token."""

    def __init__(self, archive_path: str, token: str) -> None:
        super().__init__(f"No file matching '{token}' found in ZIP: {archive_path}")
        self.archive_path = archive_path
        self.token = token


class StoreQueryError(SnpMatchError):
    """An annotation or variant store failed to open or answer a query."""


class SerializationError(SnpMatchError):
    """An analysis result could not be rendered to the interchange format."""
