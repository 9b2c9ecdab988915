"""Base interface for genome export parsers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from snpmatch.config import ParserSettings
from snpmatch.models import ParseResult
from snpmatch.parsers.archive import read_genome_text


class GenomeParser(ABC):
    """Parser that converts a vendor export into canonical variant records."""

    name: str

    def __init__(self, settings: ParserSettings | None = None) -> None:
        self.settings = settings or ParserSettings()

    @abstractmethod
    def parse_text(self, text: str, *, file_name: str = "") -> ParseResult:
        """Parse already-decoded export content."""

    def parse_path(self, path: str | Path) -> ParseResult:
        """Read a plain or zipped export from disk and parse it."""

        path = Path(path)
        text = read_genome_text(path, self.settings)
        return self.parse_text(text, file_name=path.name)
