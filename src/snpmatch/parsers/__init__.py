"""Genome export parsers."""

from .archive import extract_from_zip, read_genome_text
from .base import GenomeParser
from .twenty_three_and_me import TwentyThreeAndMeParser

__all__ = [
    "GenomeParser",
    "TwentyThreeAndMeParser",
    "extract_from_zip",
    "read_genome_text",
]
