"""Parser for 23andMe raw data exports."""

from __future__ import annotations

import re

from snpmatch.config import NO_CALL_GENOTYPE, RSID_PREFIX
from snpmatch.models import GenomeMetadata, ParseIssue, ParseResult, VariantRecord
from snpmatch.parsers.base import GenomeParser

_POSITION_RE = re.compile(r"\+?[0-9]+")
_MAX_POSITION = 2**64 - 1
_MIN_FIELDS = 4


class TwentyThreeAndMeParser(GenomeParser):
    """Parse tab-separated ``rsid, chromosome, position, genotype`` rows.

    Comment lines (``#``), the ``rsid`` header row, blank lines, rows missing
    an identifier or chromosome, and no-calls (``--``) are skipped silently.
    Rows with too few columns or an unparsable position are skipped and
    reported as :class:`ParseIssue` entries. Output preserves input order.
    """

    name = "23andme"

    def parse_text(self, text: str, *, file_name: str = "") -> ParseResult:
        variants: list[VariantRecord] = []
        issues: list[ParseIssue] = []
        rsid_count = 0

        for line_number, raw_line in enumerate(text.split("\n"), start=1):
            line = raw_line.strip()

            if not line or line.startswith("#"):
                continue
            if line.startswith("rsid"):
                continue

            parts = line.split("\t")
            if len(parts) < _MIN_FIELDS:
                issues.append(
                    ParseIssue(
                        line_number=line_number,
                        message=(
                            f"expected at least {_MIN_FIELDS} tab-separated fields, "
                            f"found {len(parts)}"
                        ),
                    )
                )
                continue

            identifier, chromosome, position_text, genotype = (part.strip() for part in parts[:4])

            if not identifier or not chromosome or genotype == NO_CALL_GENOTYPE:
                continue

            position = self._parse_position(position_text)
            if position is None:
                issues.append(
                    ParseIssue(line_number=line_number, message=f"invalid position '{position_text}'")
                )
                continue

            snp_id = identifier if identifier.startswith(RSID_PREFIX) else None
            if snp_id is not None:
                rsid_count += 1

            variants.append(
                VariantRecord(
                    snp_id=snp_id,
                    chromosome=chromosome,
                    position=position,
                    genotype=genotype,
                    source_format=self.settings.source_format,
                )
            )

        metadata = GenomeMetadata(
            file_name=file_name,
            source_format=self.settings.source_format,
            total_variants=len(variants),
            rsid_count=rsid_count,
            parse_errors=len(issues),
            assembly=self.settings.assembly or None,
        )
        return ParseResult(metadata=metadata, variants=variants, issues=issues)

    @staticmethod
    def _parse_position(value: str) -> int | None:
        if not _POSITION_RE.fullmatch(value):
            return None

        position = int(value)
        return position if position <= _MAX_POSITION else None
