"""Reader for ClinVar tabular extracts."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Iterator

import pandas as pd

from snpmatch.adapters.common import TabularReaderMixin, expand_input_paths, separator_for
from snpmatch.config import RSID_PREFIX
from snpmatch.models import AnnotationRecord

# Canonical column -> accepted source headers, in preference order. Covers
# both the compact annotation-store layout and NCBI's variant_summary.txt.
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "rsid": ("rsid", "RS# (dbSNP)", "rsID"),
    "chrom": ("chrom", "Chromosome", "ChromosomeAccession"),
    "pos": ("pos", "PositionVCF", "Start"),
    "ref": ("ref", "ReferenceAlleleVCF", "ReferenceAllele"),
    "alt": ("alt", "AlternateAlleleVCF", "AlternateAllele"),
    "gene": ("gene", "GeneSymbol"),
    "clnsig": ("clnsig", "ClinicalSignificance"),
    "clnrevstat": ("clnrevstat", "ReviewStatus"),
    "condition": ("condition", "PhenotypeList"),
}


class ClinVarTableReader(TabularReaderMixin):
    """Read ClinVar rows into annotation records.

    Rows without a dbSNP identifier are skipped; numeric identifiers
    (``12345``) are normalized to ``rs12345``.
    """

    name = "clinvar_table"

    def __init__(
        self,
        *,
        input_paths: str | Path | Iterable[str | Path],
        chunksize: int = 100_000,
    ) -> None:
        self.input_paths = expand_input_paths(input_paths)
        self.chunksize = chunksize
        self.skipped = 0

    def read(self) -> Iterator[AnnotationRecord]:
        wanted = {alias for aliases in COLUMN_ALIASES.values() for alias in aliases}

        for input_path in self.input_paths:
            frame_iter = pd.read_csv(
                input_path,
                sep=separator_for(input_path),
                usecols=lambda col: col in wanted,
                dtype=str,
                chunksize=self.chunksize,
            )

            for frame in frame_iter:
                for row in frame.to_dict(orient="records"):
                    record = self._to_record(row)
                    if record is None:
                        self.skipped += 1
                        continue
                    yield record

    def _to_record(self, row: dict[str, Any]) -> AnnotationRecord | None:
        snp_id = self._normalize_rsid(self._first(row, COLUMN_ALIASES["rsid"]))
        if snp_id is None:
            return None

        return AnnotationRecord(
            snp_id=snp_id,
            chromosome=self._first(row, COLUMN_ALIASES["chrom"]) or "",
            position=self._to_int(self._first(row, COLUMN_ALIASES["pos"])) or 0,
            reference_allele=self._first(row, COLUMN_ALIASES["ref"]) or "",
            alternate_allele=self._first(row, COLUMN_ALIASES["alt"]) or "",
            gene=self._first(row, COLUMN_ALIASES["gene"]) or "",
            clinical_significance_raw=self._first(row, COLUMN_ALIASES["clnsig"]) or "",
            review_status=self._first(row, COLUMN_ALIASES["clnrevstat"]) or "",
            condition=self._first(row, COLUMN_ALIASES["condition"]) or "",
        )

    @staticmethod
    def _normalize_rsid(value: str | None) -> str | None:
        if value is None:
            return None
        if value.startswith(RSID_PREFIX):
            return value if value[len(RSID_PREFIX):].isdigit() else None
        if value.isdigit() and int(value) > 0:
            return f"{RSID_PREFIX}{value}"
        return None
