import csv
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from snpmatch.adapters import ClinVarTableReader  # noqa: E402


def _write_table(path: Path, rows: list[dict[str, object]], delimiter: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as stream:
        writer = csv.DictWriter(stream, fieldnames=list(rows[0].keys()), delimiter=delimiter)
        writer.writeheader()
        writer.writerows(rows)


def test_reader_maps_variant_summary_columns(tmp_path: Path) -> None:
    path = tmp_path / "variant_summary.txt"
    _write_table(
        path,
        [
            {
                "GeneSymbol": "BRCA1",
                "ClinicalSignificance": "Pathogenic",
                "RS# (dbSNP)": "80357906",
                "PhenotypeList": "Hereditary_breast_ovarian_cancer_syndrome",
                "Chromosome": "17",
                "Start": "41209079",
                "ReviewStatus": "reviewed by expert panel",
                "ReferenceAlleleVCF": "A",
                "AlternateAlleleVCF": "G",
                "Assembly": "GRCh37",
            },
            {
                "GeneSymbol": "TTN",
                "ClinicalSignificance": "Benign",
                "RS# (dbSNP)": "-1",
                "PhenotypeList": "not_provided",
                "Chromosome": "2",
                "Start": "178000000",
                "ReviewStatus": "no assertion",
                "ReferenceAlleleVCF": "C",
                "AlternateAlleleVCF": "T",
                "Assembly": "GRCh37",
            },
        ],
        delimiter="\t",
    )

    reader = ClinVarTableReader(input_paths=path)
    records = list(reader.read())

    assert len(records) == 1
    record = records[0]
    assert record.snp_id == "rs80357906"
    assert record.gene == "BRCA1"
    assert record.position == 41209079
    assert record.reference_allele == "A"
    assert record.alternate_allele == "G"
    assert record.condition == "Hereditary_breast_ovarian_cancer_syndrome"
    assert reader.skipped == 1


def test_reader_accepts_store_layout_csv_from_directory(tmp_path: Path) -> None:
    _write_table(
        tmp_path / "tables" / "clinvar.csv",
        [
            {
                "rsid": "rs7412",
                "chrom": "19",
                "pos": "45412079",
                "ref": "C",
                "alt": "T",
                "gene": "",
                "clnsig": "drug_response",
                "clnrevstat": "criteria_provided",
                "condition": "",
            }
        ],
        delimiter=",",
    )
    (tmp_path / "tables" / "notes.md").write_text("ignored")

    reader = ClinVarTableReader(input_paths=tmp_path / "tables")
    records = list(reader.read())

    assert len(reader.input_paths) == 1
    assert [record.snp_id for record in records] == ["rs7412"]
    assert records[0].gene == ""
    assert records[0].clinical_significance_raw == "drug_response"
