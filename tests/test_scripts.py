import json
import subprocess
import sys
from pathlib import Path

import pytest

pytest.importorskip("duckdb")

REPO_ROOT = Path(__file__).resolve().parents[1]

GENOME = "rsid\tchromosome\tposition\tgenotype\nrs80357906\t17\t41209079\tAG\nrs7412\t19\t45412079\tCT\n"


def _run(script: str, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, f"scripts/{script}", *args],
        cwd=REPO_ROOT,
        text=True,
        capture_output=True,
    )


def test_scripts_process_build_and_analyze(tmp_path: Path) -> None:
    genome_path = tmp_path / "genome_Jane.txt"
    genome_path.write_text(GENOME)

    clinvar_csv = tmp_path / "clinvar.csv"
    clinvar_csv.write_text(
        "rsid,chrom,pos,ref,alt,gene,clnsig,clnrevstat,condition\n"
        "rs80357906,17,41209079,A,G,BRCA1,Pathogenic,reviewed_by_expert_panel,Breast_cancer\n"
        "rs7412,19,45412079,C,T,APOE,drug_response,criteria_provided,not_provided\n"
    )

    processed = _run(
        "process_genome.py",
        "--file", str(genome_path),
        "--output", str(tmp_path / "out"),
        "--json",
    )
    assert processed.returncode == 0, processed.stderr
    user_db = json.loads(processed.stdout)["db_path"]

    built = _run("build_clinvar_store.py", "--input", str(clinvar_csv), "--db", str(tmp_path / "cv.duckdb"))
    assert built.returncode == 0, built.stderr
    assert json.loads(built.stdout)["rows_written"] == 2

    output_path = tmp_path / "result.json"
    analyzed = _run(
        "analyze_clinvar.py",
        "--user-db", user_db,
        "--clinvar-db", str(tmp_path / "cv.duckdb"),
        "--batch-size", "1",
        "--output", str(output_path),
    )
    assert analyzed.returncode == 0, analyzed.stderr

    payload = json.loads(output_path.read_text())
    assert payload["identifiers_searched"] == 2
    assert payload["matches_found"] == 2
    assert [group["gene"] for group in payload["gene_groups"]] == ["BRCA1", "APOE"]


def test_process_genome_missing_input_exits_with_error(tmp_path: Path) -> None:
    result = _run("process_genome.py", "--file", str(tmp_path / "nope.txt"), "--output", str(tmp_path))

    assert result.returncode == 1


def test_process_genome_requires_arguments() -> None:
    result = _run("process_genome.py")

    assert result.returncode == 2


def test_analyze_reports_missing_database(tmp_path: Path) -> None:
    result = _run(
        "analyze_clinvar.py",
        "--user-db", str(tmp_path / "u.duckdb"),
        "--clinvar-db", str(tmp_path / "c.duckdb"),
    )

    assert result.returncode == 1
