"""DuckDB-backed genome and annotation stores."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import duckdb
import pandas as pd

from snpmatch.config import SQLITE_MAX_VARIABLE_NUMBER
from snpmatch.errors import StoreQueryError
from snpmatch.models import AnnotationRecord, ParseResult
from snpmatch.stores.base import AnnotationStorage, AnnotationStore, GenomeStorage, VariantStore

logger = logging.getLogger(__name__)

_TABLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

ANNOTATION_COLUMNS: tuple[str, ...] = (
    "rsid",
    "chrom",
    "pos",
    "ref",
    "alt",
    "gene",
    "clnsig",
    "clnrevstat",
    "condition",
)


def _safe_table_name(table_name: str) -> str:
    if not _TABLE_RE.match(table_name):
        raise ValueError(f"Unsafe table name: {table_name}")
    return table_name


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _reset_database(db_path: Path) -> None:
    for path in (db_path, db_path.with_name(db_path.name + ".wal")):
        if path.exists():
            path.unlink()


class _DuckDBReader:
    """Shared read-only connection handling."""

    def __init__(self, *, db_path: str | Path, table_name: str) -> None:
        self.db_path = Path(db_path)
        self.table_name = _safe_table_name(table_name)
        self._connection: duckdb.DuckDBPyConnection | None = None

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def open(self) -> None:
        if self._connection is not None:
            return
        if not self.db_path.exists():
            raise StoreQueryError(f"Database not found: {self.db_path}")
        try:
            self._connection = duckdb.connect(str(self.db_path), read_only=True)
        except duckdb.Error as exc:
            raise StoreQueryError(f"Could not open {self.db_path}: {exc}") from exc

    def close(self) -> None:
        if self._connection is None:
            return
        connection, self._connection = self._connection, None
        connection.close()

    def _fetch(self, sql: str, params: Sequence[Any] = ()) -> list[tuple[Any, ...]]:
        if self._connection is None:
            raise StoreQueryError(f"{type(self).__name__} is not open")
        try:
            return self._connection.execute(sql, list(params)).fetchall()
        except duckdb.Error as exc:
            raise StoreQueryError(f"Query against {self.db_path} failed: {exc}") from exc


class DuckDBAnnotationStore(_DuckDBReader, AnnotationStore):
    """Clinical annotations in a DuckDB ``variants`` table.

    Rows are returned ordered by gene, identifier, position and significance
    text so that ties are stable; significance ranking is left to the matcher.
    """

    def __init__(
        self,
        *,
        db_path: str | Path,
        table_name: str = "variants",
        max_keys: int = SQLITE_MAX_VARIABLE_NUMBER,
    ) -> None:
        super().__init__(db_path=db_path, table_name=table_name)
        self.max_keys = max_keys

    def _query(self, keys: Sequence[str]) -> list[AnnotationRecord]:
        placeholders = ", ".join("?" for _ in keys)
        rows = self._fetch(
            f"SELECT {', '.join(ANNOTATION_COLUMNS)} FROM {self.table_name} "
            f"WHERE rsid IN ({placeholders}) ORDER BY gene, rsid, pos, clnsig",
            keys,
        )
        return [
            AnnotationRecord(
                snp_id=_text(rsid),
                chromosome=_text(chrom),
                position=int(pos or 0),
                reference_allele=_text(ref),
                alternate_allele=_text(alt),
                gene=_text(gene),
                clinical_significance_raw=_text(clnsig),
                review_status=_text(clnrevstat),
                condition=_text(condition),
            )
            for rsid, chrom, pos, ref, alt, gene, clnsig, clnrevstat, condition in rows
        ]


class DuckDBVariantStore(_DuckDBReader, VariantStore):
    """User variants persisted by :class:`DuckDBGenomeStorage`."""

    def __init__(self, *, db_path: str | Path, table_name: str = "variants") -> None:
        super().__init__(db_path=db_path, table_name=table_name)

    def iter_rsid_genotypes(self) -> Iterable[tuple[str, str]]:
        rows = self._fetch(
            f"SELECT rsid, genotype FROM {self.table_name} "
            "WHERE rsid LIKE 'rs%' ORDER BY rsid, id"
        )
        return [(str(rsid), _text(genotype)) for rsid, genotype in rows]


class DuckDBGenomeStorage(GenomeStorage):
    """Persist parsed genomes in a queryable DB and optional Parquet file."""

    def __init__(
        self,
        *,
        db_path: str | Path,
        parquet_path: str | Path | None = None,
        table_name: str = "variants",
    ) -> None:
        self.db_path = Path(db_path)
        self.parquet_path = Path(parquet_path) if parquet_path else None
        self.table_name = _safe_table_name(table_name)

    def persist(self, result: ParseResult, *, name: str) -> Path:
        if self.db_path.exists():
            raise FileExistsError(f"Genome database already exists: {self.db_path}")

        now = datetime.now(tz=timezone.utc)
        metadata = result.metadata

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        _reset_database(self.db_path)
        logger.info("Writing %d variants to %s", len(result.variants), self.db_path)

        connection = duckdb.connect(str(self.db_path))
        try:
            connection.execute(
                """
                CREATE TABLE genome_metadata (
                    id INTEGER PRIMARY KEY,
                    file_name VARCHAR NOT NULL,
                    source_format VARCHAR NOT NULL,
                    total_variants BIGINT NOT NULL,
                    rsid_count BIGINT NOT NULL,
                    parse_errors BIGINT NOT NULL,
                    assembly VARCHAR,
                    upload_date VARCHAR NOT NULL,
                    db_name VARCHAR NOT NULL
                )
                """
            )
            connection.execute(
                f"""
                CREATE TABLE {self.table_name} (
                    id BIGINT NOT NULL,
                    file_id INTEGER NOT NULL,
                    rsid VARCHAR,
                    chromosome VARCHAR NOT NULL,
                    position UBIGINT NOT NULL,
                    genotype VARCHAR NOT NULL,
                    source_format VARCHAR NOT NULL
                )
                """
            )
            connection.execute(
                "INSERT INTO genome_metadata VALUES (1, ?, ?, ?, ?, ?, ?, ?, ?)",
                [
                    name,
                    metadata.source_format,
                    metadata.total_variants,
                    metadata.rsid_count,
                    metadata.parse_errors,
                    metadata.assembly,
                    now.isoformat(),
                    self.db_path.stem,
                ],
            )

            if result.variants:
                frame = pd.DataFrame([variant.to_row() for variant in result.variants])
                frame.insert(0, "id", range(1, len(frame) + 1))
                frame.insert(1, "file_id", 1)
                connection.register("variant_frame", frame)
                connection.execute(
                    f"INSERT INTO {self.table_name} "
                    "SELECT id, file_id, rsid, chromosome, position, genotype, source_format "
                    "FROM variant_frame"
                )
                connection.unregister("variant_frame")

            connection.execute(
                f"CREATE INDEX idx_{self.table_name}_rsid ON {self.table_name} (rsid)"
            )
            connection.execute(
                f"CREATE INDEX idx_{self.table_name}_chr_pos "
                f"ON {self.table_name} (chromosome, position)"
            )

            if self.parquet_path is not None:
                self.parquet_path.parent.mkdir(parents=True, exist_ok=True)
                if self.parquet_path.exists():
                    self.parquet_path.unlink()
                parquet_target = self.parquet_path.as_posix().replace("'", "''")
                connection.execute(
                    f"COPY {self.table_name} TO '{parquet_target}' (FORMAT PARQUET)"
                )
        finally:
            connection.close()

        return self.db_path


class DuckDBAnnotationStorage(AnnotationStorage):
    """Load annotation records into the table read by :class:`DuckDBAnnotationStore`."""

    def __init__(self, *, db_path: str | Path, table_name: str = "variants") -> None:
        self.db_path = Path(db_path)
        self.table_name = _safe_table_name(table_name)

    def persist(self, records: Iterable[AnnotationRecord]) -> int:
        frame = pd.DataFrame(
            [record.to_row() for record in records],
            columns=list(ANNOTATION_COLUMNS),
        )
        frame["pos"] = frame["pos"].astype("int64")

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        _reset_database(self.db_path)
        connection = duckdb.connect(str(self.db_path))
        try:
            connection.execute(
                f"""
                CREATE TABLE {self.table_name} (
                    rsid VARCHAR NOT NULL,
                    chrom VARCHAR,
                    pos BIGINT,
                    ref VARCHAR,
                    alt VARCHAR,
                    gene VARCHAR,
                    clnsig VARCHAR,
                    clnrevstat VARCHAR,
                    condition VARCHAR
                )
                """
            )
            if not frame.empty:
                connection.register("annotation_frame", frame)
                connection.execute(
                    f"INSERT INTO {self.table_name} "
                    f"SELECT {', '.join(ANNOTATION_COLUMNS)} FROM annotation_frame"
                )
                connection.unregister("annotation_frame")
            connection.execute(
                f"CREATE INDEX idx_{self.table_name}_rsid ON {self.table_name} (rsid)"
            )
        finally:
            connection.close()

        logger.info("Loaded %d annotation rows into %s", len(frame), self.db_path)
        return len(frame)
