"""Shared utilities for tabular annotation readers."""

from __future__ import annotations

import glob
import os
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

_TABULAR_SUFFIXES: tuple[str, ...] = (".csv", ".tsv", ".txt")


def _is_tabular(path: Path) -> bool:
    """Return True if the file looks like a delimited or compressed delimited table."""

    name = path.name.lower()
    if name.endswith(".gz"):
        name = name[:-3]
    return name.endswith(_TABULAR_SUFFIXES)


def separator_for(path: Path) -> str:
    """Comma for ``.csv`` files, tab for everything else."""

    name = path.name.lower()
    if name.endswith(".gz"):
        name = name[:-3]
    return "," if name.endswith(".csv") else "\t"


def expand_input_paths(input_paths: str | Path | Iterable[str | Path]) -> list[Path]:
    """Expand file, directory, or glob inputs into concrete table paths."""

    if isinstance(input_paths, (str, Path)):
        items: list[str | Path] = [input_paths]
    else:
        items = list(input_paths)

    resolved: list[Path] = []
    for item in items:
        expanded_item = os.path.expandvars(os.path.expanduser(str(item)))
        item_path = Path(expanded_item)

        if item_path.is_dir():
            resolved.extend(
                sorted(
                    path
                    for path in item_path.iterdir()
                    if path.is_file() and _is_tabular(path)
                )
            )
            continue

        if item_path.exists():
            resolved.append(item_path)
            continue

        matches = [Path(path) for path in glob.glob(expanded_item)]
        resolved.extend(sorted(match for match in matches if _is_tabular(match)))

    return resolved


class TabularReaderMixin:
    """Common conversions for delimited annotation readers."""

    @staticmethod
    def _to_string(value: Any) -> str | None:
        if value is None or pd.isna(value):
            return None

        cleaned = str(value).strip()
        if not cleaned or cleaned.lower() in {"nan", "none", "null", "na", "-"}:
            return None

        return cleaned

    @staticmethod
    def _to_int(value: Any) -> int | None:
        as_string = TabularReaderMixin._to_string(value)
        if as_string is None:
            return None

        try:
            return int(float(as_string))
        except (TypeError, ValueError):
            return None

    @classmethod
    def _first(cls, row: Mapping[str, Any], aliases: Sequence[str]) -> str | None:
        for alias in aliases:
            value = cls._to_string(row.get(alias))
            if value is not None:
                return value
        return None
