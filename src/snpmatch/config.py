"""Configuration contracts for snpmatch pipelines."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema import exceptions as jsex
from jsonschema.validators import validator_for

from snpmatch.errors import ConfigurationError

# SQLite's default bound on host parameters in a single statement. The
# annotation databases shipped to clients are built against it.
SQLITE_MAX_VARIABLE_NUMBER = 999

NO_CALL_GENOTYPE = "--"
RSID_PREFIX = "rs"
UNKNOWN_GENE = "Unknown"
CONDITION_PLACEHOLDERS: tuple[str, ...] = ("not_provided", "not_specified")


@dataclass(frozen=True)
class BatchingPolicy:
    """How many keys a single annotation-store query may carry."""

    max_keys: int = SQLITE_MAX_VARIABLE_NUMBER

    def __post_init__(self) -> None:
        if isinstance(self.max_keys, bool) or not isinstance(self.max_keys, int):
            raise ConfigurationError(f"max_keys must be an integer, got {self.max_keys!r}")
        if not 1 <= self.max_keys <= SQLITE_MAX_VARIABLE_NUMBER:
            raise ConfigurationError(
                f"max_keys must be between 1 and {SQLITE_MAX_VARIABLE_NUMBER}, got {self.max_keys}"
            )


@dataclass(frozen=True)
class ParserSettings:
    """Input handling for consumer genotype exports."""

    archive_member_token: str = "genome_"
    encoding: str = "utf-8"
    source_format: str = "23andMe"
    assembly: str = "GRCh37"


@dataclass(frozen=True)
class AnalysisConfig:
    """Runtime configuration for one analysis pipeline."""

    batching: BatchingPolicy = field(default_factory=BatchingPolicy)
    parser: ParserSettings = field(default_factory=ParserSettings)
    unknown_gene_label: str = UNKNOWN_GENE
    max_conditions: int = 3
    condition_placeholders: tuple[str, ...] = CONDITION_PLACEHOLDERS

    def __post_init__(self) -> None:
        if self.max_conditions < 0:
            raise ConfigurationError("max_conditions cannot be negative")


ANALYSIS_CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "batching": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "max_keys": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": SQLITE_MAX_VARIABLE_NUMBER,
                },
            },
        },
        "parser": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "archive_member_token": {"type": "string", "minLength": 1},
                "encoding": {"type": "string", "minLength": 1},
                "source_format": {"type": "string", "minLength": 1},
                "assembly": {"type": "string"},
            },
        },
        "unknown_gene_label": {"type": "string", "minLength": 1},
        "max_conditions": {"type": "integer", "minimum": 0},
        "condition_placeholders": {"type": "array", "items": {"type": "string"}},
    },
}


class AnalysisConfigLoader:
    """Load analysis configuration JSON from ``config/`` or a custom path."""

    def __init__(self, config_dir: str | Path | None = None) -> None:
        if config_dir is None:
            config_dir = Path(__file__).resolve().parents[2] / "config"
        self.config_dir = Path(config_dir)
        validator_cls = validator_for(ANALYSIS_CONFIG_SCHEMA)
        validator_cls.check_schema(ANALYSIS_CONFIG_SCHEMA)
        self._validator = validator_cls(ANALYSIS_CONFIG_SCHEMA)

    def list_configs(self) -> list[str]:
        """Return available config names from the configured directory."""

        return sorted(path.stem for path in self.config_dir.glob("*.json"))

    def load(self, name_or_path: str | Path) -> AnalysisConfig:
        """Load a config by name (for example, ``analysis``) or explicit path."""

        path = self._resolve_path(name_or_path)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Invalid JSON in {path} (line {exc.lineno}, col {exc.colno}): {exc.msg}"
            ) from exc
        return self.parse(payload)

    def parse(self, payload: Any) -> AnalysisConfig:
        """Validate a decoded payload and build an ``AnalysisConfig``."""

        errors = sorted(self._validator.iter_errors(payload), key=lambda err: list(err.path))
        if errors:
            raise ConfigurationError(
                "Invalid analysis config: " + "; ".join(_describe(err) for err in errors)
            )

        batching_raw = payload.get("batching", {})
        parser_raw = payload.get("parser", {})
        defaults = AnalysisConfig()

        return AnalysisConfig(
            batching=BatchingPolicy(
                max_keys=int(batching_raw.get("max_keys", SQLITE_MAX_VARIABLE_NUMBER))
            ),
            parser=ParserSettings(**parser_raw),
            unknown_gene_label=payload.get("unknown_gene_label", defaults.unknown_gene_label),
            max_conditions=payload.get("max_conditions", defaults.max_conditions),
            condition_placeholders=tuple(
                payload.get("condition_placeholders", defaults.condition_placeholders)
            ),
        )

    def _resolve_path(self, name_or_path: str | Path) -> Path:
        requested = Path(name_or_path)

        if requested.exists():
            return requested

        candidate = self.config_dir / f"{requested}.json"
        if candidate.exists():
            return candidate

        raise ConfigurationError(
            f"Config not found: {name_or_path}. Available: {', '.join(self.list_configs())}"
        )


def _describe(err: jsex.ValidationError) -> str:
    location = "/" + "/".join(str(part) for part in err.path)
    return f"{location}: {err.message}"
