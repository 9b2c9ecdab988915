"""JSON interchange format for analysis results."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from snpmatch.errors import SerializationError
from snpmatch.models import AnalysisResult, GeneGroup, MatchedVariant


def result_to_dict(result: AnalysisResult) -> dict[str, Any]:
    """Convert a result into plain containers using the model field names."""

    try:
        return asdict(result)
    except TypeError as exc:
        raise SerializationError(f"Analysis result is not serializable: {exc}") from exc


def result_to_json(result: AnalysisResult, *, indent: int | None = None) -> str:
    payload = result_to_dict(result)
    try:
        return json.dumps(payload, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Analysis result is not serializable: {exc}") from exc


def result_from_dict(payload: dict[str, Any]) -> AnalysisResult:
    """Rebuild a result from :func:`result_to_dict` output."""

    try:
        return AnalysisResult(
            matches=[MatchedVariant(**item) for item in payload["matches"]],
            gene_groups=[
                GeneGroup(
                    **{
                        **group,
                        "variants": [MatchedVariant(**item) for item in group["variants"]],
                    }
                )
                for group in payload["gene_groups"]
            ],
            identifiers_searched=int(payload["identifiers_searched"]),
            matches_found=int(payload["matches_found"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SerializationError(f"Malformed analysis payload: {exc}") from exc


def result_from_json(text: str) -> AnalysisResult:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Invalid analysis JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise SerializationError("Analysis JSON must be an object")
    return result_from_dict(payload)
