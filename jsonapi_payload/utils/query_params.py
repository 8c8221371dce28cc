"""Helpers for JSON:API query parameter parsing."""

from __future__ import annotations

from typing import Any, Mapping


def _split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def parse_include(value: str | None) -> list[str]:
    """Split an ``include`` query parameter into relationship paths.

    Empty entries are dropped and the first occurrence of a repeated path
    is kept.
    """
    if not value:
        return []
    return list(dict.fromkeys(_split_csv(value)))


def parse_query_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize the JSON:API query parameters this package understands."""
    normalized: dict[str, Any] = {"include": []}
    value = params.get("include")
    if value is not None:
        normalized["include"] = parse_include(str(value))
    return normalized
