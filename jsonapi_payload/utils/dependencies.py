"""FastAPI dependencies for JSON:API endpoints."""

from __future__ import annotations

from fastapi import Query

from jsonapi_payload.utils.query_params import parse_include


def include_paths(
    include: str | None = Query(
        default=None,
        description="Comma-separated relationship paths to include, e.g. author,comments.author",
    ),
) -> list[str]:
    """Return the relationship paths requested through ``include``."""
    return parse_include(include)
