"""Shape checks for links and meta objects."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from jsonapi_payload.core.errors import LinksValidationError, MetaValidationError
from jsonapi_payload.schemas.resource import Link


def validate_links(links: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Return ``links`` with every member checked.

    A member must be a URL string or a link object (``href`` plus optional
    ``meta``); link objects given as mappings come back as :class:`Link`.
    """
    if links is None:
        return None
    if not isinstance(links, Mapping):
        raise LinksValidationError("The links object must be an object", key="")
    validated: dict[str, Any] = {}
    for key, value in links.items():
        if isinstance(value, (str, Link)):
            validated[key] = value
            continue
        if isinstance(value, Mapping):
            try:
                validated[key] = Link.model_validate(value)
                continue
            except ValidationError:
                pass
        raise LinksValidationError(
            f"The {key} member of the links object was not a string or link object",
            key=key,
        )
    return validated


def validate_meta(meta: Any) -> dict[str, Any] | None:
    """Return ``meta`` as a dict, rejecting anything that is not an object."""
    if meta is None:
        return None
    if not isinstance(meta, Mapping):
        raise MetaValidationError(
            f"The meta member must be an object, not {type(meta).__name__}",
            key="",
        )
    return dict(meta)
