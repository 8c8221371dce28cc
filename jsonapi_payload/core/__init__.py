"""Core JSON:API document, inclusion and error helpers."""

from .document import JSONAPIDocumentBuilder
from .errors import JSONAPIErrorBuilder
from .includes import filter_included
from .links import validate_links, validate_meta

__all__ = [
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "filter_included",
    "validate_links",
    "validate_meta",
]
