"""JSON:API payloads with relationship-path based inclusion."""

from .core.document import JSONAPIDocumentBuilder
from .core.errors import (
    JSONAPIError,
    JSONAPIErrorBuilder,
    JSONAPIValidationError,
    LinksValidationError,
    MetaValidationError,
)
from .core.includes import filter_included
from .core.links import validate_links, validate_meta
from .schemas import (
    Link,
    ManyPayload,
    Node,
    OnePayload,
    Payload,
    RelationshipManyNode,
    RelationshipOneNode,
)
from .serializers.base import JSONAPISerializer

__all__ = [
    "JSONAPIDocumentBuilder",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
    "JSONAPISerializer",
    "JSONAPIValidationError",
    "Link",
    "LinksValidationError",
    "ManyPayload",
    "MetaValidationError",
    "Node",
    "OnePayload",
    "Payload",
    "RelationshipManyNode",
    "RelationshipOneNode",
    "filter_included",
    "validate_links",
    "validate_meta",
]
