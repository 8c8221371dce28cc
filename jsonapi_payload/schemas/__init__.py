"""Pydantic schemas for JSON:API."""

from .resource import Link, Node, RelationshipManyNode, RelationshipOneNode
from .document import ManyPayload, OnePayload, Payload

__all__ = [
    "Link",
    "ManyPayload",
    "Node",
    "OnePayload",
    "Payload",
    "RelationshipManyNode",
    "RelationshipOneNode",
]
