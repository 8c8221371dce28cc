"""Pydantic models for JSON:API resource objects and relationships."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Link(BaseModel):
    """Link object: an href with optional meta."""

    href: str
    meta: Optional[Dict[str, Any]] = None


class Node(BaseModel):
    """Resource object with attributes and relationships.

    The same model is used for resource identifier stubs inside
    relationships, where only ``type`` and ``id`` are set.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str
    id: str = ""
    client_id: Optional[str] = Field(default=None, alias="client-id")
    attributes: Optional[Dict[str, Any]] = None
    relationships: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @field_validator("relationships", mode="before")
    @classmethod
    def coerce_relationships(cls, value: Any) -> Any:
        """Turn raw relationship objects into their to-one or to-many model."""
        if not isinstance(value, Mapping):
            return value
        return {name: coerce_relationship(item) for name, item in value.items()}

    @property
    def key(self) -> str:
        """Identity key: ``type,id``."""
        return f"{self.type},{self.id}"

    def to_document(self) -> dict[str, Any]:
        """Return the wire representation of the resource object."""
        resource: dict[str, Any] = {"type": self.type}
        if self.id:
            resource["id"] = self.id
        if self.client_id:
            resource["client-id"] = self.client_id
        if self.attributes:
            resource["attributes"] = dict(self.attributes)
        if self.relationships:
            resource["relationships"] = {
                name: _relationship_document(relationship)
                for name, relationship in self.relationships.items()
            }
        if self.links:
            resource["links"] = links_document(self.links)
        if self.meta:
            resource["meta"] = dict(self.meta)
        return resource


class RelationshipOneNode(BaseModel):
    """To-one relationship: ``data`` holds a single stub or null."""

    data: Optional[Node] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class RelationshipManyNode(BaseModel):
    """To-many relationship: ``data`` holds an ordered list of stubs."""

    data: List[Node] = Field(default_factory=list)
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


def coerce_relationship(value: Any) -> Any:
    """Return a relationship model for a raw relationship object.

    Values that are already relationship models pass through. A mapping with
    a list ``data`` member becomes to-many, a mapping with a mapping or null
    ``data`` member becomes to-one. Everything else is returned unchanged and
    is ignored during inclusion.
    """
    if isinstance(value, (RelationshipOneNode, RelationshipManyNode)):
        return value
    if not isinstance(value, Mapping) or "data" not in value:
        return value
    data = value["data"]
    if isinstance(data, list):
        return RelationshipManyNode.model_validate(value)
    if data is None or isinstance(data, (Mapping, Node)):
        return RelationshipOneNode.model_validate(value)
    return value


def relationship_keys(node: Node | None, relationship: str) -> list[str]:
    """Return the identity keys referenced by a relationship of ``node``.

    Keys keep the order of the relationship data, without repeats.
    """
    if node is None or not node.relationships:
        return []
    value = node.relationships.get(relationship)
    if isinstance(value, RelationshipOneNode):
        return [value.data.key] if value.data is not None else []
    if isinstance(value, RelationshipManyNode):
        return list(dict.fromkeys(stub.key for stub in value.data if stub is not None))
    return []


def _relationship_document(relationship: Any) -> Any:
    if isinstance(relationship, RelationshipOneNode):
        document: dict[str, Any] = {
            "data": _stub_document(relationship.data) if relationship.data else None
        }
    elif isinstance(relationship, RelationshipManyNode):
        document = {"data": [_stub_document(stub) for stub in relationship.data]}
    else:
        return relationship
    if relationship.links:
        document["links"] = links_document(relationship.links)
    if relationship.meta:
        document["meta"] = dict(relationship.meta)
    return document


def _stub_document(stub: Node) -> dict[str, Any]:
    document = {"type": stub.type, "id": stub.id}
    if stub.meta:
        document["meta"] = dict(stub.meta)
    return document


def links_document(links: Mapping[str, Any]) -> dict[str, Any]:
    return {
        name: link.model_dump(exclude_none=True) if isinstance(link, Link) else link
        for name, link in links.items()
    }


Node.model_rebuild()
