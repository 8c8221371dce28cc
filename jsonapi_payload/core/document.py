"""JSON:API document construction."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from jsonapi_payload.core.links import validate_links, validate_meta
from jsonapi_payload.schemas.document import ManyPayload, OnePayload, Payload
from jsonapi_payload.schemas.resource import Node, RelationshipManyNode, RelationshipOneNode


class JSONAPIDocumentBuilder:
    """Build JSON:API v1.1 documents from resource objects."""

    validate: bool = True

    def build_single(
        self,
        resource: Node | Mapping[str, Any] | None,
        *,
        included: Iterable[Node | Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
        include: Sequence[str] | None = None,
    ) -> OnePayload:
        """Return a document for a single resource object.

        ``included`` is the candidate pool; when ``include`` is given only the
        resources reachable through those relationship paths are kept.
        """
        payload = OnePayload(
            data=self.node(resource) if resource is not None else None,
            included=[self.node(item) for item in included or ()],
            links=self.links(links),
            meta=self.meta(meta),
        )
        if include is not None:
            payload.filter_included(include)
        return payload

    def build_collection(
        self,
        resources: Iterable[Node | Mapping[str, Any]],
        *,
        included: Iterable[Node | Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
        include: Sequence[str] | None = None,
    ) -> ManyPayload:
        """Return a document for a collection of resources."""
        payload = ManyPayload(
            data=[self.node(item) for item in resources],
            included=[self.node(item) for item in included or ()],
            links=self.links(links),
            meta=self.meta(meta),
        )
        if include is not None:
            payload.filter_included(include)
        return payload

    def build_error(self, errors: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API error document from error objects."""
        return {"errors": [dict(error) for error in errors]}

    def render(self, payload: Payload) -> dict[str, Any]:
        """Return the wire representation of ``payload``."""
        return payload.to_document()

    def node(self, resource: Node | Mapping[str, Any]) -> Node:
        """Return ``resource`` as a :class:`Node`, checking its links and meta."""
        if isinstance(resource, Node):
            if not self.validate:
                return resource
            node = resource.model_copy(deep=True)
        else:
            node = Node.model_validate(resource)
        if self.validate:
            node.links = validate_links(node.links)
            node.meta = validate_meta(node.meta)
            for relationship in (node.relationships or {}).values():
                if isinstance(relationship, (RelationshipOneNode, RelationshipManyNode)):
                    relationship.links = validate_links(relationship.links)
                    relationship.meta = validate_meta(relationship.meta)
        return node

    def links(self, links: Mapping[str, Any] | None) -> dict[str, Any] | None:
        if not self.validate:
            return dict(links) if links is not None else None
        return validate_links(links)

    def meta(self, meta: Mapping[str, Any] | None) -> dict[str, Any] | None:
        if not self.validate:
            return dict(meta) if meta is not None else None
        return validate_meta(meta)
