"""Base serializer for JSON:API payloads."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from sqlalchemy.inspection import inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm.attributes import NO_VALUE

from jsonapi_payload.core.includes import append_nodes
from jsonapi_payload.core.links import validate_links, validate_meta
from jsonapi_payload.schemas.document import ManyPayload, OnePayload
from jsonapi_payload.schemas.resource import Node, RelationshipManyNode, RelationshipOneNode

logger = logging.getLogger(__name__)


class JSONAPISerializer:
    """Serialize SQLAlchemy models into JSON:API nodes and payloads."""

    class Meta:
        """Serializer metadata (type, model, fields)."""

        type_: str = ""
        model: Any = None
        fields: list[str] = []

    #: Relationship name -> serializer class for related resources.
    included_serializers: dict[str, type[JSONAPISerializer]] = {}

    def to_node(self, instance: Any, *, base_url: str | None = None) -> Node:
        """Serialize a model instance into a resource node."""
        node = Node(
            type=self.Meta.type_,
            id=self.get_id(instance),
            attributes=self.get_attributes(instance) or None,
            relationships=self.get_relationships(instance, base_url=base_url) or None,
        )
        links = dict(self._hook(instance, "jsonapi_links") or {})
        if base_url:
            links.setdefault("self", self._resource_url(base_url, node.id))
        node.links = validate_links(links) if links else None
        node.meta = validate_meta(self._hook(instance, "jsonapi_meta"))
        return node

    def to_many(
        self, instances: Iterable[Any], *, base_url: str | None = None
    ) -> list[Node]:
        """Serialize a collection of instances."""
        return [self.to_node(instance, base_url=base_url) for instance in instances]

    def to_one_payload(
        self,
        instance: Any | None,
        *,
        include: Sequence[str] | None = None,
        base_url: str | None = None,
        links: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> OnePayload:
        """Return a single resource payload with its requested included resources.

        Without ``include`` the payload carries no included resources.
        """
        instances = [instance] if instance is not None else []
        payload = OnePayload(
            data=self.to_node(instance, base_url=base_url) if instance is not None else None,
            included=self.collect_candidates(instances, base_url=base_url),
            links=validate_links(links),
            meta=validate_meta(meta),
        )
        self._select_included(payload, include)
        return payload

    def to_many_payload(
        self,
        instances: Iterable[Any],
        *,
        include: Sequence[str] | None = None,
        base_url: str | None = None,
        links: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> ManyPayload:
        """Return a collection payload with its requested included resources."""
        instances = list(instances)
        payload = ManyPayload(
            data=self.to_many(instances, base_url=base_url),
            included=self.collect_candidates(instances, base_url=base_url),
            links=validate_links(links),
            meta=validate_meta(meta),
        )
        self._select_included(payload, include)
        return payload

    def collect_candidates(
        self, instances: Iterable[Any], *, base_url: str | None = None
    ) -> list[Node]:
        """Return every loaded related resource reachable from ``instances``.

        Related instances are serialized with ``included_serializers``; each
        resource appears once even when the object graph has cycles.
        """
        candidates: dict[str, Node] = {}
        visited: set[tuple[type, int]] = set()
        pending = [(self, instance) for instance in instances]
        while pending:
            serializer, instance = pending.pop()
            marker = (type(serializer), id(instance))
            if marker in visited:
                continue
            visited.add(marker)
            for name, related in serializer.loaded_related(instance):
                related_serializer = serializer.get_included_serializer(name)
                if related_serializer is None:
                    logger.debug("No serializer for relationship %s, skipping", name)
                    continue
                nodes = related_serializer.to_many(related, base_url=base_url)
                append_nodes(candidates, nodes)
                pending.extend((related_serializer, item) for item in related)
        return list(candidates.values())

    def get_included_serializer(self, relationship: str) -> JSONAPISerializer | None:
        """Return serializer for a relationship if configured."""
        serializer = self.included_serializers.get(relationship)
        return serializer() if serializer else None

    def get_id(self, instance: Any) -> str:
        """Return the resource id as a string."""
        value = getattr(instance, "id", None)
        return "" if value is None else str(value)

    def get_attributes(self, instance: Any) -> dict[str, Any]:
        """Return JSON:API attributes derived from serializer fields."""
        if self.Meta.fields:
            return {
                field: getattr(instance, field)
                for field in self.Meta.fields
                if field != "id"
            }
        if hasattr(instance, "__dict__"):
            relationship_names = {name for name, _ in self._mapper_relationships(instance)}
            return {
                key: value
                for key, value in instance.__dict__.items()
                if not key.startswith("_") and key != "id" and key not in relationship_names
            }
        return {}

    def get_relationships(
        self, instance: Any, *, base_url: str | None = None
    ) -> dict[str, Any]:
        """Return relationship objects for every loaded relationship."""
        relationships: dict[str, Any] = {}
        resource_id = self.get_id(instance)
        for name, relationship in self._mapper_relationships(instance):
            if not self._is_loaded(instance, name):
                logger.debug("Relationship %s of %s is not loaded", name, self.Meta.type_)
                continue
            related = getattr(instance, name, None)
            links = dict(self._hook(instance, "jsonapi_relationship_links", name) or {})
            if base_url:
                for key, value in self._relationship_links(base_url, resource_id, name).items():
                    links.setdefault(key, value)
            meta = validate_meta(self._hook(instance, "jsonapi_relationship_meta", name))
            if relationship.uselist:
                relationships[name] = RelationshipManyNode(
                    data=[self._identifier(item) for item in related or []],
                    links=validate_links(links) if links else None,
                    meta=meta,
                )
            else:
                relationships[name] = RelationshipOneNode(
                    data=self._identifier(related) if related is not None else None,
                    links=validate_links(links) if links else None,
                    meta=meta,
                )
        return relationships

    def loaded_related(self, instance: Any) -> list[tuple[str, list[Any]]]:
        """Return ``(name, related instances)`` for each loaded relationship."""
        related_items = []
        for name, relationship in self._mapper_relationships(instance):
            if not self._is_loaded(instance, name):
                continue
            related = getattr(instance, name, None)
            if relationship.uselist:
                related_items.append((name, list(related or [])))
            elif related is not None:
                related_items.append((name, [related]))
        return related_items

    def _select_included(self, payload: OnePayload | ManyPayload, include: Sequence[str] | None) -> None:
        if include:
            payload.filter_included(include)
        else:
            payload.clear_included()

    def _mapper_relationships(self, instance: Any) -> list[tuple[str, Any]]:
        try:
            mapper = inspect(instance.__class__)
        except NoInspectionAvailable:
            return []
        return [(relationship.key, relationship) for relationship in mapper.relationships]

    def _is_loaded(self, instance: Any, name: str) -> bool:
        state = inspect(instance)
        return state.attrs[name].loaded_value is not NO_VALUE

    def _hook(self, instance: Any, name: str, *args: Any) -> Any:
        hook = getattr(instance, name, None)
        return hook(*args) if callable(hook) else None

    def _resource_url(self, base_url: str, resource_id: str) -> str:
        base = base_url.rstrip("/")
        return f"{base}/{self.Meta.type_}/{resource_id}"

    def _relationship_links(
        self, base_url: str, resource_id: str, relationship: str
    ) -> dict[str, str]:
        base = base_url.rstrip("/")
        resource_path = f"{base}/{self.Meta.type_}/{resource_id}"
        return {
            "self": f"{resource_path}/relationships/{relationship}",
            "related": f"{resource_path}/{relationship}",
        }

    def _identifier(self, related: Any) -> Node:
        serializer = None
        for serializer_class in self.included_serializers.values():
            if serializer_class.Meta.model is type(related):
                serializer = serializer_class()
                break
        if serializer is not None:
            return Node(type=serializer.Meta.type_, id=serializer.get_id(related))
        type_name = getattr(related, "__tablename__", related.__class__.__name__.lower())
        value = getattr(related, "id", None)
        return Node(type=type_name, id="" if value is None else str(value))
