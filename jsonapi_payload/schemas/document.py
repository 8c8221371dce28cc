"""Pydantic models for top-level JSON:API documents."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from jsonapi_payload.core.includes import filter_included
from jsonapi_payload.schemas.resource import Node, links_document


class Payload(BaseModel):
    """Shared fields and behaviour of single and collection documents."""

    included: List[Node] = Field(default_factory=list)
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @abstractmethod
    def primary_nodes(self) -> list[Node]:
        """Return primary data as a list of nodes."""

    def clear_included(self) -> None:
        """Drop every included resource."""
        self.included = []

    def filter_included(self, relationship_paths: Sequence[str]) -> None:
        """Keep only the included resources reachable through ``relationship_paths``.

        Does nothing when there is no primary data, no candidate included
        resources or no paths.
        """
        primary = self.primary_nodes()
        if not primary or not self.included or not relationship_paths:
            return
        self.included = filter_included(primary, self.included, relationship_paths)

    @abstractmethod
    def data_document(self) -> Any:
        """Return the wire representation of primary data."""

    def to_document(self) -> dict[str, Any]:
        """Return the wire representation of the document."""
        document: dict[str, Any] = {"data": self.data_document()}
        if self.included:
            document["included"] = [node.to_document() for node in self.included]
        if self.links:
            document["links"] = links_document(self.links)
        if self.meta:
            document["meta"] = dict(self.meta)
        return document


class OnePayload(Payload):
    """Document whose primary data is a single resource (or null)."""

    data: Optional[Node] = None

    def primary_nodes(self) -> list[Node]:
        return [self.data] if self.data is not None else []

    def data_document(self) -> Any:
        return self.data.to_document() if self.data is not None else None


class ManyPayload(Payload):
    """Document whose primary data is a list of resources."""

    data: List[Node] = Field(default_factory=list)

    def primary_nodes(self) -> list[Node]:
        return [node for node in self.data if node is not None]

    def data_document(self) -> Any:
        return [node.to_document() for node in self.data]
