"""Shared fixtures for payload and inclusion tests."""
from __future__ import annotations

import pytest

from jsonapi_payload.schemas import Node, OnePayload, RelationshipManyNode, RelationshipOneNode


def stub(type_: str, id_: str) -> Node:
    return Node(type=type_, id=id_)


def to_one(type_: str, id_: str) -> RelationshipOneNode:
    return RelationshipOneNode(data=stub(type_, id_))


def to_many(*stubs: tuple[str, str]) -> RelationshipManyNode:
    return RelationshipManyNode(data=[stub(type_, id_) for type_, id_ in stubs])


def keys(nodes: list[Node]) -> list[str]:
    return [node.key for node in nodes]


@pytest.fixture
def article() -> Node:
    return Node(
        type="articles",
        id="1",
        attributes={"title": "JSON:API paints my bikeshed!"},
        relationships={
            "author": to_one("people", "9"),
            "comments": to_many(("comments", "5"), ("comments", "12")),
        },
        links={"self": "http://example.com/articles/1"},
        meta={"views": 42},
    )


@pytest.fixture
def candidates() -> list[Node]:
    return [
        Node(type="people", id="9", attributes={"name": "Dan"}),
        Node(
            type="comments",
            id="5",
            attributes={"body": "First!"},
            relationships={"author": to_one("people", "9")},
        ),
        Node(
            type="comments",
            id="12",
            attributes={"body": "I like XML better"},
            relationships={"author": to_one("people", "10")},
        ),
    ]


@pytest.fixture
def article_payload(article: Node, candidates: list[Node]) -> OnePayload:
    return OnePayload(data=article, included=candidates)
