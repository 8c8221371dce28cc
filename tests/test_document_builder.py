"""Tests for building payloads and error documents."""
from __future__ import annotations

import pytest

from jsonapi_payload.core.document import JSONAPIDocumentBuilder
from jsonapi_payload.core.errors import JSONAPIErrorBuilder, LinksValidationError, MetaValidationError
from jsonapi_payload.schemas import Link, ManyPayload, Node, OnePayload, RelationshipOneNode


@pytest.fixture
def builder() -> JSONAPIDocumentBuilder:
    return JSONAPIDocumentBuilder()


ARTICLE = {
    "type": "articles",
    "id": "1",
    "relationships": {
        "author": {"data": {"type": "people", "id": "9"}},
        "comments": {"data": [{"type": "comments", "id": "5"}]},
    },
}

POOL = [
    {"type": "comments", "id": "5"},
    {"type": "people", "id": "9"},
    {"type": "people", "id": "10"},
]


def test_build_single_without_include_keeps_pool(builder: JSONAPIDocumentBuilder) -> None:
    payload = builder.build_single(ARTICLE, included=POOL)

    assert isinstance(payload, OnePayload)
    assert [node.key for node in payload.included] == ["comments,5", "people,9", "people,10"]


def test_build_single_with_include(builder: JSONAPIDocumentBuilder) -> None:
    payload = builder.build_single(ARTICLE, included=POOL, include=["author"])

    assert [node.key for node in payload.included] == ["people,9"]


def test_build_collection_with_include(builder: JSONAPIDocumentBuilder, article: Node, candidates: list[Node]) -> None:
    payload = builder.build_collection(
        [article],
        included=candidates,
        links={"self": "http://example.com/articles"},
        meta={"total": 1},
        include=["comments.author"],
    )

    assert isinstance(payload, ManyPayload)
    assert [node.key for node in payload.included] == ["comments,12", "comments,5", "people,9"]
    assert payload.to_document()["meta"] == {"total": 1}


def test_build_single_null_data(builder: JSONAPIDocumentBuilder) -> None:
    payload = builder.build_single(None, included=POOL, include=["author"])

    assert payload.data is None
    assert len(payload.included) == 3
    assert builder.render(payload)["data"] is None


def test_links_are_validated(builder: JSONAPIDocumentBuilder) -> None:
    with pytest.raises(LinksValidationError) as excinfo:
        builder.build_single(ARTICLE, links={"self": 12})

    assert excinfo.value.key == "self"


def test_node_links_are_validated(builder: JSONAPIDocumentBuilder) -> None:
    resource = {**ARTICLE, "links": {"self": ["http://example.com/articles/1"]}}

    with pytest.raises(LinksValidationError):
        builder.build_single(resource)


def test_relationship_links_are_validated(builder: JSONAPIDocumentBuilder) -> None:
    resource = {
        "type": "articles",
        "id": "1",
        "relationships": {"author": {"data": None, "links": {"related": 9}}},
    }

    with pytest.raises(LinksValidationError) as excinfo:
        builder.build_collection([resource])

    assert excinfo.value.key == "related"


def test_link_objects_are_coerced(builder: JSONAPIDocumentBuilder) -> None:
    payload = builder.build_single(
        ARTICLE, links={"self": {"href": "http://example.com/articles/1"}}
    )

    assert payload.links == {"self": Link(href="http://example.com/articles/1")}
    assert builder.render(payload)["links"] == {"self": {"href": "http://example.com/articles/1"}}


def test_meta_is_validated(builder: JSONAPIDocumentBuilder) -> None:
    with pytest.raises(MetaValidationError):
        builder.build_collection([], meta=["total"])


def test_validation_can_be_disabled() -> None:
    class LenientBuilder(JSONAPIDocumentBuilder):
        validate = False

    payload = LenientBuilder().build_single(ARTICLE, links={"self": 12})

    assert payload.links == {"self": 12}


def test_inclusion_never_raises(builder: JSONAPIDocumentBuilder) -> None:
    payload = builder.build_single(
        ARTICLE, included=POOL, include=["missing", "author.missing", "comments.author.x"]
    )

    assert [node.key for node in payload.included] == ["comments,5", "people,9"]


def test_build_error(builder: JSONAPIDocumentBuilder) -> None:
    error = JSONAPIErrorBuilder().error_object(status="404", title="Not Found")

    assert builder.build_error([error]) == {"errors": [{"status": "404", "title": "Not Found"}]}


def test_error_object_requires_a_field() -> None:
    with pytest.raises(ValueError):
        JSONAPIErrorBuilder().error_object()


def test_node_inputs_are_not_modified(builder: JSONAPIDocumentBuilder) -> None:
    author = RelationshipOneNode(
        data=Node(type="people", id="9"),
        links={"related": {"href": "http://example.com/articles/1/author"}},
    )
    article = Node(
        type="articles",
        id="1",
        relationships={"author": author},
        links={"self": {"href": "http://example.com/articles/1"}},
    )

    payload = builder.build_single(article)

    assert article.links == {"self": {"href": "http://example.com/articles/1"}}
    assert author.links == {"related": {"href": "http://example.com/articles/1/author"}}
    assert payload.data.links == {"self": Link(href="http://example.com/articles/1")}
    assert payload.data.relationships["author"].links == {
        "related": Link(href="http://example.com/articles/1/author")
    }
