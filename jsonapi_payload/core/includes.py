"""Selection of included resources by relationship path."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from jsonapi_payload.schemas.resource import Node, relationship_keys

logger = logging.getLogger(__name__)


def index_nodes(nodes: Iterable[Node | None]) -> dict[str, Node]:
    """Map identity keys to nodes, keeping the first node seen for a key."""
    index: dict[str, Node] = {}
    append_nodes(index, nodes)
    return index


def append_nodes(index: dict[str, Node], nodes: Iterable[Node | None]) -> None:
    """Add ``nodes`` to ``index`` unless their key is already present."""
    for node in nodes:
        if node is None:
            continue
        index.setdefault(node.key, node)


def resolve_keys(keys: Iterable[str], candidates: Mapping[str, Node]) -> list[Node]:
    """Return the candidate nodes for ``keys``, skipping keys with no candidate."""
    resolved = []
    for key in keys:
        node = candidates.get(key)
        if node is None:
            logger.debug("Relationship target %s is not in the candidate pool", key)
            continue
        resolved.append(node)
    return resolved


def append_path(
    includes: dict[str, Node],
    nodes: Iterable[Node | None],
    path: Sequence[str],
    candidates: Mapping[str, Node],
) -> None:
    """Add every candidate reachable from ``nodes`` along ``path`` to ``includes``.

    Each segment of ``path`` names a relationship; the nodes resolved for one
    segment are kept and become the starting points for the next one.
    """
    if not path:
        return
    relationship, rest = path[0], path[1:]
    for node in nodes:
        keys = relationship_keys(node, relationship)
        if not keys:
            continue
        related = resolve_keys(keys, candidates)
        append_nodes(includes, related)
        if rest:
            append_path(includes, related, rest, candidates)


def sorted_nodes(nodes: Mapping[str, Node]) -> list[Node]:
    """Return the nodes of ``nodes`` ordered by type, then id."""
    return sorted(nodes.values(), key=lambda node: (node.type, node.id))


def filter_included(
    primary: Sequence[Node | None],
    candidates: Iterable[Node | None],
    relationship_paths: Iterable[str],
) -> list[Node]:
    """Return the candidates reachable from ``primary`` through ``relationship_paths``.

    Paths are dot separated relationship names such as ``"comments.author"``;
    every intermediate resource along a path is kept as well. Only candidates
    are returned, deduplicated by ``type,id`` and ordered by type then id.
    Relationships that are missing, empty or point outside the candidate pool
    contribute nothing.
    """
    paths = list(relationship_paths)
    index = index_nodes(candidates)
    includes: dict[str, Node] = {}
    for relationship_path in paths:
        append_path(includes, primary, relationship_path.split("."), index)
    logger.debug(
        "Kept %d of %d included resources for paths %s",
        len(includes),
        len(index),
        paths,
    )
    return sorted_nodes(includes)
