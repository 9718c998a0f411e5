"""
Path model for traversal results.

A path alternates nodes and relationships and always starts and ends
with a node:

    PathEnd(n)                       a single node
    PathLink(n, r, rest)             a node, an edge, then the rest of the path

so a path holds exactly one more node than relationships. Two shapes come
back from the server:

- IdPath: node and relationship identifiers; each edge carries the
  ConcreteDirection it was walked in
- FullPath: hydrated Node and Relationship entities; the direction is
  whatever the Relationship's start/end say and is not tracked separately

Servers before Neo4j 2.2 do not report directions for identifier paths.
Those edges are decoded as ConcreteDirection.OUT with
``direction_reported=False``; check that flag before trusting the
direction of an edge.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from src.rest.entities import Node, NodePath, Relationship, RelPath
from src.rest.exceptions import (
    DirectionDecodeError,
    MalformedPathError,
    Neo4jDecodeError,
)
from src.traversal.description import ConcreteDirection

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")


# =============================================================================
# Path data type
# =============================================================================


class Path(Generic[A, B]):
    """Base of the two path variants, PathEnd and PathLink."""

    __slots__ = ()

    @property
    def nodes(self) -> list[A]:
        return path_nodes(self)

    @property
    def relationships(self) -> list[B]:
        return path_relationships(self)

    @property
    def start(self) -> A:
        return self.node  # type: ignore[attr-defined]

    @property
    def end(self) -> A:
        return path_nodes(self)[-1]

    def __len__(self) -> int:
        """Number of relationships in the path."""
        return len(path_relationships(self))

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[A | B]:
        """Yield node, relationship, node, ... in path order."""
        current: Path[A, B] = self
        while isinstance(current, PathLink):
            yield current.node
            yield current.relationship
            current = current.rest
        yield current.node  # type: ignore[attr-defined]


@dataclass(frozen=True)
class PathEnd(Path[A, B]):
    """Terminal element of a path: a single node."""

    node: A


@dataclass(frozen=True)
class PathLink(Path[A, B]):
    """A node, the relationship leaving it, and the rest of the path."""

    node: A
    relationship: B
    rest: Path[A, B]


@dataclass(frozen=True)
class DirectedRelationship:
    """Relationship identifier as it appears in an identifier path.

    Attributes:
        relationship: The relationship identifier
        direction: Direction the traversal walked the relationship in
        direction_reported: False when the server did not send directions
            and ``direction`` is the OUT default
    """

    relationship: RelPath
    direction: ConcreteDirection
    direction_reported: bool = True


IdPath = Path[NodePath, DirectedRelationship]
FullPath = Path[Node, Relationship]


def path_nodes(path: Path[A, B]) -> list[A]:
    """Get all the nodes of a path, in order."""
    nodes: list[A] = []
    current = path
    while isinstance(current, PathLink):
        nodes.append(current.node)
        current = current.rest
    nodes.append(current.node)  # type: ignore[attr-defined]
    return nodes


def path_relationships(path: Path[A, B]) -> list[B]:
    """Get all the relationships of a path, in order."""
    relationships: list[B] = []
    current = path
    while isinstance(current, PathLink):
        relationships.append(current.relationship)
        current = current.rest
    return relationships


# =============================================================================
# Reconstruction
# =============================================================================


def build_path(nodes: Sequence[A], relationships: Sequence[B]) -> Path[A, B]:
    """Assemble a path from parallel node and relationship sequences.

    Node i is followed by relationship i. Built from the tail so long
    paths do not hit the recursion limit.

    Raises:
        MalformedPathError: If there is not exactly one more node than relationships
    """
    nodes = list(nodes)
    relationships = list(relationships)
    if len(nodes) != len(relationships) + 1:
        raise MalformedPathError(nodes, relationships)

    path: Path[A, B] = PathEnd(nodes[-1])
    for node, relationship in zip(reversed(nodes[:-1]), reversed(relationships)):
        path = PathLink(node, relationship, path)
    return path


def build_id_path(
    nodes: Sequence[NodePath],
    relationships: Sequence[RelPath],
    directions: Sequence[ConcreteDirection] | None = None,
) -> IdPath:
    """Assemble an identifier path, tagging each relationship with its direction.

    Args:
        nodes: Node identifiers in path order
        relationships: Relationship identifiers in path order
        directions: One direction per relationship, or None when the
            server did not report them (every edge then defaults to OUT)

    Raises:
        MalformedPathError: If the node, relationship and direction counts disagree
    """
    reported = directions is not None
    if directions is None:
        directions = [ConcreteDirection.OUT] * len(relationships)

    if len(nodes) != len(relationships) + 1 or len(relationships) != len(directions):
        raise MalformedPathError(list(nodes), list(relationships), list(directions))

    edges = [
        DirectedRelationship(relationship, direction, direction_reported=reported)
        for relationship, direction in zip(relationships, directions)
    ]
    return build_path(nodes, edges)


# =============================================================================
# JSON decoding
# =============================================================================


def _field(obj: Any, key: str) -> list[Any]:
    if not isinstance(obj, dict):
        raise Neo4jDecodeError("wrong type for path", payload=obj)
    if key not in obj:
        raise Neo4jDecodeError(f"Path is missing {key!r}", payload=obj)
    value = obj[key]
    if not isinstance(value, list):
        raise Neo4jDecodeError(f"Path {key!r} must be a list", payload=obj)
    return value


def _urls(obj: Any, key: str) -> list[str]:
    values = _field(obj, key)
    if not all(isinstance(v, str) for v in values):
        raise Neo4jDecodeError(f"Path {key!r} must be a list of URLs", payload=obj)
    return values


def parse_direction(literal: Any, directions: list[Any] | None = None) -> ConcreteDirection:
    """Parse a path direction literal ("->" or "<-").

    Raises:
        DirectionDecodeError: For any other value
    """
    try:
        return ConcreteDirection(literal)
    except (ValueError, TypeError) as e:
        raise DirectionDecodeError(literal, directions) from e


def decode_id_path(obj: Any) -> IdPath:
    """Decode an identifier path from ``{"nodes", "relationships", "directions"?}``.

    Raises:
        Neo4jDecodeError: If the object does not have the expected shape
        DirectionDecodeError: If a direction literal is not "->" or "<-"
        MalformedPathError: If the counts disagree
    """
    nodes = [NodePath.from_url(url) for url in _urls(obj, "nodes")]
    relationships = [RelPath.from_url(url) for url in _urls(obj, "relationships")]

    directions: list[ConcreteDirection] | None = None
    if obj.get("directions") is not None:
        raw_directions = _field(obj, "directions")
        directions = [parse_direction(d, raw_directions) for d in raw_directions]
    else:
        logger.debug("Path without directions, defaulting %d edges to OUT", len(relationships))

    return build_id_path(nodes, relationships, directions)


def decode_full_path(obj: Any) -> FullPath:
    """Decode a full path from ``{"nodes": [node...], "relationships": [rel...]}``.

    Raises:
        Neo4jDecodeError: If the object or one of its entities has the wrong shape
        MalformedPathError: If there is not exactly one more node than relationships
    """
    raw_nodes = _field(obj, "nodes")
    raw_relationships = _field(obj, "relationships")
    try:
        nodes = [Node.model_validate(n) for n in raw_nodes]
        relationships = [Relationship.model_validate(r) for r in raw_relationships]
    except ValidationError as e:
        raise Neo4jDecodeError(f"Invalid entity in path: {e}", payload=obj) from e
    return build_path(nodes, relationships)
