"""
Traversal descriptions for the Neo4j REST traversal framework.

A TraversalDescription says how the server should walk the graph from a
start node:
- order: BREADTH_FIRST or DEPTH_FIRST
- relationships: which relationship types to follow, in which direction
- uniqueness: how often a node/relationship may be revisited
- depth: a max depth, or a JavaScript prune evaluator run by the server
- return_filter: a built-in filter, or a JavaScript filter run by the server

Descriptions and paging settings are frozen pydantic models; build a new
one with ``model_copy(update=...)`` instead of mutating.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, StrictInt, field_validator

# =============================================================================
# Enums
# =============================================================================


class TraversalOrder(Enum):
    """Order in which the server visits nodes."""

    BREADTH_FIRST = "breadth_first"
    DEPTH_FIRST = "depth_first"


class Direction(Enum):
    """Direction used to filter relationships during a traversal.

    ANY is only meaningful as a filter; an edge of a returned path
    always has a ConcreteDirection.
    """

    OUTGOING = "out"
    INCOMING = "in"
    ANY = "all"


class ConcreteDirection(Enum):
    """Direction of an edge as observed in a returned path."""

    OUT = "->"
    IN = "<-"


class Uniqueness(Enum):
    """Server-side rules limiting revisits during a traversal.

    A description without uniqueness leaves the server default ("none").
    """

    NODE_GLOBAL = "node_global"
    RELATIONSHIP_GLOBAL = "relationship_global"
    NODE_PATH = "node_path"
    RELATIONSHIP_PATH = "relationship_path"


class ReturnFilter(Enum):
    """Built-in return filters."""

    ALL = "all"
    ALL_BUT_START_NODE = "all_but_start_node"


# =============================================================================
# Value types
# =============================================================================


class JavaScriptExpression(BaseModel):
    """Expression evaluated by the server, used as prune evaluator or return filter."""

    model_config = ConfigDict(frozen=True)

    LANGUAGE: ClassVar[str] = "javascript"

    body: str


class RelationshipFilter(BaseModel):
    """Relationship type to follow and the direction to follow it in."""

    model_config = ConfigDict(frozen=True)

    type: str
    direction: Direction = Direction.ANY


class TraversalDescription(BaseModel):
    """Immutable description of a traversal request.

    The defaults describe a breadth-first walk of depth 1 over every
    relationship, returning all nodes including the start node.
    """

    model_config = ConfigDict(frozen=True)

    order: TraversalOrder = TraversalOrder.BREADTH_FIRST
    relationships: tuple[RelationshipFilter, ...] = ()
    uniqueness: Uniqueness | None = None
    depth: Annotated[StrictInt, Field(ge=0)] | JavaScriptExpression = 1
    return_filter: ReturnFilter | JavaScriptExpression = ReturnFilter.ALL

    @field_validator("relationships", mode="before")
    @classmethod
    def _coerce_relationship_filters(cls, value: Any) -> Any:
        """Accept ``(type, direction)`` pairs alongside RelationshipFilter objects."""
        if not isinstance(value, (list, tuple)):
            return value
        filters = []
        for item in value:
            if isinstance(item, (list, tuple)):
                if len(item) != 2:
                    raise ValueError(
                        f"Relationship filter must be a (type, direction) pair, got {len(item)} items"
                    )
                rel_type, direction = item
                item = RelationshipFilter(type=rel_type, direction=direction)
            filters.append(item)
        return tuple(filters)


class TraversalPaging(BaseModel):
    """Paging window for a paged traversal."""

    model_config = ConfigDict(frozen=True)

    page_size: PositiveInt = 50
    lease_seconds: PositiveInt = 60

    @classmethod
    def from_settings(cls, settings: Any) -> TraversalPaging:
        """Build the paging window configured in Settings."""
        return cls(
            page_size=settings.traversal_page_size,
            lease_seconds=settings.traversal_page_lease_seconds,
        )
