"""
Result kinds of a traversal.

The traversal endpoints differ only in the sub-resource they are called on
(``/traverse/node``, ``/traverse/relationship``, ``/traverse/path``,
``/traverse/fullpath``) and in how each element of the returned JSON
array is decoded. TraversalResultKind binds the two together.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import ValidationError

from src.rest.entities import Node, Relationship
from src.rest.exceptions import Neo4jDecodeError
from src.traversal.paths import decode_full_path, decode_id_path


def decode_node(obj: Any) -> Node:
    """Decode a node from its REST representation."""
    try:
        return Node.model_validate(obj)
    except ValidationError as e:
        raise Neo4jDecodeError(f"Invalid node: {e}", payload=obj) from e


def decode_relationship(obj: Any) -> Relationship:
    """Decode a relationship from its REST representation."""
    try:
        return Relationship.model_validate(obj)
    except ValidationError as e:
        raise Neo4jDecodeError(f"Invalid relationship: {e}", payload=obj) from e


class TraversalResultKind(Enum):
    """What a traversal returns; the value is the sub-resource suffix."""

    NODE = "node"
    RELATIONSHIP = "relationship"
    PATH = "path"
    FULLPATH = "fullpath"

    def decode(self, obj: Any) -> Any:
        """Decode one element of a traversal response."""
        return _DECODERS[self](obj)

    def decode_all(self, payload: Any) -> list[Any]:
        """Decode a traversal response, which must be a JSON array.

        Raises:
            Neo4jDecodeError: If the payload is not a list or an element is invalid
        """
        if not isinstance(payload, list):
            raise Neo4jDecodeError(
                f"Expected a list of {self.value} results",
                payload=payload,
            )
        return [self.decode(item) for item in payload]


_DECODERS = {
    TraversalResultKind.NODE: decode_node,
    TraversalResultKind.RELATIONSHIP: decode_relationship,
    TraversalResultKind.PATH: decode_id_path,
    TraversalResultKind.FULLPATH: decode_full_path,
}
