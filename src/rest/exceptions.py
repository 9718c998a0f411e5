"""
Custom exceptions for the Neo4j REST layer.

Exception naming avoids shadowing Python builtins (ConnectionError,
LookupError): every error is prefixed with Neo4j and derives from Neo4jError.
"""

from __future__ import annotations

from typing import Any


class Neo4jError(Exception):
    """Base exception for all Neo4j-related errors."""

    pass


class Neo4jConnectionError(Neo4jError):
    """Raised when the HTTP transport to Neo4j fails.

    Named Neo4jConnectionError to avoid shadowing Python's
    built-in ConnectionError.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize with message and optional cause.

        Args:
            message: Human-readable error description
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.cause = cause


class Neo4jUnexpectedResponseError(Neo4jError):
    """Raised when the server answers with a status code the operation does not expect."""

    def __init__(
        self,
        status_code: int,
        path: str | None = None,
        body: str | None = None,
    ) -> None:
        """Initialize with the offending status code.

        Args:
            status_code: HTTP status code returned by the server
            path: Request path that produced the response
            body: Raw response body (Neo4j puts its error message here)
        """
        message = f"Unexpected response {status_code}"
        if path:
            message += f" for {path}"
        if body:
            message += f": {body[:500]}"
        super().__init__(message)
        self.status_code = status_code
        self.path = path
        self.body = body


class Neo4jNoEntityError(Neo4jError):
    """Raised when the node or relationship a request starts from does not exist."""

    def __init__(self, entity_path: str) -> None:
        super().__init__(f"No such entity: {entity_path}")
        self.entity_path = entity_path


class Neo4jDecodeError(Neo4jError):
    """Raised when a server response cannot be decoded into the expected type."""

    def __init__(self, message: str, payload: Any = None) -> None:
        """Initialize with message and the fragment that failed to decode.

        Args:
            message: Human-readable error description
            payload: The JSON fragment that could not be decoded
        """
        super().__init__(message)
        self.payload = payload


class MalformedPathError(Neo4jDecodeError):
    """Raised when path nodes, relationships and directions do not line up.

    A path needs exactly one more node than relationships and, when
    directions are given, one direction per relationship.
    """

    def __init__(
        self,
        nodes: list[Any],
        relationships: list[Any],
        directions: list[Any] | None = None,
    ) -> None:
        message = f"Wrong path nodes: {nodes!r} rels: {relationships!r}"
        if directions is not None:
            message += f" dirs: {directions!r}"
        super().__init__(
            message,
            payload={
                "nodes": nodes,
                "relationships": relationships,
                "directions": directions,
            },
        )
        self.nodes = nodes
        self.relationships = relationships
        self.directions = directions


class DirectionDecodeError(Neo4jDecodeError):
    """Raised when a path direction is not one of the literals "->" or "<-"."""

    def __init__(self, literal: Any, directions: list[Any] | None = None) -> None:
        super().__init__(
            f"Wrong path direction {literal!r} in {directions!r}",
            payload=directions,
        )
        self.literal = literal
        self.directions = directions
