# REST layer for the Neo4j HTTP API
"""
REST layer for the Neo4j HTTP API including:
- Neo4jHttpClient: pooled httpx client behind Neo4jHttpClientProtocol
- Node/Relationship entities and their NodePath/RelPath identifiers
- Neo4jError hierarchy
"""

from src.rest.entities import (
    Node,
    NodePath,
    Relationship,
    RelPath,
    resource_path,
)
from src.rest.exceptions import (
    DirectionDecodeError,
    MalformedPathError,
    Neo4jConnectionError,
    Neo4jDecodeError,
    Neo4jError,
    Neo4jNoEntityError,
    Neo4jUnexpectedResponseError,
)
from src.rest.http_client import (
    FakeNeo4jHttpClient,
    Neo4jHttpClient,
    Neo4jHttpClientProtocol,
)

__all__ = [
    # Exceptions
    "Neo4jError",
    "Neo4jConnectionError",
    "Neo4jUnexpectedResponseError",
    "Neo4jNoEntityError",
    "Neo4jDecodeError",
    "MalformedPathError",
    "DirectionDecodeError",
    # Client
    "Neo4jHttpClient",
    "Neo4jHttpClientProtocol",
    "FakeNeo4jHttpClient",
    # Entities
    "Node",
    "NodePath",
    "Relationship",
    "RelPath",
    "resource_path",
]
