"""
Traversal execution against the Neo4j REST API.

Runs server-side traversals from a start node and decodes the results:
- traverse_nodes / traverse_relationships: lists of hydrated entities
- traverse_paths: identifier paths (NodePath/RelPath with directions)
- traverse_full_paths: paths of hydrated entities

Each also has a paged variant returning the first page and a cursor
(see src.traversal.paging).

Design follows:
- Repository pattern: works with any Neo4jHttpClientProtocol
  (Neo4jHttpClient or FakeNeo4jHttpClient)
- A 404 from the start point becomes Neo4jNoEntityError; every other
  error is propagated unchanged
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from src.rest.entities import EntityLike, Node, Relationship, resource_path
from src.rest.exceptions import Neo4jNoEntityError, Neo4jUnexpectedResponseError
from src.rest.http_client import Neo4jHttpClientProtocol
from src.traversal.description import TraversalDescription, TraversalPaging
from src.traversal.encoding import encode_traversal_request, paging_query_string
from src.traversal.paging import (
    PagedTraversal,
    PagedTraversalMore,
    cursor_from_headers,
    next_traversal_page,
)
from src.traversal.paths import FullPath, IdPath
from src.traversal.results import TraversalResultKind

logger = logging.getLogger(__name__)


def traversal_target(start: EntityLike, kind: TraversalResultKind) -> str:
    """Request path of a traversal, e.g. ``/db/data/node/5/traverse/node``."""
    return f"{resource_path(start)}/traverse/{kind.value}"


def paged_traversal_target(
    start: EntityLike,
    kind: TraversalResultKind,
    paging: TraversalPaging,
) -> str:
    """Request path of a paged traversal including the paging query string."""
    return (
        f"{resource_path(start)}/paged/traverse/{kind.value}"
        f"?{paging_query_string(paging)}"
    )


@contextmanager
def _not_found_as_no_entity(start: EntityLike) -> Iterator[None]:
    """Translate a 404 for the start point into Neo4jNoEntityError."""
    try:
        yield
    except Neo4jUnexpectedResponseError as e:
        if e.status_code == 404:
            raise Neo4jNoEntityError(resource_path(start)) from e
        raise


class GraphTraversal:
    """Traversal engine for the Neo4j REST traversal framework.

    Usage:
        with Neo4jHttpClient(settings=settings) as client:
            traversal = GraphTraversal(client)
            desc = TraversalDescription(
                relationships=[("KNOWS", Direction.OUTGOING)],
                depth=3,
            )

            nodes = traversal.traverse_nodes(desc, "/db/data/node/0")

            page = traversal.paged_traverse_paths(desc, TraversalPaging(), node)
            while not paged_traversal_done(page):
                handle(get_paged_values(page))
                page = traversal.next_page(page)
    """

    def __init__(self, client: Neo4jHttpClientProtocol) -> None:
        """Initialize traversal engine.

        Args:
            client: Neo4j HTTP client (Neo4jHttpClient or FakeNeo4jHttpClient)
        """
        self._client = client

    @property
    def client(self) -> Neo4jHttpClientProtocol:
        return self._client

    # =========================================================================
    # Single-shot traversal
    # =========================================================================

    def traverse(
        self,
        kind: TraversalResultKind,
        description: TraversalDescription,
        start: EntityLike,
    ) -> list[Any]:
        """Run a traversal and decode every result.

        Args:
            kind: Which results to return (nodes, relationships, paths, full paths)
            description: How to traverse
            start: Start node (entity, identifier or resource path)

        Returns:
            Decoded results, in the order the server returned them

        Raises:
            Neo4jNoEntityError: If the start point does not exist
            Neo4jDecodeError: If the response cannot be decoded
            Neo4jError: Any other error reported by the client
        """
        target = traversal_target(start, kind)
        body = encode_traversal_request(description)
        with _not_found_as_no_entity(start):
            payload = self._client.create(target, body)
        results = kind.decode_all(payload)
        logger.debug("Traversal %s returned %d results", target, len(results))
        return results

    def traverse_nodes(self, description: TraversalDescription, start: EntityLike) -> list[Node]:
        """Run a traversal and get the resulting nodes."""
        return self.traverse(TraversalResultKind.NODE, description, start)

    def traverse_relationships(
        self, description: TraversalDescription, start: EntityLike
    ) -> list[Relationship]:
        """Run a traversal and get the resulting relationships."""
        return self.traverse(TraversalResultKind.RELATIONSHIP, description, start)

    def traverse_paths(self, description: TraversalDescription, start: EntityLike) -> list[IdPath]:
        """Run a traversal and get the resulting identifier paths.

        Servers before Neo4j 2.2 do not report edge directions; those
        edges come back as OUT with ``direction_reported=False``.
        """
        return self.traverse(TraversalResultKind.PATH, description, start)

    def traverse_full_paths(
        self, description: TraversalDescription, start: EntityLike
    ) -> list[FullPath]:
        """Run a traversal and get the resulting paths of full entities."""
        return self.traverse(TraversalResultKind.FULLPATH, description, start)

    # =========================================================================
    # Paged traversal
    # =========================================================================

    def paged_traverse(
        self,
        kind: TraversalResultKind,
        description: TraversalDescription,
        paging: TraversalPaging,
        start: EntityLike,
    ) -> PagedTraversal[Any]:
        """Start a paged traversal and get its first page.

        Args:
            kind: Which results to return
            description: How to traverse
            paging: Page size and cursor lease time
            start: Start node (entity, identifier or resource path)

        Returns:
            PagedTraversalMore with the first page and the cursor taken
            from the Location header (empty if the header is missing)

        Raises:
            Neo4jNoEntityError: If the start point does not exist
            Neo4jDecodeError: If the response cannot be decoded
            Neo4jError: Any other error reported by the client
        """
        target = paged_traversal_target(start, kind, paging)
        body = encode_traversal_request(description)
        with _not_found_as_no_entity(start):
            payload, headers = self._client.create_with_headers(target, body)
        values = tuple(kind.decode_all(payload))
        cursor = cursor_from_headers(headers)
        logger.debug("Paged traversal %s started, cursor %r", target, cursor)
        return PagedTraversalMore(cursor, values, kind)

    def paged_traverse_nodes(
        self, description: TraversalDescription, paging: TraversalPaging, start: EntityLike
    ) -> PagedTraversal[Node]:
        """Start a paged traversal returning nodes."""
        return self.paged_traverse(TraversalResultKind.NODE, description, paging, start)

    def paged_traverse_relationships(
        self, description: TraversalDescription, paging: TraversalPaging, start: EntityLike
    ) -> PagedTraversal[Relationship]:
        """Start a paged traversal returning relationships."""
        return self.paged_traverse(TraversalResultKind.RELATIONSHIP, description, paging, start)

    def paged_traverse_paths(
        self, description: TraversalDescription, paging: TraversalPaging, start: EntityLike
    ) -> PagedTraversal[IdPath]:
        """Start a paged traversal returning identifier paths.

        Same direction caveat as traverse_paths for pre-2.2 servers.
        """
        return self.paged_traverse(TraversalResultKind.PATH, description, paging, start)

    def paged_traverse_full_paths(
        self, description: TraversalDescription, paging: TraversalPaging, start: EntityLike
    ) -> PagedTraversal[FullPath]:
        """Start a paged traversal returning paths of full entities."""
        return self.paged_traverse(TraversalResultKind.FULLPATH, description, paging, start)

    def next_page(self, state: PagedTraversal[Any]) -> PagedTraversal[Any]:
        """Fetch the next page of a paged traversal with this engine's client."""
        return next_traversal_page(self._client, state)
