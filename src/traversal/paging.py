"""
Paged traversal results.

A paged traversal is a server-side cursor. Starting one returns the
first page together with the cursor path (taken from the Location
header); each further page is a GET on that same path until the server
has nothing left.

States:
    PagedTraversalMore(cursor, values, kind)   a page is available
    DONE                                       no more pages

Values are immutable: advancing returns a new state. A state must not
be advanced from several threads at once without external locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import urlsplit

from src.rest.http_client import Neo4jHttpClientProtocol
from src.traversal.results import TraversalResultKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PagedTraversalDone:
    """Terminal state of a paged traversal. Use the DONE singleton."""

    _instance: PagedTraversalDone | None = None

    def __new__(cls) -> PagedTraversalDone:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DONE"


DONE = PagedTraversalDone()


@dataclass(frozen=True)
class PagedTraversalMore(Generic[T]):
    """A fetched page and the cursor to fetch the next one.

    Attributes:
        cursor: Server-issued resource path of the paging session;
            only valid against the server that issued it
        values: The most recently fetched page
        kind: How elements of further pages are decoded
    """

    cursor: str
    values: tuple[T, ...]
    kind: TraversalResultKind


PagedTraversal = PagedTraversalMore[T] | PagedTraversalDone


def cursor_from_headers(headers: Mapping[str, str]) -> str:
    """Extract the paging cursor from a Location header.

    Only the path component of the URL is kept. An absent or
    unparsable header gives an empty cursor.
    """
    location = None
    for name, value in headers.items():
        if name.lower() == "location":
            location = value
            break
    if not location:
        return ""
    try:
        return urlsplit(location).path
    except ValueError:
        logger.warning("Unparsable paging Location header: %r", location)
        return ""


def get_paged_values(state: PagedTraversal[T]) -> tuple[T, ...]:
    """Get the values of the current page, empty when done."""
    if isinstance(state, PagedTraversalMore):
        return state.values
    return ()


def paged_traversal_done(state: PagedTraversal[Any]) -> bool:
    """Whether a paged traversal has no more pages."""
    return isinstance(state, PagedTraversalDone)


def next_traversal_page(
    client: Neo4jHttpClientProtocol,
    state: PagedTraversal[T],
) -> PagedTraversal[T]:
    """Fetch the next page of a paged traversal.

    The cursor is kept as-is: the server binds the paging lease to
    that exact path. A state with an empty cursor (the server sent no
    usable Location header) is treated as exhausted: no request is sent
    and DONE is returned.

    Args:
        client: HTTP client to fetch the page with
        state: Current paged traversal state

    Returns:
        DONE if there are no more pages, otherwise a new state with the
        same cursor and the new page

    Raises:
        Neo4jDecodeError: If the page cannot be decoded
        Neo4jError: Any other error reported by the client
    """
    if not isinstance(state, PagedTraversalMore):
        return DONE
    if not state.cursor:
        logger.warning("Paged traversal has no cursor, treating it as done")
        return DONE

    payload = client.retrieve(state.cursor)
    if payload is None:
        logger.info("Paged traversal %s exhausted", state.cursor)
        return DONE

    values = tuple(state.kind.decode_all(payload))
    logger.debug("Fetched page of %d %s results from %s", len(values), state.kind.value, state.cursor)
    return PagedTraversalMore(state.cursor, values, state.kind)


def iter_paged_values(
    client: Neo4jHttpClientProtocol,
    state: PagedTraversal[T],
) -> Iterator[T]:
    """Yield every value of the current page and of all following pages."""
    while isinstance(state, PagedTraversalMore):
        yield from state.values
        state = next_traversal_page(client, state)
