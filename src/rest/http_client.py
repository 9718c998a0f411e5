"""
Neo4j REST HTTP client module.

Design follows:
- Repository pattern: traversal code depends on a small protocol, not on httpx
- FakeClient for testing: the fake shares the same interface (duck typing)
- Connection pooling: one httpx.Client per Neo4jHttpClient instance
- Custom exceptions: avoid shadowing builtins (Neo4jConnectionError)
- Context manager: proper resource management

This module provides:
- Neo4jHttpClientProtocol: the three operations traversal code needs
- Neo4jHttpClient: real client over httpx
- FakeNeo4jHttpClient: in-memory fake for testing
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import httpx

from src.core.logging import get_correlation_id
from src.rest.exceptions import (
    Neo4jConnectionError,
    Neo4jDecodeError,
    Neo4jUnexpectedResponseError,
)

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json; charset=UTF-8",
    "Content-Type": "application/json",
}

# Statuses accepted by create operations (traverse answers 200, paged traverse 201)
CREATE_STATUSES = frozenset({200, 201})
# Statuses that mean "nothing here" for a retrieval
EMPTY_STATUSES = frozenset({204, 404})


@runtime_checkable
class Neo4jHttpClientProtocol(Protocol):
    """Protocol defining the HTTP operations used by traversals.

    Enables duck typing - any class implementing these methods
    can be used interchangeably (Repository pattern).
    """

    def create(self, path: str, body: str) -> Any:
        """POST a JSON body and decode the JSON response."""
        ...

    def create_with_headers(self, path: str, body: str) -> tuple[Any, Mapping[str, str]]:
        """POST a JSON body, returning the decoded response and its headers."""
        ...

    def retrieve(self, path: str) -> Any | None:
        """GET a resource; None when the server has nothing for it."""
        ...


class Neo4jHttpClient:
    """Neo4j REST client over a pooled httpx.Client.

    Usage:
        # As context manager (recommended)
        with Neo4jHttpClient(settings=settings) as client:
            nodes = GraphTraversal(client).traverse_nodes(desc, "/db/data/node/0")

        # Manual connection management
        client = Neo4jHttpClient(settings=settings)
        client.connect()
        ...
        client.close()

        # Over an existing httpx.Client (e.g. FastAPI's TestClient)
        client = Neo4jHttpClient(settings=settings, http_client=test_client)
    """

    def __init__(self, settings: Any, http_client: httpx.Client | None = None) -> None:
        """Initialize client with Settings object.

        Args:
            settings: Settings object with neo4j_rest_url, neo4j_user,
                      neo4j_password, neo4j_request_timeout attributes
            http_client: Optional pre-built httpx.Client. It is used as-is
                         and never closed by this wrapper.

        Note:
            The httpx.Client is NOT created here - uses lazy initialization.
            Call connect() or use as context manager.
        """
        self._settings = settings
        self._base_url = settings.neo4j_rest_url
        self._user = settings.neo4j_user
        self._password = settings.neo4j_password
        self._timeout = settings.neo4j_request_timeout
        self._http: httpx.Client | None = http_client
        self._owns_http = http_client is None

    @property
    def base_url(self) -> str:
        """Get the server root URL."""
        return self._base_url

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is initialized."""
        return self._http is not None

    def connect(self) -> None:
        """Create the pooled HTTP client. No-op if already connected."""
        if self._http is not None:
            return
        auth = (self._user, self._password) if self._user else None
        self._http = httpx.Client(
            base_url=self._base_url,
            auth=auth,
            headers=DEFAULT_HEADERS,
            timeout=self._timeout,
        )
        self._owns_http = True

    def close(self) -> None:
        """Close the HTTP client.

        Safe to call even if not connected (no-op).
        """
        if self._http is not None and self._owns_http:
            self._http.close()
            self._http = None

    def __enter__(self) -> Neo4jHttpClient:
        """Context manager entry - create the HTTP client."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Context manager exit - close the HTTP client."""
        self.close()

    def _ensure_connected(self) -> httpx.Client:
        """Return the HTTP client or raise if not connected.

        Raises:
            Neo4jConnectionError: If the client is not initialized.
        """
        if self._http is None:
            raise Neo4jConnectionError(
                "Not connected to Neo4j. Call connect() first or use context manager."
            )
        return self._http

    def _send(self, method: str, path: str, body: str | None = None) -> httpx.Response:
        http = self._ensure_connected()
        headers = dict(DEFAULT_HEADERS)
        correlation_id = get_correlation_id()
        if correlation_id:
            headers["X-Request-ID"] = correlation_id

        logger.debug("%s %s", method, path)
        try:
            return http.request(method, path, content=body, headers=headers)
        except httpx.TransportError as e:
            raise Neo4jConnectionError(
                f"Failed to reach Neo4j at {self._base_url}: {e}",
                cause=e,
            ) from e

    @staticmethod
    def _decode(response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise Neo4jDecodeError(
                f"Response for {path} is not valid JSON",
                payload=response.text,
            ) from e

    def create(self, path: str, body: str) -> Any:
        """POST a JSON body and decode the response.

        Args:
            path: Request path relative to the server root
            body: Serialized JSON request body

        Returns:
            Decoded JSON response

        Raises:
            Neo4jConnectionError: If not connected or the transport fails
            Neo4jUnexpectedResponseError: If the status is not 200/201
            Neo4jDecodeError: If the response is not JSON
        """
        result, _ = self.create_with_headers(path, body)
        return result

    def create_with_headers(self, path: str, body: str) -> tuple[Any, Mapping[str, str]]:
        """POST a JSON body and return the decoded response with its headers.

        Raises:
            Neo4jConnectionError: If not connected or the transport fails
            Neo4jUnexpectedResponseError: If the status is not 200/201
            Neo4jDecodeError: If the response is not JSON
        """
        response = self._send("POST", path, body)
        if response.status_code not in CREATE_STATUSES:
            raise Neo4jUnexpectedResponseError(response.status_code, path, response.text)
        return self._decode(response, path), response.headers

    def retrieve(self, path: str) -> Any | None:
        """GET a resource and decode it.

        Returns:
            Decoded JSON response, or None on 204/404

        Raises:
            Neo4jConnectionError: If not connected or the transport fails
            Neo4jUnexpectedResponseError: For any other non-200 status
            Neo4jDecodeError: If the response is not JSON
        """
        response = self._send("GET", path)
        if response.status_code in EMPTY_STATUSES:
            logger.debug("GET %s returned %s, no content", path, response.status_code)
            return None
        if response.status_code != 200:
            raise Neo4jUnexpectedResponseError(response.status_code, path, response.text)
        return self._decode(response, path)


class FakeNeo4jHttpClient:
    """In-memory fake Neo4j REST client for testing.

    Implements the same interface as Neo4jHttpClient. Results are
    queued per operation and handed out in order; every call is
    recorded in ``calls`` as ``(method, path, body)``.

    Usage:
        fake = FakeNeo4jHttpClient()
        fake.set_create_result([{"self": "http://h/db/data/node/1", "data": {}}])
        nodes = GraphTraversal(fake).traverse_nodes(desc, "/db/data/node/0")
    """

    def __init__(self) -> None:
        """Initialize fake client with empty queues."""
        self._create_results: deque[tuple[Any, dict[str, str]]] = deque()
        self._retrieve_results: deque[Any | None] = deque()
        self._error: Exception | None = None
        self.calls: list[tuple[str, str, str | None]] = []

    def _raise_if_configured(self) -> None:
        if self._error is not None:
            raise self._error

    def create(self, path: str, body: str) -> Any:
        """Return the next queued create result."""
        result, _ = self.create_with_headers(path, body)
        return result

    def create_with_headers(self, path: str, body: str) -> tuple[Any, Mapping[str, str]]:
        """Return the next queued create result and headers."""
        self.calls.append(("POST", path, body))
        self._raise_if_configured()
        if not self._create_results:
            return [], {}
        return self._create_results.popleft()

    def retrieve(self, path: str) -> Any | None:
        """Return the next queued retrieve result, None once exhausted."""
        self.calls.append(("GET", path, None))
        self._raise_if_configured()
        if not self._retrieve_results:
            return None
        return self._retrieve_results.popleft()

    def set_create_result(self, result: Any, headers: dict[str, str] | None = None) -> None:
        """Queue a result (and optional response headers) for create calls."""
        self._create_results.append((result, headers or {}))

    def set_retrieve_results(self, results: list[Any | None]) -> None:
        """Queue results for successive retrieve calls."""
        self._retrieve_results.extend(results)

    def set_error(self, error: Exception | None) -> None:
        """Make every subsequent call raise ``error`` (None to reset)."""
        self._error = error

    def clear(self) -> None:
        """Clear queued results, errors and recorded calls."""
        self._create_results.clear()
        self._retrieve_results.clear()
        self._error = None
        self.calls.clear()
