"""
Pytest configuration and fixtures for neo4j-rest-traversal tests.
"""

from collections.abc import Iterator

import pytest

from src.core.config import Settings
from src.core.logging import clear_correlation_id
from src.rest.http_client import FakeNeo4jHttpClient
from tests.fakes import BASE_URL, FakeNeo4jServer


@pytest.fixture
def settings() -> Settings:
    """Provide test settings pointing at the fake server."""
    return Settings(
        neo4j_rest_url=BASE_URL,
        neo4j_user="neo4j",
        neo4j_password="testpassword",
        neo4j_request_timeout=5.0,
        traversal_page_size=2,
        traversal_page_lease_seconds=30,
    )


@pytest.fixture
def fake_client() -> FakeNeo4jHttpClient:
    """In-memory HTTP client double."""
    return FakeNeo4jHttpClient()


@pytest.fixture
def fake_server() -> FakeNeo4jServer:
    """In-process fake Neo4j REST API."""
    return FakeNeo4jServer()


@pytest.fixture(autouse=True)
def _reset_correlation_id() -> Iterator[None]:
    yield
    clear_correlation_id()
