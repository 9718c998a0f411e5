"""
Neo4j REST health check tests.

Acceptance Criteria: health check returns True when the service root
answers, False otherwise.
"""

import httpx

from src.core.config import Settings
from src.rest.health import (
    check_neo4j_rest_health,
    check_neo4j_rest_health_detailed,
)
from tests.fakes import BASE_URL, FakeNeo4jServer


def _failing_client(status_code: int | None = None) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        if status_code is None:
            raise httpx.ConnectError("Connection refused", request=request)
        return httpx.Response(status_code, text="error")

    return httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))


class TestNeo4jRestHealthCheck:
    """Tests for REST connectivity verification."""

    def test_returns_true_when_reachable(
        self, settings: Settings, fake_server: FakeNeo4jServer
    ) -> None:
        """
        GIVEN a reachable Neo4j REST API
        WHEN check_neo4j_rest_health is called
        THEN it returns True
        """
        assert check_neo4j_rest_health(settings, http_client=fake_server.client()) is True

    def test_returns_false_when_unreachable(self, settings: Settings) -> None:
        """
        GIVEN Neo4j is not reachable
        WHEN check_neo4j_rest_health is called
        THEN it returns False
        """
        assert check_neo4j_rest_health(settings, http_client=_failing_client()) is False

    def test_returns_false_on_server_error(self, settings: Settings) -> None:
        assert check_neo4j_rest_health(settings, http_client=_failing_client(500)) is False

    def test_returns_false_when_root_missing(self, settings: Settings) -> None:
        assert check_neo4j_rest_health(settings, http_client=_failing_client(404)) is False

    def test_detailed_healthy(self, settings: Settings, fake_server: FakeNeo4jServer) -> None:
        """
        GIVEN a reachable Neo4j REST API
        WHEN check_neo4j_rest_health_detailed is called
        THEN it returns status, url, latency and server version
        """
        result = check_neo4j_rest_health_detailed(settings, http_client=fake_server.client())

        assert result["status"] == "healthy"
        assert result["url"] == BASE_URL
        assert result["neo4j_version"] == "2.2.5"
        assert result["latency_ms"] >= 0

    def test_detailed_unhealthy_has_error(self, settings: Settings) -> None:
        result = check_neo4j_rest_health_detailed(settings, http_client=_failing_client())

        assert result["status"] == "unhealthy"
        assert "error" in result
