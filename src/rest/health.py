"""
Neo4j REST health checks.

Verifies that the REST service root answers before traversals are issued.
"""

import time
from typing import Any

import httpx

from src.core.config import Settings
from src.rest.exceptions import Neo4jError
from src.rest.http_client import Neo4jHttpClient

SERVICE_ROOT = "/db/data/"


def check_neo4j_rest_health(
    settings: Settings,
    http_client: httpx.Client | None = None,
) -> bool:
    """
    Check if the Neo4j REST API is healthy and reachable.

    Args:
        settings: Application settings with Neo4j configuration
        http_client: Optional httpx.Client to send the request through

    Returns:
        True if the service root answers with a JSON document, False otherwise
    """
    return check_neo4j_rest_health_detailed(settings, http_client)["status"] == "healthy"


def check_neo4j_rest_health_detailed(
    settings: Settings,
    http_client: httpx.Client | None = None,
) -> dict[str, Any]:
    """
    Check Neo4j REST health with detailed information.

    Args:
        settings: Application settings with Neo4j configuration
        http_client: Optional httpx.Client to send the request through

    Returns:
        Dictionary with status, url, latency_ms and either the server
        version or the error message
    """
    start_time = time.time()
    try:
        with Neo4jHttpClient(settings, http_client=http_client) as client:
            root = client.retrieve(SERVICE_ROOT)
    except Neo4jError as e:
        return {
            "status": "unhealthy",
            "url": settings.neo4j_rest_url,
            "latency_ms": round((time.time() - start_time) * 1000, 2),
            "error": str(e),
        }

    latency_ms = round((time.time() - start_time) * 1000, 2)
    if not isinstance(root, dict):
        return {
            "status": "unhealthy",
            "url": settings.neo4j_rest_url,
            "latency_ms": latency_ms,
            "error": f"Unexpected service root response at {SERVICE_ROOT}",
        }

    return {
        "status": "healthy",
        "url": settings.neo4j_rest_url,
        "latency_ms": latency_ms,
        "neo4j_version": root.get("neo4j_version"),
    }
