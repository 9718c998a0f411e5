"""
Fake implementations for testing.

FakeNeo4jServer is an in-process stand-in for the Neo4j REST traversal
API, served with FastAPI. Tests talk to it through the real
Neo4jHttpClient by handing it a fastapi.testclient.TestClient.
"""

from __future__ import annotations

import itertools
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.testclient import TestClient

BASE_URL = "http://testserver"


def node_json(node_id: int, **properties: Any) -> dict[str, Any]:
    """REST representation of a node."""
    return {
        "self": f"{BASE_URL}/db/data/node/{node_id}",
        "data": properties,
    }


def relationship_json(
    rel_id: int,
    start: int,
    end: int,
    rel_type: str = "KNOWS",
    **properties: Any,
) -> dict[str, Any]:
    """REST representation of a relationship."""
    return {
        "self": f"{BASE_URL}/db/data/relationship/{rel_id}",
        "type": rel_type,
        "start": f"{BASE_URL}/db/data/node/{start}",
        "end": f"{BASE_URL}/db/data/node/{end}",
        "data": properties,
    }


def id_path_json(
    node_ids: list[int],
    rel_ids: list[int],
    directions: list[str] | None = None,
) -> dict[str, Any]:
    """REST representation of an identifier path (directions omitted when None)."""
    path: dict[str, Any] = {
        "start": f"{BASE_URL}/db/data/node/{node_ids[0]}",
        "end": f"{BASE_URL}/db/data/node/{node_ids[-1]}",
        "length": len(rel_ids),
        "nodes": [f"{BASE_URL}/db/data/node/{n}" for n in node_ids],
        "relationships": [f"{BASE_URL}/db/data/relationship/{r}" for r in rel_ids],
    }
    if directions is not None:
        path["directions"] = directions
    return path


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "message": message,
            "exception": "NodeNotFoundException",
        },
    )


class FakeNeo4jServer:
    """Fake Neo4j REST traversal API.

    Results are configured per start node and result kind with
    ``set_results``; the fake does not evaluate the traversal
    description, it records every request body in ``requests``.
    """

    def __init__(self, neo4j_version: str = "2.2.5") -> None:
        self.neo4j_version = neo4j_version
        self.results: dict[tuple[int, str], list[Any]] = {}
        self.requests: list[dict[str, Any]] = []
        self.traversers: dict[str, dict[str, Any]] = {}
        self.request_ids: list[str | None] = []
        self._ids = itertools.count(1)
        self.app = self._create_app()

    def set_results(self, node_id: int, kind: str, results: list[Any]) -> None:
        self.results[(node_id, kind)] = results

    def client(self) -> TestClient:
        return TestClient(self.app, base_url=BASE_URL)

    def _create_app(self) -> FastAPI:
        app = FastAPI(title="Fake Neo4j REST API")

        @app.get("/db/data/")
        def service_root(request: Request) -> dict[str, Any]:
            self.request_ids.append(request.headers.get("x-request-id"))
            return {
                "node": f"{BASE_URL}/db/data/node",
                "neo4j_version": self.neo4j_version,
            }

        @app.post("/db/data/node/{node_id}/traverse/{kind}")
        async def traverse(node_id: int, kind: str, request: Request) -> Response:
            self.request_ids.append(request.headers.get("x-request-id"))
            self.requests.append(await request.json())
            if (node_id, kind) not in self.results:
                return _not_found(f"Cannot find node with id [{node_id}] in database.")
            return JSONResponse(content=self.results[(node_id, kind)])

        @app.post("/db/data/node/{node_id}/paged/traverse/{kind}")
        async def paged_traverse(
            node_id: int,
            kind: str,
            request: Request,
            pageSize: int = 50,  # noqa: N803 - Neo4j query parameter name
            leaseTime: int = 60,  # noqa: N803 - Neo4j query parameter name
        ) -> Response:
            self.requests.append(await request.json())
            if (node_id, kind) not in self.results:
                return _not_found(f"Cannot find node with id [{node_id}] in database.")

            traverser_id = f"{next(self._ids):032x}"
            results = self.results[(node_id, kind)]
            self.traversers[traverser_id] = {
                "remaining": results[pageSize:],
                "page_size": pageSize,
                "lease_time": leaseTime,
            }
            location = f"{BASE_URL}/db/data/node/{node_id}/paged/traverse/{kind}/{traverser_id}"
            return JSONResponse(
                status_code=201,
                content=results[:pageSize],
                headers={"Location": location},
            )

        @app.get("/db/data/node/{node_id}/paged/traverse/{kind}/{traverser_id}")
        def next_page(node_id: int, kind: str, traverser_id: str) -> Response:
            traverser = self.traversers.get(traverser_id)
            if traverser is None or not traverser["remaining"]:
                self.traversers.pop(traverser_id, None)
                return _not_found(f"No traverser with id [{traverser_id}]")
            page_size = traverser["page_size"]
            page = traverser["remaining"][:page_size]
            traverser["remaining"] = traverser["remaining"][page_size:]
            return JSONResponse(content=page)

        return app
