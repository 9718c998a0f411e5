"""
Unit tests for REST entities and resource paths.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.rest.entities import (
    Node,
    NodePath,
    Relationship,
    RelPath,
    resource_path,
    url_path,
)
from tests.fakes import node_json, relationship_json


class TestIdentifiers:
    """Tests for NodePath / RelPath."""

    def test_from_absolute_url(self) -> None:
        assert NodePath.from_url("http://localhost:7474/db/data/node/5") == NodePath(
            path="/db/data/node/5"
        )

    def test_from_relative_url(self) -> None:
        assert RelPath.from_url("/db/data/relationship/3").path == "/db/data/relationship/3"

    def test_query_is_dropped(self) -> None:
        assert url_path("http://h:7474/db/data/node/5?x=1") == "/db/data/node/5"

    def test_identifiers_are_hashable(self) -> None:
        assert len({NodePath(path="/a"), NodePath(path="/a")}) == 1

    def test_str(self) -> None:
        assert str(NodePath(path="/db/data/node/5")) == "/db/data/node/5"


class TestNode:
    """Tests for decoding nodes."""

    def test_from_rest(self) -> None:
        node = Node.model_validate(node_json(5, name="Thomas", age=30))

        assert node.path == "/db/data/node/5"
        assert node.properties == {"name": "Thomas", "age": 30}
        assert node.node_path == NodePath(path="/db/data/node/5")

    def test_missing_data_means_no_properties(self) -> None:
        node = Node.model_validate({"self": "http://h/db/data/node/1"})

        assert node.properties == {}

    def test_invalid(self) -> None:
        with pytest.raises(ValidationError):
            Node.model_validate({"data": {}})

    @pytest.mark.parametrize("url", [5, None, ["/db/data/node/5"]])
    def test_non_string_self_is_invalid(self, url: object) -> None:
        with pytest.raises(ValidationError):
            Node.model_validate({"self": url, "data": {}})


class TestRelationship:
    """Tests for decoding relationships."""

    def test_from_rest(self) -> None:
        rel = Relationship.model_validate(relationship_json(7, 1, 2, "KNOWS", since=2001))

        assert rel.path == "/db/data/relationship/7"
        assert rel.rel_type == "KNOWS"
        assert rel.start == NodePath(path="/db/data/node/1")
        assert rel.end == NodePath(path="/db/data/node/2")
        assert rel.properties == {"since": 2001}
        assert rel.rel_path == RelPath(path="/db/data/relationship/7")

    def test_missing_end_is_invalid(self) -> None:
        payload = relationship_json(7, 1, 2)
        del payload["end"]

        with pytest.raises(ValidationError):
            Relationship.model_validate(payload)

    @pytest.mark.parametrize("field", ["self", "start", "end"])
    @pytest.mark.parametrize("url", [3, None])
    def test_non_string_url_is_invalid(self, field: str, url: object) -> None:
        payload = relationship_json(7, 1, 2)
        payload[field] = url

        with pytest.raises(ValidationError):
            Relationship.model_validate(payload)


class TestResourcePath:
    """Tests for resource_path()."""

    @pytest.mark.parametrize(
        "entity",
        [
            Node(path="/db/data/node/5"),
            NodePath(path="/db/data/node/5"),
            "/db/data/node/5",
        ],
    )
    def test_supported_entities(self, entity: object) -> None:
        assert resource_path(entity) == "/db/data/node/5"  # type: ignore[arg-type]

    def test_relationship(self) -> None:
        rel = Relationship.model_validate(relationship_json(7, 1, 2))

        assert resource_path(rel) == "/db/data/relationship/7"
        assert resource_path(rel.rel_path) == "/db/data/relationship/7"

    def test_relative_string_rejected(self) -> None:
        with pytest.raises(ValueError):
            resource_path("db/data/node/5")

    def test_unsupported_type_rejected(self) -> None:
        with pytest.raises(TypeError):
            resource_path(5)  # type: ignore[arg-type]
