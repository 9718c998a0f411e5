"""
Node and relationship entities as returned by the Neo4j REST API.

Entities are identified by their canonical resource path, the path
component of the ``self`` URL the server reports for them
(e.g. ``/db/data/node/5``). The host part is dropped so a path can be
combined with any client's base URL.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, model_validator


def url_path(url: str) -> str:
    """Return the path component of an absolute or relative URL."""
    return urlsplit(url).path


def _rest_url_path(data: dict[str, Any], key: str) -> str | None:
    """Path of the URL stored under ``key``, or None when the key is absent.

    Raises ValueError for a value that is not a string, null included.
    """
    if key not in data:
        return None
    url = data[key]
    if not isinstance(url, str):
        raise ValueError(f"{key!r} must be a URL string, got {type(url).__name__}")
    return url_path(url)


class NodePath(BaseModel):
    """Lightweight node identifier: the node's canonical resource path."""

    model_config = ConfigDict(frozen=True)

    path: str

    @classmethod
    def from_url(cls, url: str) -> NodePath:
        return cls(path=url_path(url))

    def __str__(self) -> str:
        return self.path


class RelPath(BaseModel):
    """Lightweight relationship identifier: the relationship's canonical resource path."""

    model_config = ConfigDict(frozen=True)

    path: str

    @classmethod
    def from_url(cls, url: str) -> RelPath:
        return cls(path=url_path(url))

    def __str__(self) -> str:
        return self.path


class Node(BaseModel):
    """A node with its properties.

    Validates either from keyword fields or directly from the REST
    representation ``{"self": url, "data": {...}}``.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    properties: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _from_rest(cls, data: Any) -> Any:
        if isinstance(data, dict) and "self" in data:
            return {
                "path": _rest_url_path(data, "self"),
                "properties": data.get("data") or {},
            }
        return data

    @property
    def node_path(self) -> NodePath:
        return NodePath(path=self.path)


class Relationship(BaseModel):
    """A relationship with its type, endpoints and properties.

    The relationship is oriented from ``start`` to ``end``; that is the
    only direction information a hydrated relationship carries.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    rel_type: str
    start: NodePath
    end: NodePath
    properties: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _from_rest(cls, data: Any) -> Any:
        if isinstance(data, dict) and "self" in data:
            start = _rest_url_path(data, "start")
            end = _rest_url_path(data, "end")
            return {
                "path": _rest_url_path(data, "self"),
                "rel_type": data.get("type"),
                "start": NodePath(path=start) if start is not None else None,
                "end": NodePath(path=end) if end is not None else None,
                "properties": data.get("data") or {},
            }
        return data

    @property
    def rel_path(self) -> RelPath:
        return RelPath(path=self.path)


EntityLike = Node | Relationship | NodePath | RelPath | str


def resource_path(entity: EntityLike) -> str:
    """Get the canonical resource path of an entity or identifier.

    Args:
        entity: Node, Relationship, NodePath, RelPath or an absolute path string

    Returns:
        The resource path, e.g. "/db/data/node/5"

    Raises:
        ValueError: If a string is not an absolute path
        TypeError: If the entity type is not supported
    """
    if isinstance(entity, (Node, Relationship, NodePath, RelPath)):
        return entity.path
    if isinstance(entity, str):
        if not entity.startswith("/"):
            raise ValueError(f"Resource path must start with '/': {entity!r}")
        return entity
    raise TypeError(f"Cannot get a resource path from {type(entity).__name__}")
