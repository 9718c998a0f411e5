"""
Request encoding for traversals.

Maps a TraversalDescription onto the JSON body the REST traversal
endpoint expects, and a TraversalPaging onto the query string of a paged
traversal. Encoding is pure and total: every valid description encodes.
"""

from __future__ import annotations

import json
from typing import Any

from src.traversal.description import (
    JavaScriptExpression,
    RelationshipFilter,
    TraversalDescription,
    TraversalPaging,
)

UNIQUENESS_NONE = "none"


def _expression(expression: JavaScriptExpression) -> dict[str, str]:
    return {"language": JavaScriptExpression.LANGUAGE, "body": expression.body}


def _relationship_filter(rel_filter: RelationshipFilter) -> dict[str, str]:
    return {"type": rel_filter.type, "direction": rel_filter.direction.value}


def traversal_request_body(description: TraversalDescription) -> dict[str, Any]:
    """Build the JSON-ready request body for a traversal.

    Args:
        description: The traversal to encode

    Returns:
        Dict with order, relationships, uniqueness, max_depth or
        prune_evaluator, and return_filter
    """
    body: dict[str, Any] = {
        "order": description.order.value,
        "relationships": [_relationship_filter(f) for f in description.relationships],
        "uniqueness": (
            description.uniqueness.value
            if description.uniqueness is not None
            else UNIQUENESS_NONE
        ),
    }

    if isinstance(description.depth, JavaScriptExpression):
        body["prune_evaluator"] = _expression(description.depth)
    else:
        body["max_depth"] = description.depth

    if isinstance(description.return_filter, JavaScriptExpression):
        body["return_filter"] = _expression(description.return_filter)
    else:
        body["return_filter"] = {
            "language": "builtin",
            "name": description.return_filter.value,
        }

    return body


def encode_traversal_request(description: TraversalDescription) -> str:
    """Serialize a traversal description to its JSON request body."""
    return json.dumps(traversal_request_body(description))


def paging_query_string(paging: TraversalPaging) -> str:
    """Query string for a paged traversal, without the leading '?'."""
    return f"pageSize={paging.page_size}&leaseTime={paging.lease_seconds}"
