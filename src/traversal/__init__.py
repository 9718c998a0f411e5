# Traversal module for the Neo4j REST traversal framework
"""
Traversal layer including:
- TraversalDescription / TraversalPaging: what to traverse and how to page it
- Request encoding of descriptions
- Path model (PathEnd/PathLink) and its reconstruction from responses
- GraphTraversal: single-shot and paged traversal execution
- Paged traversal state (PagedTraversalMore / DONE)
"""

from src.traversal.description import (
    ConcreteDirection,
    Direction,
    JavaScriptExpression,
    RelationshipFilter,
    ReturnFilter,
    TraversalDescription,
    TraversalOrder,
    TraversalPaging,
    Uniqueness,
)
from src.traversal.encoding import (
    encode_traversal_request,
    paging_query_string,
    traversal_request_body,
)
from src.traversal.executor import GraphTraversal
from src.traversal.paging import (
    DONE,
    PagedTraversal,
    PagedTraversalDone,
    PagedTraversalMore,
    get_paged_values,
    iter_paged_values,
    next_traversal_page,
    paged_traversal_done,
)
from src.traversal.paths import (
    DirectedRelationship,
    FullPath,
    IdPath,
    Path,
    PathEnd,
    PathLink,
    build_id_path,
    build_path,
    decode_full_path,
    decode_id_path,
    path_nodes,
    path_relationships,
)
from src.traversal.results import TraversalResultKind

__all__ = [
    # Description
    "TraversalDescription",
    "TraversalPaging",
    "TraversalOrder",
    "Direction",
    "ConcreteDirection",
    "Uniqueness",
    "ReturnFilter",
    "RelationshipFilter",
    "JavaScriptExpression",
    # Encoding
    "traversal_request_body",
    "encode_traversal_request",
    "paging_query_string",
    # Paths
    "Path",
    "PathEnd",
    "PathLink",
    "IdPath",
    "FullPath",
    "DirectedRelationship",
    "build_path",
    "build_id_path",
    "decode_id_path",
    "decode_full_path",
    "path_nodes",
    "path_relationships",
    # Execution
    "GraphTraversal",
    "TraversalResultKind",
    # Paging
    "PagedTraversal",
    "PagedTraversalDone",
    "PagedTraversalMore",
    "DONE",
    "get_paged_values",
    "paged_traversal_done",
    "next_traversal_page",
    "iter_paged_values",
]
