"""
Match Engine.

Finds the seed nodes of a search: nodes whose label contains the query, or
nodes of the requested types for a type filter. Both are pure reads over the
nodes currently in the graph.
"""

from typing import Iterable, Set

from ..core.graph import LandscapeGraph
from ..core.types import NodeType


def match_nodes(graph: LandscapeGraph, query: str) -> Set[str]:
    """
    Return ids of nodes whose label contains query, ignoring case.

    The empty query is a caller-side short circuit and matches nothing here.
    """
    if not query:
        return set()

    needle = query.casefold()
    return {
        node.id
        for node in graph.iter_nodes()
        if node.label and needle in node.label.casefold()
    }


def match_types(graph: LandscapeGraph, types: Iterable[NodeType]) -> Set[str]:
    """Return ids of nodes whose type is one of types."""
    result: Set[str] = set()
    for node_type in set(types):
        result.update(node.id for node in graph.get_nodes_by_type(node_type))
    return result
