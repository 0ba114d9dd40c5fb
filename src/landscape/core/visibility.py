"""
Visibility Toggle.

The hidden buffer takes ownership of elements removed from the active graph
and gives them back verbatim: same ids, same attributes, same adjacency and
the classification they carried when they were hidden. An element is either
in the active graph or in the buffer, never both.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .graph import LandscapeGraph
from .types import Classification, Edge, Node

logger = logging.getLogger(__name__)

Tagged = Tuple[Node, Optional[Classification]]
TaggedEdge = Tuple[Edge, Optional[Classification]]


class HiddenBuffer:
    """Off-graph holding area for hidden nodes and edges."""

    def __init__(self):
        self._nodes: Dict[str, Tagged] = {}
        self._edges: Dict[str, TaggedEdge] = {}

    def __len__(self) -> int:
        return len(self._nodes) + len(self._edges)

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._nodes or element_id in self._edges

    @property
    def is_empty(self) -> bool:
        return not self._nodes and not self._edges

    def ids(self) -> Set[str]:
        return set(self._nodes) | set(self._edges)

    def hide(
        self,
        graph: LandscapeGraph,
        tags: Dict[str, Classification],
        element_ids: Iterable[str],
    ) -> List[str]:
        """
        Move elements from the graph into the buffer.

        Edges go first so that node removal only cascades onto edges that
        were not selected themselves. Those cascaded edges are hidden too.
        Returns every id removed from the graph.
        """
        selected = set(element_ids)
        removed: List[str] = []

        for edge_id in sorted(e for e in selected if graph.has_edge(e)):
            edge = graph.remove_edge(edge_id)
            self._edges[edge_id] = (edge, tags.pop(edge_id, None))
            removed.append(edge_id)

        for node_id in sorted(n for n in selected if graph.has_node(n)):
            node, cascaded = graph.remove_node(node_id)
            for edge in cascaded:
                self._edges[edge.id] = (edge, tags.pop(edge.id, None))
                removed.append(edge.id)
            self._nodes[node_id] = (node, tags.pop(node_id, None))
            removed.append(node_id)

        logger.debug("Hid %d elements (%d in buffer)", len(removed), len(self))
        return removed

    def restore(self, graph: LandscapeGraph, tags: Dict[str, Classification]) -> List[str]:
        """
        Put every buffered element back into the graph and empty the buffer.

        Nodes are restored before edges so every edge finds its endpoints.
        Returns the restored ids.
        """
        restored: List[str] = []

        for node_id, (node, tag) in self._nodes.items():
            graph.add_node(node)
            if tag is not None:
                tags[node_id] = tag
            restored.append(node_id)

        for edge_id, (edge, tag) in self._edges.items():
            graph.add_edge(edge)
            if tag is not None:
                tags[edge_id] = tag
            restored.append(edge_id)

        self._nodes.clear()
        self._edges.clear()
        logger.debug("Restored %d elements", len(restored))
        return restored
