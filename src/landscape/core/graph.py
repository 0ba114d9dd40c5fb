"""
Landscape graph store backed by rustworkx.

It manages:
- The bimaps between string element IDs and rustworkx node/edge indices.
- Type-safe Node and Edge payloads.
- A per-type node index for type filters.
- Adjacency lookups used by the expansion engine (outgoing and incident edges).

Node and edge ids share one namespace. Removing a node removes its incident
edges as well; callers that need to put them back (the hidden buffer) get
them returned from remove_node.
"""

from collections import defaultdict
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple, Union

import rustworkx as rx

from .exceptions import DuplicateElementError, ElementNotFoundError
from .types import Edge, Node, NodeType

Element = Union[Node, Edge]


class LandscapeGraph:
    """
    Directed multigraph of landscape nodes and edges.

    Features:
    - O(1) node and edge lookup via ID-to-Index bimaps
    - Rust backend for storage and adjacency
    - Reversible removal (remove_node returns the edges it dropped)
    """

    def __init__(self):
        self._graph = rx.PyDiGraph(multigraph=True)
        self._node_idx: Dict[str, int] = {}
        self._edge_idx: Dict[str, int] = {}
        self._nodes_by_type: Dict[NodeType, Set[str]] = defaultdict(set)

    # =========================================================================
    # Mutation
    # =========================================================================

    def add_node(self, node: Node) -> None:
        """Add a node. Raises DuplicateElementError if the id is taken."""
        if self.has_element(node.id):
            raise DuplicateElementError(node.id)

        self._node_idx[node.id] = self._graph.add_node(node)
        self._nodes_by_type[node.type].add(node.id)

    def add_edge(self, edge: Edge) -> None:
        """Add a directed edge. Both endpoints must already be present."""
        if self.has_element(edge.id):
            raise DuplicateElementError(edge.id)
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._node_idx:
                raise ElementNotFoundError(endpoint)

        u_idx = self._node_idx[edge.source]
        v_idx = self._node_idx[edge.target]
        self._edge_idx[edge.id] = self._graph.add_edge(u_idx, v_idx, edge)

    def remove_edge(self, edge_id: str) -> Edge:
        """Remove an edge and return its payload."""
        idx = self._edge_idx.pop(edge_id, None)
        if idx is None:
            raise ElementNotFoundError(edge_id)

        edge: Edge = self._graph.get_edge_data_by_index(idx)
        self._graph.remove_edge_from_index(idx)
        return edge

    def remove_node(self, node_id: str) -> Tuple[Node, List[Edge]]:
        """
        Remove a node together with its incident edges.

        Returns the node and the edges removed with it.
        """
        if node_id not in self._node_idx:
            raise ElementNotFoundError(node_id)

        removed_edges = [self.remove_edge(e.id) for e in self.incident_edges(node_id)]

        idx = self._node_idx.pop(node_id)
        node: Node = self._graph[idx]
        self._graph.remove_node(idx)
        self._nodes_by_type[node.type].discard(node_id)
        return node, removed_edges

    def update_node_properties(self, node_id: str, properties: Dict[str, Any]) -> Node:
        """Merge properties into a node's property mapping."""
        idx = self._node_idx.get(node_id)
        if idx is None:
            raise ElementNotFoundError(node_id)

        node = self._graph[idx].with_properties(**properties)
        self._graph[idx] = node
        return node

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_node(self, node_id: str) -> Optional[Node]:
        idx = self._node_idx.get(node_id)
        if idx is None:
            return None
        return self._graph[idx]

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        idx = self._edge_idx.get(edge_id)
        if idx is None:
            return None
        return self._graph.get_edge_data_by_index(idx)

    def get_element(self, element_id: str) -> Optional[Element]:
        return self.get_node(element_id) or self.get_edge(element_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._node_idx

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edge_idx

    def has_element(self, element_id: str) -> bool:
        return element_id in self._node_idx or element_id in self._edge_idx

    def get_nodes_by_type(self, node_type: NodeType) -> List[Node]:
        """Get all nodes of a specific type."""
        return [
            self._graph[self._node_idx[node_id]]
            for node_id in self._nodes_by_type.get(node_type, set())
        ]

    def node_ids(self) -> Set[str]:
        return set(self._node_idx)

    def edge_ids(self) -> Set[str]:
        return set(self._edge_idx)

    def element_ids(self) -> Set[str]:
        """Ids of every node and edge currently in the graph."""
        return self.node_ids() | self.edge_ids()

    # =========================================================================
    # Adjacency
    # =========================================================================

    def out_edges(self, node_id: str) -> List[Edge]:
        """Edges whose source is node_id."""
        idx = self._node_idx.get(node_id)
        if idx is None:
            return []
        return [edge for _, _, edge in self._graph.out_edges(idx)]

    def in_edges(self, node_id: str) -> List[Edge]:
        """Edges whose target is node_id."""
        idx = self._node_idx.get(node_id)
        if idx is None:
            return []
        return [edge for _, _, edge in self._graph.in_edges(idx)]

    def incident_edges(self, node_id: str) -> List[Edge]:
        """Edges touching node_id in either direction. Self loops appear once."""
        seen: Set[str] = set()
        result: List[Edge] = []
        for edge in self.out_edges(node_id) + self.in_edges(node_id):
            if edge.id not in seen:
                seen.add(edge.id)
                result.append(edge)
        return result

    def degree(self, node_id: str) -> int:
        idx = self._node_idx.get(node_id)
        if idx is None:
            return 0
        return self._graph.in_degree(idx) + self._graph.out_degree(idx)

    # =========================================================================
    # Iteration & Export
    # =========================================================================

    def iter_nodes(self) -> Iterator[Node]:
        return iter(self._graph.nodes())

    def iter_edges(self) -> Iterator[Edge]:
        return iter(self._graph.edges())

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def get_stats(self) -> Dict[str, Any]:
        node_counts = {
            node_type.value: len(ids)
            for node_type, ids in self._nodes_by_type.items()
            if ids
        }
        orphans = sorted(node_id for node_id in self._node_idx if self.degree(node_id) == 0)

        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "nodes_by_type": node_counts,
            "orphans": len(orphans),
            "backend": "rustworkx",
        }

    def to_dict(self) -> Dict[str, Any]:
        """Export in the graph file shape: {nodes: [{data}], edges: [{data}]}."""
        return {
            "nodes": [{"data": node.model_dump(mode="json")} for node in self.iter_nodes()],
            "edges": [{"data": edge.model_dump(mode="json")} for edge in self.iter_edges()],
        }
