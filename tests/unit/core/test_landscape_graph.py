"""
Unit tests for the rustworkx-backed LandscapeGraph.
"""

import pytest

from landscape.core.exceptions import DuplicateElementError, ElementNotFoundError
from landscape.core.graph import LandscapeGraph
from landscape.core.types import Edge, Node, NodeType


class TestMutation:
    def test_add_node_and_lookup(self):
        graph = LandscapeGraph()
        graph.add_node(Node(id="n1", label="One", type=NodeType.COMPANY))

        assert graph.has_node("n1")
        assert graph.get_node("n1").label == "One"
        assert graph.node_count == 1

    def test_duplicate_node_rejected(self, graph):
        with pytest.raises(DuplicateElementError):
            graph.add_node(Node(id="A", type=NodeType.COMPANY))

    def test_node_and_edge_ids_share_namespace(self, graph):
        with pytest.raises(DuplicateElementError):
            graph.add_edge(Edge(id="A", source="B", target="C"))

    def test_edge_with_missing_endpoint_rejected(self, graph):
        with pytest.raises(ElementNotFoundError):
            graph.add_edge(Edge(id="e9", source="A", target="missing"))

    def test_remove_node_cascades_edges(self, graph):
        node, edges = graph.remove_node("B")

        assert node.id == "B"
        assert {e.id for e in edges} == {"e1", "e2"}
        assert not graph.has_edge("e1")
        assert not graph.has_edge("e2")
        assert graph.node_ids() == {"A", "C", "D"}

    def test_remove_edge(self, graph):
        edge = graph.remove_edge("e1")

        assert edge.source == "A"
        assert not graph.has_edge("e1")
        assert graph.has_node("A") and graph.has_node("B")

    def test_remove_unknown_raises(self, graph):
        with pytest.raises(ElementNotFoundError):
            graph.remove_edge("nope")
        with pytest.raises(ElementNotFoundError):
            graph.remove_node("nope")

    def test_update_node_properties_merges(self, graph):
        graph.update_node_properties("A", {"stars": 10})

        props = graph.get_node("A").properties
        assert props["stars"] == 10
        assert props["url"] == "https://alpha.example.com"


class TestQueries:
    def test_directed_adjacency(self, graph):
        assert [e.id for e in graph.out_edges("A")] == ["e1"]
        assert graph.in_edges("A") == []
        assert [e.id for e in graph.in_edges("C")] == ["e2"]

    def test_incident_edges(self, graph):
        assert {e.id for e in graph.incident_edges("B")} == {"e1", "e2"}
        assert graph.incident_edges("D") == []

    def test_degree(self, graph):
        assert graph.degree("B") == 2
        assert graph.degree("D") == 0

    def test_get_element(self, graph):
        assert isinstance(graph.get_element("A"), Node)
        assert isinstance(graph.get_element("e1"), Edge)
        assert graph.get_element("zzz") is None

    def test_nodes_by_type(self, graph):
        assert [n.id for n in graph.get_nodes_by_type(NodeType.INVESTOR)] == ["C"]
        assert graph.get_nodes_by_type(NodeType.SERVICE) == []

    def test_stats(self, graph):
        stats = graph.get_stats()

        assert stats["total_nodes"] == 4
        assert stats["total_edges"] == 2
        assert stats["nodes_by_type"]["Company"] == 1
        assert stats["orphans"] == 1
        assert stats["backend"] == "rustworkx"

    def test_to_dict_shape(self, graph):
        data = graph.to_dict()

        assert len(data["nodes"]) == 4
        assert len(data["edges"]) == 2
        assert all("data" in element for element in data["nodes"] + data["edges"])
