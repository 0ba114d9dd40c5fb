"""
Unit tests for graph document loading and saving.
"""

import json

import pytest

from landscape.core.exceptions import GraphLoadError
from landscape.core.loader import load_graph_file, parse_graph_document, save_graph_file


class TestParseGraphDocument:
    def test_parses_nodes_and_edges(self, document):
        graph = parse_graph_document(document)

        assert graph.node_ids() == {"A", "B", "C", "D"}
        assert graph.edge_ids() == {"e1", "e2"}
        assert graph.get_node("A").properties["github"] == "https://github.com/alpha/agents"

    def test_edges_are_optional(self):
        graph = parse_graph_document({"nodes": [{"data": {"id": "x", "type": "Service"}}]})
        assert graph.edge_count == 0

    def test_unknown_node_type_rejected(self):
        with pytest.raises(GraphLoadError):
            parse_graph_document({"nodes": [{"data": {"id": "x", "type": "Spaceship"}}]})

    def test_missing_nodes_key_rejected(self):
        with pytest.raises(GraphLoadError):
            parse_graph_document({"edges": []})

    def test_dangling_edge_rejected(self, document):
        document["edges"].append({"data": {"id": "e3", "source": "A", "target": "Z"}})

        with pytest.raises(GraphLoadError) as exc_info:
            parse_graph_document(document, source="data.json")
        assert "data.json" in str(exc_info.value)

    def test_duplicate_id_rejected(self, document):
        document["nodes"].append({"data": {"id": "A", "label": "Again", "type": "Company"}})

        with pytest.raises(GraphLoadError):
            parse_graph_document(document)


class TestLoadGraphFile:
    def test_load_ok(self, graph_file):
        result = load_graph_file(graph_file)

        assert result.is_ok()
        assert result.unwrap().node_count == 4

    def test_missing_file(self, tmp_path):
        result = load_graph_file(tmp_path / "missing.json")

        assert result.is_err()
        assert isinstance(result.error, GraphLoadError)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = load_graph_file(path)
        assert result.is_err()
        assert "invalid JSON" in str(result.error)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"nodes": [{"data": {"id": "\xff", "type": "Company"}}]}')

        result = load_graph_file(path)
        assert result.is_err()
        assert "not valid UTF-8" in str(result.error)


class TestSaveGraphFile:
    def test_round_trip_preserves_extra_fields(self, tmp_path, document):
        document["nodes"][0]["data"]["founded"] = 2021
        document["edges"][0]["data"]["weight"] = 0.5
        graph = parse_graph_document(document)

        out = save_graph_file(graph, tmp_path / "out.json")
        saved = json.loads(out.read_text())

        node_a = next(n["data"] for n in saved["nodes"] if n["data"]["id"] == "A")
        edge_1 = next(e["data"] for e in saved["edges"] if e["data"]["id"] == "e1")
        assert node_a["founded"] == 2021
        assert node_a["type"] == "Company"
        assert edge_1["weight"] == 0.5

        reloaded = load_graph_file(out).unwrap()
        assert reloaded.element_ids() == graph.element_ids()
