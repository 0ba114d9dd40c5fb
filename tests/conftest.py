"""Shared fixtures: a small landscape graph A -> B -> C plus an isolated D."""

import json

import pytest

from landscape.core.graph import LandscapeGraph
from landscape.core.loader import parse_graph_document


def make_document():
    return {
        "nodes": [
            {"data": {"id": "A", "label": "Alpha Agents", "type": "Company",
                      "properties": {"url": "https://alpha.example.com", "github": "https://github.com/alpha/agents"}}},
            {"data": {"id": "B", "label": "Beta Builder", "type": "Product", "properties": {}}},
            {"data": {"id": "C", "label": "Gamma Capital", "type": "Investor", "properties": {}}},
            {"data": {"id": "D", "label": "Delta Protocol", "type": "Protocol", "properties": {}}},
        ],
        "edges": [
            {"data": {"id": "e1", "source": "A", "target": "B", "label": "builds"}},
            {"data": {"id": "e2", "source": "B", "target": "C", "label": "funded_by"}},
        ],
    }


@pytest.fixture
def document():
    return make_document()


@pytest.fixture
def graph() -> LandscapeGraph:
    return parse_graph_document(make_document())


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(make_document()))
    return path
