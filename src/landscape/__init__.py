"""
Landscape - Search and reachability explorer for the agent landscape graph.

The landscape graph is a typed property graph of companies, products,
investors, use cases, protocols and services. This package loads that graph,
answers free-text searches with connected/reachable expansion, classifies
every element (highlighted, connected, reachable, faded) and lets callers
hide and restore the faded remainder.

Key Components:
- core: Data types, graph store, loader, session and hidden buffer
- analysis: Match, expansion and highlight/fade projection
- render: Viewport protocol and cytoscape HTML export
- maintenance: GitHub enrichment and link verification

Usage:
    from landscape import GraphSession, SearchConfig, load_graph_file

    graph = load_graph_file("data.json").unwrap()
    session = GraphSession(graph)
    summary = session.search(SearchConfig(query="openai", max_depth=2))
"""

__version__ = "0.1.0"

from .core.loader import load_graph_file, parse_graph_document, save_graph_file
from .core.session import GraphSession, SessionState
from .core.types import (
    Classification,
    Edge,
    Node,
    NodeType,
    SearchConfig,
    SearchSummary,
)

__all__ = [
    "__version__",
    "Classification",
    "Edge",
    "GraphSession",
    "Node",
    "NodeType",
    "SearchConfig",
    "SearchSummary",
    "SessionState",
    "load_graph_file",
    "parse_graph_document",
    "save_graph_file",
]
