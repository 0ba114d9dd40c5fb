"""
landscape core module.

Core Types & Graph:
    - Node, Edge, NodeType, Classification: graph data structures
    - LandscapeGraph: rustworkx-backed graph store
    - load_graph_file / save_graph_file: graph document I/O

Session:
    - GraphSession: search, type filter, hide/restore over one graph
    - HiddenBuffer: holding area for hidden elements
"""

from .exceptions import (
    ConfigError,
    DuplicateElementError,
    ElementNotFoundError,
    EnrichmentError,
    GraphLoadError,
    LandscapeError,
)
from .graph import LandscapeGraph
from .types import Classification, Edge, Node, NodeType, SearchConfig, SearchSummary

__all__ = [
    "Classification",
    "ConfigError",
    "DuplicateElementError",
    "Edge",
    "ElementNotFoundError",
    "EnrichmentError",
    "GraphLoadError",
    "LandscapeError",
    "LandscapeGraph",
    "Node",
    "NodeType",
    "SearchConfig",
    "SearchSummary",
]
