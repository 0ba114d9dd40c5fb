"""
Graph document loading and saving.

The graph file is a cytoscape-style JSON document:

    {
        "nodes": [{"data": {"id", "label", "type", "properties"}}, ...],
        "edges": [{"data": {"id", "source", "target", "label"}}, ...]
    }

Any malformed input is a GraphLoadError. There is no partial-graph recovery:
either the whole document loads or nothing does.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError

from .exceptions import GraphLoadError, LandscapeError
from .graph import LandscapeGraph
from .result import Err, Ok, Result
from .types import Edge, Node

logger = logging.getLogger(__name__)


class NodeElement(BaseModel):
    data: Node


class EdgeElement(BaseModel):
    data: Edge


class GraphDocument(BaseModel):
    nodes: List[NodeElement]
    edges: List[EdgeElement] = Field(default_factory=list)


def parse_graph_document(data: Any, source: str = "<memory>") -> LandscapeGraph:
    """
    Build a graph from an already-decoded JSON document.

    Raises:
        GraphLoadError: On schema violations, duplicate ids or edges that
            reference unknown nodes.
    """
    try:
        document = GraphDocument.model_validate(data)
    except ValidationError as e:
        raise GraphLoadError(source, f"invalid document: {e.error_count()} validation error(s)\n{e}") from e

    graph = LandscapeGraph()
    try:
        for element in document.nodes:
            graph.add_node(element.data)
        for element in document.edges:
            graph.add_edge(element.data)
    except LandscapeError as e:
        raise GraphLoadError(source, str(e)) from e

    logger.debug("Parsed %d nodes and %d edges from %s", graph.node_count, graph.edge_count, source)
    return graph


def load_graph_file(path: Union[str, Path]) -> Result[LandscapeGraph, GraphLoadError]:
    """Read, decode and validate a graph file."""
    graph_path = Path(path)
    source = str(graph_path)

    try:
        raw = graph_path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(GraphLoadError(source, e.strerror or str(e)))
    except UnicodeDecodeError as e:
        return Err(GraphLoadError(source, f"not valid UTF-8: {e}"))

    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError as e:
        return Err(GraphLoadError(source, f"invalid JSON: {e}"))

    try:
        return Ok(parse_graph_document(data, source=source))
    except GraphLoadError as e:
        return Err(e)


def save_graph_file(graph: LandscapeGraph, path: Union[str, Path]) -> Path:
    """Write the graph back in the document shape it was loaded from."""
    out_path = Path(path)
    out_path.write_text(json.dumps(graph.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Wrote %d nodes and %d edges to %s", graph.node_count, graph.edge_count, out_path)
    return out_path
