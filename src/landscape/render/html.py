"""
Cytoscape HTML export.

Writes a standalone page showing the session's active graph with each
element's current classification as its cytoscape class, so a search run
from the CLI can be opened in a browser exactly as it was classified.
Hidden elements are not part of the active graph and are left out.
"""

import json
import logging
import webbrowser
from html import escape
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Union

from ..config import DEFAULT_LAYOUT, FIT_PADDING, NODE_STYLES
from ..core.types import Classification

if TYPE_CHECKING:
    from ..core.session import GraphSession

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    <script src="https://unpkg.com/cytoscape@3/dist/cytoscape.min.js"></script>
    <script src="https://unpkg.com/layout-base/layout-base.js"></script>
    <script src="https://unpkg.com/cose-base/cose-base.js"></script>
    <script src="https://unpkg.com/cytoscape-cose-bilkent/cytoscape-cose-bilkent.js"></script>
    <style>
        body { margin: 0; font-family: -apple-system, "Segoe UI", Roboto, sans-serif; }
        #summary { padding: 8px 16px; font-size: 13px; border-bottom: 1px solid #ddd; }
        #cy { position: absolute; top: 36px; bottom: 0; left: 0; right: 0; }
    </style>
</head>
<body>
    <div id="summary">__SUMMARY__</div>
    <div id="cy"></div>
    <script>
        const elements = __GRAPH_DATA__;
        const nodeStyles = __NODE_STYLES__;
        const focus = __FOCUS__;

        const style = [
            { selector: 'node', style: { 'label': 'data(label)', 'font-size': 5, 'text-wrap': 'wrap',
                'text-max-width': 60, 'text-valign': 'center', 'background-color': '#666' } },
            { selector: 'edge', style: { 'width': 1, 'line-color': '#999', 'target-arrow-color': '#999',
                'target-arrow-shape': 'chevron', 'curve-style': 'bezier', 'label': 'data(label)', 'font-size': 5 } },
            { selector: '.highlighted', style: { 'background-color': '#ff7f00' } },
            { selector: '.connected', style: { 'background-color': '#b58b2b', 'z-index': 10 } },
            { selector: '.reachable', style: { 'background-color': '#5c7148', 'z-index': 10 } },
            { selector: '.highlighted-edge, .connected-edge', style: { 'line-color': '#ff7f00',
                'target-arrow-color': '#ff7f00', 'width': 2 } },
            { selector: '.reachable-edge', style: { 'line-color': '#5ba316', 'target-arrow-color': '#5ba316', 'width': 2 } },
            { selector: '.faded', style: { 'opacity': 0.2, 'z-index': 1 } },
        ];
        Object.entries(nodeStyles).forEach(([type, css]) => {
            style.splice(2, 0, { selector: `node[type = "${type}"]`, style: css });
        });

        const cy = cytoscape({
            container: document.getElementById('cy'),
            elements: elements,
            style: style,
            layout: { name: '__LAYOUT__', animate: false, nodeDimensionsIncludeLabels: true },
        });
        cy.ready(() => {
            if (focus.length > 0) {
                cy.fit(cy.collection(focus.map(id => cy.getElementById(id))), __PADDING__);
            }
        });
    </script>
</body>
</html>
"""


def _script_json(value: Any) -> str:
    # "</" would close the surrounding <script> element
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


def build_elements(session: "GraphSession") -> List[Dict[str, Any]]:
    """Cytoscape element definitions with classification classes."""
    elements: List[Dict[str, Any]] = []
    for node in session.graph.iter_nodes():
        tag = session.classification(node.id)
        elements.append({
            "group": "nodes",
            "data": node.model_dump(mode="json"),
            "classes": tag.value if tag else "",
        })
    for edge in session.graph.iter_edges():
        tag = session.classification(edge.id)
        elements.append({
            "group": "edges",
            "data": edge.model_dump(mode="json"),
            "classes": tag.value if tag else "",
        })
    return elements


def render_html(session: "GraphSession", title: str = "Agent Landscape", summary: str = "") -> str:
    """Generate the HTML page for the session's current state."""
    focus = sorted(
        element_id
        for element_id, tag in session.tags.items()
        if tag is not Classification.FADED and session.graph.has_element(element_id)
    )
    replacements = {
        "__TITLE__": escape(title),
        "__SUMMARY__": escape(summary) if summary else f"{session.graph.node_count} nodes, {session.graph.edge_count} edges",
        "__LAYOUT__": DEFAULT_LAYOUT,
        "__PADDING__": str(FIT_PADDING),
        "__GRAPH_DATA__": _script_json(build_elements(session)),
        "__NODE_STYLES__": _script_json(NODE_STYLES),
        "__FOCUS__": _script_json(focus),
    }

    page = HTML_TEMPLATE
    for placeholder, value in replacements.items():
        page = page.replace(placeholder, value)
    return page


def write_html(session: "GraphSession", output_path: Union[str, Path], **kwargs) -> Path:
    out_file = Path(output_path)
    out_file.write_text(render_html(session, **kwargs), encoding="utf-8")
    logger.debug("Wrote visualization to %s", out_file)
    return out_file


def open_visualization(session: "GraphSession", output_path: Union[str, Path] = "landscape.html", **kwargs) -> Path:
    """Write the page and open it in the default browser."""
    out_file = write_html(session, output_path, **kwargs)
    webbrowser.open(out_file.resolve().as_uri())
    return out_file
