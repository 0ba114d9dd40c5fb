"""
Filter Command - Highlight nodes of given types and their direct connections.

Usage:
    landscape filter data.json --type Investor
    landscape filter data.json --type UseCase --type Protocol --hide
"""

from typing import Optional, Tuple

import click

from ...core.session import GraphSession
from ...core.types import NodeType
from ..utils import get_settings, load_graph_or_exit, report_session


@click.command("filter")
@click.argument("graph_file", required=False)
@click.option("-t", "--type", "types", multiple=True, required=True,
              type=click.Choice([t.value for t in NodeType]),
              help="Node type to highlight (repeatable)")
@click.option("--hide", is_flag=True, help="Remove faded elements from the exported graph")
@click.option("--html", "html_path", type=click.Path(dir_okay=False), help="Write the classified graph as HTML")
@click.option("--open", "open_browser", is_flag=True, help="Write the HTML page and open it in the browser")
@click.option("--json", "as_json", is_flag=True, help="Output the summary as JSON")
@click.pass_context
def filter_by_type(
    ctx: click.Context,
    graph_file: Optional[str],
    types: Tuple[str, ...],
    hide: bool,
    html_path: Optional[str],
    as_json: bool,
    open_browser: bool,
) -> None:
    """
    Show only nodes of the given types, with their connected neighbours.
    """
    settings = get_settings(ctx)
    graph = load_graph_or_exit(graph_file or settings.graph_file)

    session = GraphSession(graph)
    summary = session.filter_by_type(types)

    report_session(session, summary, hide, html_path, as_json, open_browser)
