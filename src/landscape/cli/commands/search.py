"""
Search Command - Free-text search with connected/reachable expansion.

Loads the graph, runs one search, prints the counts and optionally hides the
faded remainder or exports the classified graph as HTML.

Usage:
    landscape search data.json -q openai
    landscape search data.json -q openai --no-reachable
    landscape search data.json -q openai --depth 1 --hide --html out.html
    landscape search data.json -q openai --open
"""

import logging
from typing import Optional

import click

from ...core.session import GraphSession
from ...core.types import SearchConfig
from ..utils import get_settings, load_graph_or_exit, report_session

logger = logging.getLogger(__name__)


@click.command()
@click.argument("graph_file", required=False)
@click.option("-q", "--query", required=True, help="Case-insensitive label substring")
@click.option("--connected/--no-connected", "include_connected", default=True,
              help="Include nodes and edges directly attached to matches")
@click.option("--reachable/--no-reachable", "include_reachable", default=True,
              help="Include nodes reachable over outgoing edges")
@click.option("-d", "--depth", "max_depth", type=click.IntRange(min=0), default=None,
              help="Maximum hops from the matched nodes (default from settings, 3)")
@click.option("--hide", is_flag=True, help="Remove faded elements from the exported graph")
@click.option("--html", "html_path", type=click.Path(dir_okay=False), help="Write the classified graph as HTML")
@click.option("--open", "open_browser", is_flag=True, help="Write the HTML page and open it in the browser")
@click.option("--json", "as_json", is_flag=True, help="Output the summary as JSON")
@click.pass_context
def search(
    ctx: click.Context,
    graph_file: Optional[str],
    query: str,
    include_connected: bool,
    include_reachable: bool,
    max_depth: Optional[int],
    hide: bool,
    html_path: Optional[str],
    as_json: bool,
    open_browser: bool,
) -> None:
    """
    Search node labels and classify the graph around the matches.
    """
    settings = get_settings(ctx)
    graph = load_graph_or_exit(graph_file or settings.graph_file)

    session = GraphSession(graph, default_depth=settings.max_depth)
    config = SearchConfig.from_controls(
        query=query,
        include_connected=include_connected,
        include_reachable=include_reachable,
        max_depth=max_depth if max_depth is not None else settings.max_depth,
    )
    summary = session.search(config)
    logger.debug("Session state after search: %s", session.state)

    report_session(session, summary, hide, html_path, as_json, open_browser)
