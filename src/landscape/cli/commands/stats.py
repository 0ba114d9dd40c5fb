"""
Stats Command - Summarize the graph file.
"""

import json
from typing import Optional

import click
from rich.table import Table

from ...maintenance.links import find_duplicate_nodes
from ..utils import console, get_settings, load_graph_or_exit


@click.command()
@click.argument("graph_file", required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def stats(ctx: click.Context, graph_file: Optional[str], as_json: bool) -> None:
    """
    Show node and edge counts, orphans and duplicate labels.
    """
    settings = get_settings(ctx)
    graph = load_graph_or_exit(graph_file or settings.graph_file)

    data = graph.get_stats()
    data["duplicate_labels"] = len(find_duplicate_nodes(graph))

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title="Landscape Graph")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")

    table.add_row("Nodes", str(data["total_nodes"]))
    table.add_row("Edges", str(data["total_edges"]))
    for node_type, count in sorted(data["nodes_by_type"].items()):
        table.add_row(f"  {node_type}", str(count), style="dim")
    table.add_row("Orphaned nodes", str(data["orphans"]))
    table.add_row("Duplicate labels", str(data["duplicate_labels"]))

    console.print(table)
