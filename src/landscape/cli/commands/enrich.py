"""
Enrich Command - Add GitHub repository metadata to nodes.

Reads GITHUB_TOKEN from the environment (or the settings file) and writes
the enriched graph next to the input as <name>.enriched.json unless
--output is given.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.progress import Progress

from ...core.exceptions import EnrichmentError
from ...core.loader import save_graph_file
from ...maintenance.github import GitHubClient, enrich_graph
from ..utils import console, echo_error, echo_info, echo_success, get_settings, load_graph_or_exit


@click.command()
@click.argument("graph_file", required=False)
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output file (default: <input>.enriched.json)")
@click.option("--dry-run", is_flag=True, help="Enrich without writing output")
@click.pass_context
def enrich(ctx: click.Context, graph_file: Optional[str], output: Optional[str], dry_run: bool) -> None:
    """
    Enrich nodes that have a GitHub URL with stars, forks, license and dates.
    """
    settings = get_settings(ctx)
    input_path = Path(graph_file or settings.graph_file)
    graph = load_graph_or_exit(str(input_path))

    try:
        client = GitHubClient(settings.github_token)
    except EnrichmentError as e:
        echo_error(str(e))
        sys.exit(1)

    with Progress(console=console) as progress:
        task = progress.add_task("Enriching", total=None)
        report = enrich_graph(
            graph,
            client,
            concurrency=settings.enrich_concurrency,
            min_delay=settings.enrich_min_delay,
            max_delay=max(settings.enrich_min_delay, settings.enrich_max_delay),
            progress=lambda done, total: progress.update(task, completed=done, total=total),
        )

    echo_success(f"Success: {report.success}")
    if report.failed:
        echo_error(f"Failed: {report.failed}")

    if dry_run:
        echo_info("Dry run complete. No file written.")
        return

    out_path = Path(output) if output else input_path.with_name(f"{input_path.stem}.enriched.json")
    save_graph_file(graph, out_path)
    echo_success(f"Output written to: {out_path}")
