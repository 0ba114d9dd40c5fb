"""
Verify Command - Check node links and graph health.

Checks every url/github property over HTTP, lists duplicate labels and orphaned
nodes, and exports link-verification-YYYY-MM-DD.json to the current
directory. With --fix, repaired URLs are saved to <name>-fixed.json.
"""

from pathlib import Path
from typing import Optional

import click
from rich.progress import Progress
from rich.table import Table

from ...core.loader import save_graph_file
from ...maintenance.links import VerificationReport, check_url, fixed_dataset_path, verify_links, write_report
from ..utils import console, echo_success, echo_warning, get_settings, load_graph_or_exit


@click.command()
@click.argument("graph_file", required=False)
@click.option("--fix", is_flag=True, help="Save repaired URLs to <name>-fixed.json")
@click.option("--type", "kind", type=click.Choice(["all", "github", "website"]), default="all",
              show_default=True, help="Which links to check")
@click.pass_context
def verify(ctx: click.Context, graph_file: Optional[str], fix: bool, kind: str) -> None:
    """
    Verify all links in the graph and report broken ones.
    """
    settings = get_settings(ctx)
    input_path = Path(graph_file or settings.graph_file)
    graph = load_graph_or_exit(str(input_path))

    with Progress(console=console) as progress:
        task = progress.add_task("Verifying links", total=None)
        report = verify_links(
            graph,
            fix=fix,
            kind=kind,
            checker=lambda url: check_url(url, timeout=settings.link_timeout),
            progress=lambda done, total: progress.update(task, completed=done, total=total),
        )

    _print_report(report)

    if fix and report.fixed:
        fixed_path = save_graph_file(graph, fixed_dataset_path(input_path))
        echo_success(f"Fixed dataset saved to {fixed_path}")

    out_path = write_report(report)
    echo_success(f"Results exported to {out_path}")


def _print_report(report: VerificationReport) -> None:
    summary = report.summary()

    table = Table(title="Verification Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Total URLs", str(summary["total"]))
    table.add_row("Valid", str(summary["valid"]), style="green")
    table.add_row("Invalid format", str(summary["invalid"]), style="yellow")
    table.add_row("Broken", str(summary["broken"]), style="red")
    table.add_row("Fixed", str(summary["fixed"]), style="blue")
    table.add_row("Duplicate labels", str(summary["duplicate_labels"]))
    table.add_row("Orphaned nodes", str(summary["orphaned_nodes"]))
    console.print(table)

    for item in report.broken:
        echo_warning(f"{item.record.label} ({item.record.type}): {item.url} -> {item.status} {item.error}")
