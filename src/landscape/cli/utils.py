"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing, logging setup, settings access and graph loading used
across the landscape commands.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import Settings, load_settings
from ..core.graph import LandscapeGraph
from ..core.loader import load_graph_file
from ..core.types import SearchSummary
from ..render.html import open_visualization, write_html

console = Console()

DEFAULT_HTML_FILE = "landscape.html"


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(verbose: bool) -> None:
    """Route landscape logs through rich; DEBUG when verbose, WARNING otherwise."""
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger("landscape")
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def get_settings(ctx: click.Context) -> Settings:
    """Settings loaded by the main group, or freshly loaded when a command runs alone."""
    if isinstance(ctx.obj, Settings):
        return ctx.obj
    return load_settings()


def load_graph_or_exit(graph_file: str) -> LandscapeGraph:
    """
    Load the graph file or stop the command.

    A load failure is fatal: the error is printed and the process exits 1.
    """
    result = load_graph_file(Path(graph_file))
    if result.is_err():
        echo_error(str(result.error))
        click.echo("Check that the file exists and is a valid landscape graph document.", err=True)
        sys.exit(1)
    return result.unwrap()


def print_summary(summary: SearchSummary, title: Optional[str] = None) -> None:
    """Print the counts of a search or filter as a table."""
    table = Table(title=title or f"Results for '{summary.query}'")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")

    table.add_row("Matching nodes", str(summary.matched))
    table.add_row("Connected nodes", str(summary.connected))
    table.add_row("Reachable nodes", str(summary.reachable))
    table.add_row("Highlighted elements", str(summary.highlighted))
    table.add_row("Faded elements", str(summary.faded), style="dim")

    console.print(table)


def report_session(
    session,
    summary: SearchSummary,
    hide: bool,
    html_path: Optional[str],
    as_json: bool,
    open_browser: bool = False,
) -> None:
    """
    Shared tail of `search` and `filter`: optional hide, HTML export, output.

    With open_browser the page is written (to landscape.html unless --html
    names a file) and opened in the default browser.
    """
    hidden = session.hide_faded() if hide else 0

    if open_browser and not html_path:
        html_path = DEFAULT_HTML_FILE
    if html_path:
        label = f"{summary.matched} matching nodes, {summary.highlighted} highlighted, {summary.faded} faded"
        if open_browser:
            open_visualization(session, html_path, summary=label)
        else:
            write_html(session, html_path, summary=label)

    if as_json:
        payload = summary.model_dump(mode="json")
        payload["hidden"] = hidden
        payload["state"] = session.state.value
        click.echo(json.dumps(payload, indent=2))
        return

    if summary.matched == 0:
        echo_warning(f"0 matching nodes for '{summary.query}'")
    print_summary(summary)

    if hide:
        if hidden:
            echo_success(f"Hid {hidden} faded elements")
        else:
            echo_info("No faded elements to hide")
    if html_path:
        echo_success(f"Generated: {html_path}")
        echo_info(f"Open: {Path(html_path).resolve().as_uri()}")
