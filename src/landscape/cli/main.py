"""
landscape CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from ..config import load_settings
from ..core.exceptions import ConfigError
from .commands import enrich, filter, search, stats, verify
from .utils import configure_logging, echo_error


@click.group()
@click.version_option(package_name="agent-landscape")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Settings file (default: .landscape/config.yaml)")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Optional[Path]):
    """landscape: explore the agent landscape graph.

    Search node labels, expand to connected and reachable neighbours,
    filter by type and keep the graph file healthy.

    \b
    Quick Start:
      landscape search data.json -q openai --depth 2
      landscape filter data.json --type Investor --html investors.html
      landscape verify data.json --fix
    """
    configure_logging(verbose)
    try:
        ctx.obj = load_settings(config_path)
    except ConfigError as e:
        echo_error(str(e))
        sys.exit(1)


# Register commands
main.add_command(search.search)
main.add_command(filter.filter_by_type)
main.add_command(stats.stats)
main.add_command(enrich.enrich)
main.add_command(verify.verify)

if __name__ == "__main__":
    main()
