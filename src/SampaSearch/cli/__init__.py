"""CLI package for SampaSearch command orchestration.

Contains the click interface, the command runner that wires components,
and the command implementations driving the session controller.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from SampaSearch.cli.runner import CommandRunner
from SampaSearch.cli.ui import cli


def main() -> None:
    """Run SampaSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
