"""statewalk CLI - Command line interface for statewalk."""

from __future__ import annotations

from statewalk.cli.main import cli, load_machine


def main() -> None:
    """Main entry point for the statewalk CLI."""
    cli()


__all__ = ["main", "cli", "load_machine"]
