"""
Main CLI application using Typer.

This module provides the command-line interface for livehls: rendering
playlists from YAML stream descriptions, simulating a live window, and
inspecting the resolved settings.
"""

from __future__ import annotations

import typer

from ..infra.logging import configure_logging
from .commands import config, playlist

app = typer.Typer(help="livehls operator CLI")

app.add_typer(playlist.app, name="playlist", help="Render and simulate playlists")
app.add_typer(config.app, name="config", help="Configuration commands")


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Override LOG_LEVEL for this run"),
):
    """livehls - live HLS playlist manager."""
    configure_logging(level=log_level)


def cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
