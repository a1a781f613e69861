from __future__ import annotations

import json

import typer

from ...infra.settings import load_settings

app = typer.Typer(name="config", help="Configuration commands")


@app.command("show")
def show_config():
    """Print resolved playlist and logging settings as JSON."""
    settings = load_settings()
    typer.echo(json.dumps(settings.model_dump(mode="json"), indent=2))
