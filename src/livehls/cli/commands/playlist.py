from __future__ import annotations

import json
from pathlib import Path

import typer

from ...infra.exceptions import LiveHLSError
from ...infra.logging import get_logger
from ...infra.settings import load_settings
from ...runtime.stream_config import build_variant_playlist, load_stream_config
from ...streaming.file_handle import SharedFile
from ...streaming.media_playlist import MediaPlaylist

app = typer.Typer(name="playlist", help="Render and simulate playlists")


@app.command("render")
def render(
    stream_path: Path = typer.Argument(..., help="Path to a YAML stream description"),
    rendition: str | None = typer.Option(None, "--rendition", "-r", help="Render this rendition's media playlist instead of the master"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Render the master playlist (or one media playlist) of a stream description.

    Examples:
        livehls playlist render stream.yaml
        livehls playlist render stream.yaml --rendition low
    """
    log = get_logger(__name__)
    try:
        config = load_stream_config(stream_path, load_settings())
        master = build_variant_playlist(config)
    except LiveHLSError as e:
        log.error("Failed to load stream description", path=str(stream_path), error=str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    with master:
        if rendition is None:
            text = master.render()
            payload = {"status": "ok", "name": master.name, "variants": list(master), "playlist": text}
        else:
            variant = master.get_variant(rendition)
            if variant is None:
                typer.echo(f"Error: Rendition '{rendition}' not found in {stream_path}", err=True)
                typer.echo(f"Available renditions: {list(master)}", err=True)
                raise typer.Exit(1)
            text = variant.render()
            payload = {
                "status": "ok",
                "name": variant.name,
                "media_sequence": variant.media_sequence,
                "target_duration": variant.target_duration,
                "playlist": text,
            }

    if json_output:
        typer.echo(json.dumps(payload, indent=2))
    else:
        typer.echo(text)


@app.command("simulate")
def simulate(
    segments: int = typer.Option(10, "--segments", "-n", min=0, help="Number of segments to append"),
    duration: float = typer.Option(2.0, "--duration", "-d", min=0.0, help="Duration of each segment in seconds"),
    window: int = typer.Option(0, "--window", "-w", min=0, help="Window size in seconds (0 keeps every segment)"),
    version: int = typer.Option(3, "--version", "-v", min=1, help="Playlist protocol version"),
    chunked: bool = typer.Option(True, "--chunked/--byte-range", help="Whole-file segments or byte ranges of one file"),
    segment_bytes: int = typer.Option(1_000_000, "--segment-bytes", min=0, help="Byte length of each segment in byte-range mode"),
    discontinuity_every: int = typer.Option(0, "--discontinuity-every", min=0, help="Mark every Nth segment discontinuous (0 disables)"),
    end: bool = typer.Option(False, "--end", help="Close the playlist after the last segment"),
    name: str = typer.Option("live", "--name", help="Rendition name"),
    base_url: str = typer.Option("", "--base-url", help="Base URL prepended to segment paths"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Append synthetic segments to a live playlist and print the result.

    Examples:
        livehls playlist simulate --segments 20 --duration 6 --window 30
        livehls playlist simulate --version 4 --byte-range --end
    """
    settings = load_settings()
    evicted_paths: list[str] = []

    with MediaPlaylist.from_settings(
        name,
        None,
        settings,
        base_url=base_url,
        version=version,
        window_size=window,
        chunked=chunked,
    ) as playlist:
        for index in range(segments):
            if playlist.chunked:
                path, offset = f"{name}_{index:05d}.ts", 0
            else:
                path, offset = f"{name}.ts", index * segment_bytes
            segment_file = SharedFile(path)
            discontinuous = bool(discontinuity_every) and index > 0 and index % discontinuity_every == 0
            evicted = playlist.add_entry(
                path, segment_file, None, duration, segment_bytes, offset, index, discontinuous
            )
            segment_file.release()
            for old in evicted or []:
                evicted_paths.append(str(old.path))
                old.release()

        if end:
            playlist.end_stream()

        text = playlist.render()
        payload = {
            "status": "ok",
            "name": playlist.name,
            "media_sequence": playlist.media_sequence,
            "target_duration": playlist.target_duration,
            "total_duration": playlist.total_duration,
            "evicted": evicted_paths,
            "playlist": text,
        }

    if json_output:
        typer.echo(json.dumps(payload, indent=2))
    else:
        typer.echo(text)
