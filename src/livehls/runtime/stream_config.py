"""
YAML stream descriptions.

A stream file names the master playlist and lists its renditions, each
with the segments it currently carries. Rendition options that the file
leaves out fall back to the process settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ..infra.exceptions import StreamConfigError
from ..infra.settings import Settings
from ..streaming.file_handle import SharedFile
from ..streaming.media_playlist import MediaPlaylist
from ..streaming.variant_playlist import VariantPlaylist

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SegmentConfig:
    path: str
    duration: float
    title: Optional[str] = None
    length: int = 0
    offset: int = 0
    discontinuous: bool = False


@dataclass(frozen=True)
class RenditionConfig:
    name: str
    bitrate: int
    version: int
    window_size: int
    allow_cache: bool
    chunked: bool
    base_url: str
    end_list: bool = False
    segments: tuple[SegmentConfig, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StreamConfig:
    name: str
    base_url: str
    renditions: tuple[RenditionConfig, ...] = field(default_factory=tuple)

    def rendition(self, name: str) -> RenditionConfig | None:
        for rendition in self.renditions:
            if rendition.name == name:
                return rendition
        return None


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise StreamConfigError(f"Missing '{key}' field in {where}")
    return value


def _bool(data: dict[str, Any], key: str, default: bool, where: str) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise StreamConfigError(f"'{key}' in {where} must be true or false, got {value!r}")
    return value


def _parse_segment(data: Any, where: str) -> SegmentConfig:
    if not isinstance(data, dict):
        raise StreamConfigError(f"Segment entry in {where} must be a mapping")
    try:
        return SegmentConfig(
            path=str(_require(data, "path", where)),
            duration=float(_require(data, "duration", where)),
            title=data.get("title"),
            length=int(data.get("length", 0)),
            offset=int(data.get("offset", 0)),
            discontinuous=_bool(data, "discontinuous", False, where),
        )
    except (TypeError, ValueError) as e:
        raise StreamConfigError(f"Invalid segment in {where}: {e}") from e


def _parse_rendition(data: Any, stream_base_url: str, settings: Settings) -> RenditionConfig:
    if not isinstance(data, dict):
        raise StreamConfigError("Rendition entries must be mappings")

    name = str(_require(data, "name", "rendition"))
    where = f"rendition '{name}'"
    segments = data.get("segments") or []
    if not isinstance(segments, list):
        raise StreamConfigError(f"'segments' in {where} must be a list")

    try:
        return RenditionConfig(
            name=name,
            bitrate=int(_require(data, "bitrate", where)),
            version=int(data.get("version", settings.version)),
            window_size=int(data.get("window_size", settings.window_size)),
            allow_cache=_bool(data, "allow_cache", settings.allow_cache, where),
            chunked=_bool(data, "chunked", settings.chunked, where),
            base_url=str(data.get("base_url", stream_base_url)),
            end_list=_bool(data, "end_list", False, where),
            segments=tuple(_parse_segment(s, where) for s in segments),
        )
    except (TypeError, ValueError) as e:
        raise StreamConfigError(f"Invalid {where}: {e}") from e


def parse_stream_config(data: Any, settings: Settings) -> StreamConfig:
    """Build a StreamConfig from already-decoded YAML data."""
    if not isinstance(data, dict):
        raise StreamConfigError("Stream description must be a mapping")

    name = str(_require(data, "name", "stream description"))
    base_url = str(data.get("base_url", settings.base_url))
    renditions = data.get("renditions") or []
    if not isinstance(renditions, list):
        raise StreamConfigError("'renditions' must be a list")

    return StreamConfig(
        name=name,
        base_url=base_url,
        renditions=tuple(_parse_rendition(r, base_url, settings) for r in renditions),
    )


def load_stream_config(path: Path | str, settings: Settings) -> StreamConfig:
    """Load a stream description from a YAML file."""
    file_path = Path(path)
    if not file_path.is_file():
        raise StreamConfigError(f"Stream description not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise StreamConfigError(f"Invalid YAML in {file_path.name}: {e}") from e

    config = parse_stream_config(data, settings)
    _logger.debug("Loaded stream %s with %d renditions from %s", config.name, len(config.renditions), file_path.name)
    return config


def build_media_playlist(rendition: RenditionConfig) -> MediaPlaylist:
    """Create a media playlist and feed it the rendition's segments in order.

    Segments pushed out of the window are released immediately; nothing
    else holds them. If a segment is rejected, the playlist is disposed
    before the error propagates.
    """
    playlist_file = SharedFile(f"{rendition.name}.m3u8")
    playlist = MediaPlaylist(
        name=rendition.name,
        base_url=rendition.base_url,
        file=playlist_file,
        bitrate=rendition.bitrate,
        version=rendition.version,
        window_size=rendition.window_size,
        allow_cache=rendition.allow_cache,
        chunked=rendition.chunked,
    )
    playlist_file.release()

    try:
        for index, segment in enumerate(rendition.segments):
            segment_file = SharedFile(segment.path)
            try:
                evicted = playlist.add_entry(
                    segment.path,
                    segment_file,
                    segment.title,
                    segment.duration,
                    segment.length,
                    segment.offset,
                    index,
                    segment.discontinuous,
                )
            finally:
                segment_file.release()
            for old in evicted or []:
                old.release()
    except Exception:
        playlist.dispose()
        raise

    if rendition.end_list:
        playlist.end_stream()
    return playlist


def build_variant_playlist(config: StreamConfig) -> VariantPlaylist:
    """Create the master playlist with every rendition populated."""
    master_file = SharedFile(f"{config.name}.m3u8")
    master = VariantPlaylist(config.name, config.base_url, master_file)
    master_file.release()

    try:
        for rendition in config.renditions:
            playlist = build_media_playlist(rendition)
            if not master.add_variant(playlist):
                _logger.warning("Duplicate rendition '%s' in stream %s ignored", rendition.name, config.name)
                playlist.dispose()
    except Exception:
        master.dispose()
        raise
    return master
