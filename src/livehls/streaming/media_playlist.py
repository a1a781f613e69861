"""
Media playlist: rolling window of segments for one rendition.

The encoder side calls :meth:`MediaPlaylist.add_entry` once per finished
segment. When a window size is configured, the oldest entries are dropped
before the new one is appended and their file handles are handed back to
the caller, who owns their cleanup. The playlist text is rebuilt from the
current queue on every :meth:`MediaPlaylist.render` call.

Not thread-safe: callers that append and render from different threads
must serialize access themselves.
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator, Optional

from ..infra.logging import get_logger
from .constants import (
    ALLOW_CACHE_TAG,
    ENDLIST_TAG,
    HEADER_TAG,
    MEDIA_SEQUENCE_TAG,
    MIN_VERSION_BYTERANGE,
    TARGET_DURATION_TAG,
    VERSION_TAG,
)
from .file_handle import SharedFile
from .m3u8_entry import M3U8Entry

if TYPE_CHECKING:
    from ..infra.settings import Settings


class PlaylistType(str, Enum):
    """EVENT playlists keep growing; VOD playlists are closed to new segments."""

    EVENT = "event"
    VOD = "vod"


def join_url(base_url: str, path: str) -> str:
    """Join a base URL and a segment path with exactly one separator."""
    if not base_url:
        return path
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class MediaPlaylist:
    """Sliding-window media playlist for a single bitrate variant."""

    def __init__(
        self,
        name: str,
        base_url: str,
        file: Optional[SharedFile],
        bitrate: int,
        version: int,
        window_size: int,
        allow_cache: bool,
        chunked: bool,
        logger: Any = None,
    ):
        self.name = name
        self.base_url = base_url
        self.bitrate = bitrate
        self.version = version
        self.window_size = window_size
        self.allow_cache = allow_cache
        self.playlist_type = PlaylistType.EVENT
        self.end_list = False
        self.sequence_number = 0
        self.entries: deque[M3U8Entry] = deque()
        self._log = logger if logger is not None else get_logger(__name__)
        self._disposed = False

        self.file = file.acquire() if file is not None else None

        if not chunked and version < MIN_VERSION_BYTERANGE:
            self._log.warning(
                "Byte-range media segments are not supported for versions < 4, using whole segments",
                playlist=name,
                version=version,
            )
            chunked = True
        self.chunked = chunked

    @classmethod
    def from_settings(
        cls,
        name: str,
        file: Optional[SharedFile],
        settings: Settings,
        **overrides: Any,
    ) -> MediaPlaylist:
        """Build a playlist whose unspecified options come from ``settings``."""
        options: dict[str, Any] = {
            "base_url": settings.base_url,
            "bitrate": 0,
            "version": settings.version,
            "window_size": settings.window_size,
            "allow_cache": settings.allow_cache,
            "chunked": settings.chunked,
        }
        options.update(overrides)
        return cls(name=name, file=file, **options)

    # ------------------------------------------------------------------
    # Segment queue
    # ------------------------------------------------------------------

    def add_entry(
        self,
        path: str,
        file: Optional[SharedFile],
        title: Optional[str],
        duration: float,
        length: int,
        offset: int,
        index: int,
        discontinuous: bool,
    ) -> Optional[list[SharedFile]]:
        """Append a segment and enforce the window.

        Returns the handles of evicted segments, oldest first, each carrying
        a reference owned by the caller. Returns None when the playlist is
        closed (VOD) or disposed; nothing is changed in that case.
        """
        if self._disposed or self.playlist_type is PlaylistType.VOD:
            self._log.debug("Rejected segment for closed playlist", playlist=self.name, path=path)
            return None

        entry = M3U8Entry(
            url=join_url(self.base_url, path),
            file=file,
            title=title,
            duration=duration,
            length=length,
            offset=offset,
            discontinuous=discontinuous,
        )

        evicted: list[SharedFile] = []
        if self.window_size != 0:
            # Checked against the queue before the new entry goes in
            while self.entries and self.total_duration >= self.window_size:
                old = self.entries.popleft()
                if old.file is not None:
                    evicted.append(old.file.acquire())
                old.release()

        self.sequence_number = index + 1
        self.entries.append(entry)

        if evicted:
            self._log.debug(
                "Evicted segments from window",
                playlist=self.name,
                count=len(evicted),
                media_sequence=self.media_sequence,
            )
        return evicted

    def end_stream(self) -> None:
        """Close the playlist: append the end tag and reject further segments."""
        self.end_list = True
        self.playlist_type = PlaylistType.VOD

    # ------------------------------------------------------------------
    # Derived statistics
    # ------------------------------------------------------------------

    @property
    def target_duration(self) -> int:
        """Longest segment duration in whole seconds (truncated)."""
        if not self.entries:
            return 0
        return int(max(entry.duration for entry in self.entries))

    @property
    def total_duration(self) -> float:
        return sum(entry.duration for entry in self.entries)

    @property
    def media_sequence(self) -> int:
        """Sequence number of the first listed segment."""
        return self.sequence_number - len(self.entries)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Render the playlist text from the current window."""
        parts = [
            f"{HEADER_TAG}\n",
            f"{VERSION_TAG}:{self.version}\n",
            f"{ALLOW_CACHE_TAG}:{'YES' if self.allow_cache else 'NO'}\n",
            f"{MEDIA_SEQUENCE_TAG}:{self.media_sequence}\n",
            f"{TARGET_DURATION_TAG}:{self.target_duration}\n",
            "\n",
        ]
        byte_range = not self.chunked
        for entry in self.entries:
            parts.append(entry.render(self.version, byte_range))
        if self.end_list:
            parts.append(ENDLIST_TAG)
        return "".join(parts)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        """Release every held reference. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        while self.entries:
            self.entries.popleft().release()
        if self.file is not None:
            self.file.release()
            self.file = None

    def __enter__(self) -> MediaPlaylist:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[M3U8Entry]:
        return iter(self.entries)

    def __repr__(self) -> str:
        return (
            f"MediaPlaylist(name={self.name!r}, bitrate={self.bitrate}, "
            f"entries={len(self.entries)}, sequence_number={self.sequence_number})"
        )
