"""
Master (variant) playlist: one entry per rendition, keyed by name.

Variants are rendered in the order they were added. The master text is
rebuilt whenever the set of variants changes and served from cache
otherwise.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from ..infra.exceptions import InvalidArgumentError
from ..infra.logging import get_logger
from .constants import HEADER_TAG, PLAYLIST_EXTENSION, PROGRAM_ID, STREAM_INF_TAG
from .file_handle import SharedFile
from .media_playlist import MediaPlaylist


class VariantPlaylist:
    """Registry of media playlists plus the cached master playlist text.

    The registry owns its variants: removing one, or disposing the
    registry, disposes the affected media playlists.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        file: Optional[SharedFile],
        logger: Any = None,
    ):
        self.name = name
        self.base_url = base_url
        self.file = file.acquire() if file is not None else None
        self.variants: dict[str, MediaPlaylist] = {}
        self._log = logger if logger is not None else get_logger(__name__)
        self._playlist_str = ""
        self._update()

    def add_variant(self, playlist: MediaPlaylist) -> bool:
        """Register a rendition. Returns False if the name is already taken."""
        if playlist is None:
            raise InvalidArgumentError("variant playlist is required")

        if playlist.name in self.variants:
            self._log.debug("Rejected duplicate variant", master=self.name, variant=playlist.name)
            return False

        self.variants[playlist.name] = playlist
        self._update()
        return True

    def get_variant(self, name: str) -> Optional[MediaPlaylist]:
        return self.variants.get(name)

    def remove_variant(self, name: str) -> bool:
        """Dispose and drop the named rendition. Returns False if it is unknown."""
        variant = self.variants.pop(name, None)
        if variant is None:
            return False

        variant.dispose()
        self._update()
        return True

    def render(self) -> str:
        return self._playlist_str

    def _update(self) -> None:
        parts = [f"{HEADER_TAG}\n"]
        for variant in self.variants.values():
            parts.append(f"{STREAM_INF_TAG}:PROGRAM-ID={PROGRAM_ID},BANDWIDTH={variant.bitrate}\n")
            parts.append(f"{variant.base_url}/{variant.name}.{PLAYLIST_EXTENSION}\n")
        self._playlist_str = "".join(parts)

    def dispose(self) -> None:
        """Dispose every variant and release the master file reference."""
        for variant in self.variants.values():
            variant.dispose()
        self.variants.clear()
        self._update()
        if self.file is not None:
            self.file.release()
            self.file = None

    def __enter__(self) -> VariantPlaylist:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    def __len__(self) -> int:
        return len(self.variants)

    def __contains__(self, name: object) -> bool:
        return name in self.variants

    def __iter__(self) -> Iterator[str]:
        return iter(self.variants)
