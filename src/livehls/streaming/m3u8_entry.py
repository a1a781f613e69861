"""
Media segment entry for a live M3U8 playlist.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..infra.exceptions import InvalidArgumentError
from .constants import BYTERANGE_TAG, DISCONTINUITY_TAG, INF_TAG, MIN_VERSION_FLOAT_DURATION
from .file_handle import SharedFile


@dataclass(frozen=True, slots=True)
class M3U8Entry:
    """One media segment listed by a playlist.

    Construction takes a reference on ``file``; the owner calls
    :meth:`release` exactly once when the entry leaves the playlist.
    """

    url: str
    file: Optional[SharedFile]
    title: Optional[str] = None
    duration: float = 0.0  # seconds
    length: int = 0  # bytes, byte-range mode only
    offset: int = 0  # bytes, byte-range mode only
    discontinuous: bool = False

    def __post_init__(self) -> None:
        if not self.url:
            raise InvalidArgumentError("segment url must be a non-empty string")
        if self.length < 0 or self.offset < 0:
            raise InvalidArgumentError("byte-range length and offset must be >= 0")
        if self.file is not None:
            self.file.acquire()

    def release(self) -> None:
        """Drop the reference taken at construction."""
        if self.file is not None:
            self.file.release()

    def format_duration(self, version: int) -> str:
        if version < MIN_VERSION_FLOAT_DURATION:
            # Integer seconds, rounded half-up
            return str(int(self.duration + 0.5))
        return f"{self.duration:.2f}"

    def render(self, version: int, byte_range: bool = False) -> str:
        """Render the tag block for this entry, newline terminated."""
        lines = []
        if self.discontinuous:
            lines.append(DISCONTINUITY_TAG)
        lines.append(f"{INF_TAG}:{self.format_duration(version)},{self.title or ''}")
        if byte_range:
            lines.append(f"{BYTERANGE_TAG}:{self.length}@{self.offset}")
        lines.append(self.url)
        return "\n".join(lines) + "\n"
