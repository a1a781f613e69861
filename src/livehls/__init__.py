"""livehls: live HLS media and master playlist management."""

from .streaming import M3U8Entry, MediaPlaylist, PlaylistType, SharedFile, VariantPlaylist

__version__ = "0.1.0"

__all__ = [
    "M3U8Entry",
    "MediaPlaylist",
    "PlaylistType",
    "SharedFile",
    "VariantPlaylist",
]
