"""
Streaming module for livehls.

Builds and renders live HLS media playlists and their master playlist.
"""

from .file_handle import SharedFile
from .m3u8_entry import M3U8Entry
from .media_playlist import MediaPlaylist, PlaylistType
from .variant_playlist import VariantPlaylist

__all__ = ["M3U8Entry", "MediaPlaylist", "PlaylistType", "SharedFile", "VariantPlaylist"]
