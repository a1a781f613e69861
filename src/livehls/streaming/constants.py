"""M3U8 tags and protocol-version thresholds."""

# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------
HEADER_TAG = "#EXTM3U"
VERSION_TAG = "#EXT-X-VERSION"
ALLOW_CACHE_TAG = "#EXT-X-ALLOW-CACHE"
MEDIA_SEQUENCE_TAG = "#EXT-X-MEDIA-SEQUENCE"
TARGET_DURATION_TAG = "#EXT-X-TARGETDURATION"
DISCONTINUITY_TAG = "#EXT-X-DISCONTINUITY"
INF_TAG = "#EXTINF"
BYTERANGE_TAG = "#EXT-X-BYTERANGE"
ENDLIST_TAG = "#EXT-X-ENDLIST"
STREAM_INF_TAG = "#EXT-X-STREAM-INF"

PLAYLIST_EXTENSION = "m3u8"
PROGRAM_ID = 1

# ---------------------------------------------------------------------------
# Version gates
# ---------------------------------------------------------------------------

# Decimal #EXTINF durations were introduced in protocol version 3.
MIN_VERSION_FLOAT_DURATION = 3
# #EXT-X-BYTERANGE needs protocol version 4.
MIN_VERSION_BYTERANGE = 4
