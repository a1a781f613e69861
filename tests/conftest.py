"""
Global test configuration for livehls.

This module provides global pytest configuration and fixtures.
"""

import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog

# Ensure the project src directory is importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from livehls.streaming.media_playlist import MediaPlaylist  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI tests reconfigure logging; start every test from the defaults."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def spy_logger():
    return MagicMock(name="logger")


@pytest.fixture
def make_playlist(spy_logger):
    """Factory for media playlists with test-friendly defaults."""
    created = []

    def _make(**overrides):
        options = {
            "name": "low",
            "base_url": "http://cdn.example/live",
            "file": None,
            "bitrate": 800000,
            "version": 3,
            "window_size": 0,
            "allow_cache": True,
            "chunked": True,
            "logger": spy_logger,
        }
        options.update(overrides)
        playlist = MediaPlaylist(**options)
        created.append(playlist)
        return playlist

    yield _make
    for playlist in created:
        playlist.dispose()
