"""
Tests for the livehls CLI.
"""

import json
import textwrap

import pytest
from typer.testing import CliRunner

from livehls.cli.main import app

runner = CliRunner()


@pytest.fixture
def stream_file(tmp_path):
    path = tmp_path / "stream.yaml"
    path.write_text(
        textwrap.dedent(
            """
            name: master
            base_url: http://cdn.example/live
            renditions:
              - name: low
                bitrate: 800000
                segments:
                  - {path: low/seg0.ts, duration: 2.0}
                  - {path: low/seg1.ts, duration: 3.5}
            """
        ),
        encoding="utf-8",
    )
    return path


class TestHelp:
    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "livehls" in result.output

    def test_playlist_help(self):
        result = runner.invoke(app, ["playlist", "--help"])
        assert result.exit_code == 0
        assert "simulate" in result.output
        assert "render" in result.output


class TestRender:
    def test_master(self, stream_file):
        result = runner.invoke(app, ["playlist", "render", str(stream_file)])
        assert result.exit_code == 0
        assert result.stdout == (
            "#EXTM3U\n"
            "#EXT-X-STREAM-INF:PROGRAM-ID=1,BANDWIDTH=800000\n"
            "http://cdn.example/live/low.m3u8\n"
            "\n"
        )

    def test_rendition_json(self, stream_file):
        result = runner.invoke(app, ["playlist", "render", str(stream_file), "--rendition", "low", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["status"] == "ok"
        assert payload["target_duration"] == 3
        assert payload["media_sequence"] == 0
        assert "#EXTINF:3.50,\nhttp://cdn.example/live/low/seg1.ts\n" in payload["playlist"]

    def test_unknown_rendition(self, stream_file):
        result = runner.invoke(app, ["playlist", "render", str(stream_file), "--rendition", "high"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_missing_stream_file(self, tmp_path):
        result = runner.invoke(app, ["playlist", "render", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestSimulate:
    def test_window_evicts_oldest(self):
        result = runner.invoke(
            app,
            ["playlist", "simulate", "--segments", "10", "--duration", "2", "--window", "6", "--json"],
        )
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["evicted"] == [f"live_{i:05d}.ts" for i in range(7)]
        assert payload["media_sequence"] == 7
        assert "#EXT-X-MEDIA-SEQUENCE:7\n" in payload["playlist"]

    def test_unbounded_text_output(self):
        result = runner.invoke(app, ["playlist", "simulate", "--segments", "10", "--duration", "2"])
        assert result.exit_code == 0
        assert "#EXT-X-MEDIA-SEQUENCE:0\n" in result.stdout
        assert "#EXT-X-TARGETDURATION:2\n" in result.stdout
        assert result.stdout.count("#EXTINF:2.00,") == 10

    def test_byte_range_and_end(self):
        result = runner.invoke(
            app,
            [
                "playlist", "simulate",
                "--segments", "2",
                "--version", "4",
                "--byte-range",
                "--segment-bytes", "1000",
                "--end",
                "--json",
            ],
        )
        assert result.exit_code == 0
        text = json.loads(result.stdout)["playlist"]
        assert "#EXT-X-BYTERANGE:1000@1000\nlive.ts\n" in text
        assert text.endswith("#EXT-X-ENDLIST")

    def test_discontinuity_every(self):
        result = runner.invoke(
            app,
            ["playlist", "simulate", "--segments", "6", "--discontinuity-every", "3", "--json"],
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["playlist"].count("#EXT-X-DISCONTINUITY") == 1


class TestConfig:
    def test_show(self, monkeypatch):
        monkeypatch.setenv("LIVEHLS_WINDOW_SIZE", "24")
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["window_size"] == 24
        assert payload["version"] == 3
