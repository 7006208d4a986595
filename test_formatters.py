"""Tests for text, JSON and CSV output."""

import csv
import io
import json

import pytest

from audio_info.metadata.audio_metadata import AudioInfo
from audio_info.output.formatters import CSV_FIELDS, format_csv, format_json, format_text, render


@pytest.fixture
def infos():
    return [
        AudioInfo(
            file_path="music/one.flac",
            file_size_bytes=1_000_000,
            sample_rate=44100,
            channels=2,
            duration_seconds=200,
            avg_bitrate_kbps=40,
            codec="flac",
            tags=(("track_title", "One"), ("comment", "first"), ("comment", "second")),
        ),
        AudioInfo(file_path="music/two, live.mp3", file_size_bytes=512),
    ]


def test_text_output(infos):
    text = format_text(infos)

    assert text == (
        "file: music/one.flac\n"
        "codec: flac\n"
        "sample_rate: 44100\n"
        "channels: 2\n"
        "duration: 200.00s\n"
        "avg_bitrate_kbps: 40\n"
        "file_size_bytes: 1000000\n"
        "track_title: One\n"
        "comment: first\n"
        "comment: second\n"
        "\n"
        "file: music/two, live.mp3\n"
        "duration: unknown\n"
        "file_size_bytes: 512"
    )


def test_text_basic_omits_tags(infos):
    text = format_text(infos, basic_only=True)

    assert "track_title" not in text
    assert "comment" not in text
    assert text.count("duration: unknown") == 1
    assert "duration: 200.00s" in text


def test_json_structure(infos):
    data = json.loads(format_json(infos))

    assert len(data) == 2
    for item in data:
        assert set(item) == set(CSV_FIELDS) | {'tags'}
        assert isinstance(item['tags'], dict)

    assert data[0]['tags'] == {'track_title': 'One', 'comment': 'second'}
    assert data[1]['codec'] is None
    assert data[1]['duration_seconds'] is None
    assert data[1]['file_size_bytes'] == 512


def test_json_is_pretty_printed(infos):
    assert format_json(infos).startswith("[\n  {\n")


def test_csv_rows(infos):
    output = format_csv(infos)
    rows = list(csv.reader(io.StringIO(output)))

    assert output.splitlines()[0] == ",".join(CSV_FIELDS)
    assert len(rows) == 1 + len(infos)
    assert all(len(row) == 7 for row in rows)
    assert rows[1] == ["music/one.flac", "flac", "44100", "2", "200.00", "40", "1000000"]
    assert rows[2] == ["music/two, live.mp3", "", "", "", "", "", "512"]
    assert "track_title" not in output


def test_csv_empty_results():
    assert format_csv([]) == ",".join(CSV_FIELDS)


def test_render_dispatch(infos):
    assert render(infos, 'text', basic_only=True) == format_text(infos, basic_only=True)
    assert render(infos, 'json') == format_json(infos)
    assert render(infos, 'csv', basic_only=True) == format_csv(infos)

    with pytest.raises(ValueError):
        render(infos, 'xml')
