"""Tests for the batch driver."""

from pathlib import Path
from unittest import mock

from audio_info.core.batch import BatchProcessor
from audio_info.exceptions import ExtractionError
from audio_info.metadata.audio_metadata import AudioInfo


class StubExtractor:
    def __init__(self, failing):
        self.failing = set(failing)
        self.calls = []

    def process_file(self, path):
        self.calls.append(path)
        if path in self.failing:
            raise ExtractionError(f"cannot read {path}")
        return AudioInfo(file_path=str(path), file_size_bytes=1)


FILES = [Path("a.mp3"), Path("b.mp3"), Path("c.mp3")]


def test_all_succeed_in_order(logger):
    batch = BatchProcessor(StubExtractor([]), logger).run(FILES)

    assert [info.file_path for info in batch.results] == ["a.mp3", "b.mp3", "c.mp3"]
    assert not batch.had_errors
    assert not batch.aborted


def test_stops_at_first_failure(logger):
    extractor = StubExtractor([Path("b.mp3")])

    batch = BatchProcessor(extractor, logger).run(FILES, keep_going=False)

    assert extractor.calls == FILES[:2]
    assert batch.aborted
    assert [path for path, _ in batch.errors] == [Path("b.mp3")]


def test_keep_going_collects_errors(logger):
    extractor = StubExtractor([Path("a.mp3"), Path("c.mp3")])

    batch = BatchProcessor(extractor, logger).run(FILES, keep_going=True)

    assert extractor.calls == FILES
    assert [info.file_path for info in batch.results] == ["b.mp3"]
    assert len(batch.errors) == 2
    assert batch.had_errors
    assert not batch.aborted


def test_progress_bar_updated_per_file(logger):
    progress_bar = mock.Mock()

    BatchProcessor(StubExtractor([Path("b.mp3")]), logger).run(FILES, keep_going=True, progress_bar=progress_bar)

    assert progress_bar.update.call_count == 3
    progress_bar.close.assert_called_once()
