"""Batch extraction over a discovered file list."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from tqdm import tqdm

from ..exceptions import ExtractionError
from ..metadata.audio_metadata import AudioInfo


@dataclass
class BatchResult:
    """Outcome of a batch run."""

    results: List[AudioInfo] = field(default_factory=list)
    errors: List[Tuple[Path, ExtractionError]] = field(default_factory=list)
    aborted: bool = False

    @property
    def had_errors(self) -> bool:
        return bool(self.errors)


class BatchProcessor:
    """Run the metadata extractor over files one at a time, in order."""

    def __init__(self, extractor, logger=None):
        """
        Initialize batch processor.

        Args:
            extractor: Object with a process_file(path) -> AudioInfo method
            logger: Logger instance
        """
        self.extractor = extractor
        self.logger = logger or logging.getLogger(__name__)

    def run(self, files: List[Path], keep_going: bool = False,
            progress_bar: Optional[tqdm] = None) -> BatchResult:
        """
        Extract metadata for each file.

        Args:
            files: Audio files in discovery order
            keep_going: Continue past failed files instead of stopping
            progress_bar: Optional progress bar to update

        Returns:
            BatchResult with successes in input order
        """
        batch = BatchResult()

        for file_path in files:
            if progress_bar:
                progress_bar.set_description(f"Reading: {Path(file_path).name[:40]}")

            try:
                batch.results.append(self.extractor.process_file(file_path))
            except ExtractionError as e:
                batch.errors.append((file_path, e))
                self.logger.error(f"Error with {file_path}: {e}")
                if not keep_going:
                    batch.aborted = True
                    break
            finally:
                if progress_bar:
                    progress_bar.update(1)

        if progress_bar:
            progress_bar.close()

        self.logger.info(f"Processed {len(files)} files: {len(batch.results)} ok, {len(batch.errors)} failed")
        return batch
