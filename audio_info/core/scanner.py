"""File system scanner for audio files."""

import logging
import os
from pathlib import Path
from typing import Iterable, List, TextIO

from ..exceptions import DiscoveryError
from ..utils.file_utils import is_audio_file


class AudioScanner:
    """Scanner for discovering audio files from paths, directories or stdin."""

    def __init__(self, config, logger=None):
        """
        Initialize audio scanner.

        Args:
            config: Configuration object
            logger: Logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.extensions = config.get_audio_extensions()
        self.ignore_patterns = config.get('scan.ignore_patterns') or []
        self.follow_symlinks = bool(config.get('scan.follow_symlinks', False))

    def collect_audio_files(self, paths: Iterable[Path], recursive: bool = False) -> List[Path]:
        """
        Expand explicit path arguments into a list of audio files.

        Non-audio files are dropped silently. Discovery stops at the first
        directory given without recursive, or the first path that does
        not exist.

        Args:
            paths: File or directory paths, in argument order
            recursive: Allow directories to be walked

        Returns:
            List of audio file paths, in argument order

        Raises:
            DiscoveryError: If a path is missing or a directory is not allowed
        """
        files = []

        for path in paths:
            path = Path(path)
            if path.is_file():
                if self.is_audio_file(path):
                    files.append(path)
            elif path.is_dir():
                if not recursive:
                    raise DiscoveryError(
                        f"{path} is a directory (use --recursive to process directories)",
                        details={'path': str(path)}
                    )
                files.extend(self.scan_directory(path))
            else:
                raise DiscoveryError(f"File not found: {path}", details={'path': str(path)})

        self.logger.debug(f"Collected {len(files)} audio files from arguments")
        return files

    def collect_from_stdin(self, stream: TextIO) -> List[Path]:
        """
        Read newline-delimited paths and keep the audio files among them.

        Missing paths are warned about and skipped. Anything else that is
        not an audio file is skipped silently.

        Args:
            stream: Text stream to read paths from

        Returns:
            List of audio file paths, in line order

        Raises:
            DiscoveryError: If the stream itself cannot be read
        """
        files = []

        try:
            for line in stream:
                entry = line.strip()
                if not entry:
                    self.logger.warning("File not found: ")
                    continue

                path = Path(entry)
                if path.is_file() and self.is_audio_file(path):
                    files.append(path)
                elif not path.exists():
                    self.logger.warning(f"File not found: {path}")
        except (OSError, UnicodeDecodeError) as e:
            raise DiscoveryError(f"Failed to read file list from stdin: {e}") from e

        self.logger.debug(f"Collected {len(files)} audio files from stdin")
        return files

    def scan_directory(self, directory: Path) -> List[Path]:
        """
        Walk a directory tree for audio files.

        Args:
            directory: Directory path to scan

        Returns:
            List of audio file paths, in walk order
        """
        audio_files = []

        self.logger.info(f"Scanning directory: {directory}")

        for root, dirs, names in os.walk(directory, followlinks=self.follow_symlinks, onerror=self._on_walk_error):
            for name in names:
                file_path = Path(root) / name

                if file_path.is_symlink() and not self.follow_symlinks:
                    continue

                if not file_path.is_file():
                    continue

                if self._should_ignore(file_path):
                    continue

                if self.is_audio_file(file_path):
                    audio_files.append(file_path)

        self.logger.info(f"Found {len(audio_files)} audio files in {directory}")
        return audio_files

    def is_audio_file(self, file_path: Path) -> bool:
        """Check a path against the configured audio extensions."""
        return is_audio_file(file_path, self.extensions)

    def _should_ignore(self, file_path: Path) -> bool:
        """Check if file should be ignored based on patterns."""
        file_str = str(file_path)

        for pattern in self.ignore_patterns:
            if pattern in file_str:
                return True

        return False

    def _on_walk_error(self, error: OSError) -> None:
        # Unreadable subdirectories are skipped, the walk continues
        self.logger.warning(f"Cannot read {error.filename}: {error.strerror}")
