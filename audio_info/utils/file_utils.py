"""File utility functions."""

from pathlib import Path
from typing import Iterable, Optional


AUDIO_EXTENSIONS = ('mp3', 'flac', 'ogg', 'wav', 'aac', 'm4a', 'wma')


def get_file_size(file_path: Path) -> int:
    """Get file size in bytes."""
    return file_path.stat().st_size


def get_file_extension(file_path: Path) -> str:
    """Get file extension without leading dot, case preserved."""
    return Path(file_path).suffix[1:]


def is_audio_file(file_path: Path, extensions: Optional[Iterable[str]] = None) -> bool:
    """Check if file has a supported audio extension (case-insensitive)."""
    extension = get_file_extension(file_path).lower()
    if not extension:
        return False
    allowed = AUDIO_EXTENSIONS if extensions is None else extensions
    return extension in [ext.lower() for ext in allowed]
