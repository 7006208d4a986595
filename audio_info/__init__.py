"""Audio Info - show technical metadata of audio files."""

__version__ = "0.1.0"
__author__ = "Audio Info Team"

from .utils.config import Config
from .utils.logger import setup_logger

__all__ = ['Config', 'setup_logger']
