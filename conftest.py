"""Shared fixtures for Audio Info tests."""

import struct
import wave
from pathlib import Path

import pytest

from audio_info import Config, setup_logger


def write_wav(path: Path, seconds: int = 2, rate: int = 8000, channels: int = 1) -> Path:
    """Write a silent 16-bit PCM WAV file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), 'wb') as wav:
        wav.setnchannels(channels)
        wav.setsampwidth(2)
        wav.setframerate(rate)
        wav.writeframes(b'\x00\x00' * rate * seconds * channels)
    return path


def write_unknown_codec_wav(path: Path) -> Path:
    """Write a WAV whose format tag names no codec FFmpeg can decode."""
    data = b"\x00" * 16000
    fmt = struct.pack("<HHIIHH", 0x7777, 1, 8000, 16000, 2, 16)
    body = (b"WAVE" + b"fmt " + struct.pack("<I", len(fmt)) + fmt
            + b"data" + struct.pack("<I", len(data)) + data)
    path.write_bytes(b"RIFF" + struct.pack("<I", len(body)) + body)
    return path


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def logger():
    return setup_logger(level="DEBUG", console=False)


@pytest.fixture
def make_wav(tmp_path):
    def _make(name: str = "tone.wav", **kwargs) -> Path:
        return write_wav(tmp_path / name, **kwargs)
    return _make


@pytest.fixture
def make_unknown_codec_wav(tmp_path):
    def _make(name: str = "odd.wav") -> Path:
        return write_unknown_codec_wav(tmp_path / name)
    return _make
