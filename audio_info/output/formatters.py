"""Text, JSON and CSV output for extracted audio metadata."""

import csv
import io
import json
from typing import Any, Dict, List, Optional, Sequence

from ..metadata.audio_metadata import AudioInfo


CSV_FIELDS = [
    'file_path',
    'codec',
    'sample_rate',
    'channels',
    'duration_seconds',
    'avg_bitrate_kbps',
    'file_size_bytes',
]

OUTPUT_FORMATS = ('text', 'json', 'csv')


def _format_duration(duration: Optional[int]) -> str:
    return f"{duration:.2f}" if duration is not None else ''


def format_text(infos: Sequence[AudioInfo], basic_only: bool = False) -> str:
    """
    Render one block of 'key: value' lines per file, separated by blank lines.

    Args:
        infos: Extracted metadata, in output order
        basic_only: Omit tag lines

    Returns:
        Rendered text without a trailing newline
    """
    blocks = []

    for info in infos:
        lines = [f"file: {info.file_path}"]

        if info.codec is not None:
            lines.append(f"codec: {info.codec}")
        if info.sample_rate is not None:
            lines.append(f"sample_rate: {info.sample_rate}")
        if info.channels is not None:
            lines.append(f"channels: {info.channels}")

        if info.duration_seconds is not None:
            lines.append(f"duration: {_format_duration(info.duration_seconds)}s")
        else:
            lines.append("duration: unknown")

        if info.avg_bitrate_kbps is not None:
            lines.append(f"avg_bitrate_kbps: {info.avg_bitrate_kbps}")

        lines.append(f"file_size_bytes: {info.file_size_bytes}")

        if not basic_only:
            lines.extend(f"{key}: {value}" for key, value in info.tags)

        blocks.append('\n'.join(lines))

    return '\n\n'.join(blocks)


def to_json_dict(info: AudioInfo) -> Dict[str, Any]:
    """Convert one result to the JSON object layout."""
    return {
        'file_path': info.file_path,
        'codec': info.codec,
        'sample_rate': info.sample_rate,
        'channels': info.channels,
        'duration_seconds': info.duration_seconds,
        'avg_bitrate_kbps': info.avg_bitrate_kbps,
        'file_size_bytes': info.file_size_bytes,
        # Later tags overwrite earlier ones with the same key
        'tags': dict(info.tags),
    }


def format_json(infos: Sequence[AudioInfo]) -> str:
    """Render a pretty-printed JSON array, one object per file."""
    return json.dumps([to_json_dict(info) for info in infos], indent=2, ensure_ascii=False)


def format_csv(infos: Sequence[AudioInfo]) -> str:
    """Render a header row plus one row per file. Tags are not included."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(CSV_FIELDS)

    for info in infos:
        writer.writerow([
            info.file_path,
            info.codec or '',
            '' if info.sample_rate is None else info.sample_rate,
            '' if info.channels is None else info.channels,
            _format_duration(info.duration_seconds),
            '' if info.avg_bitrate_kbps is None else info.avg_bitrate_kbps,
            info.file_size_bytes,
        ])

    return buffer.getvalue().rstrip('\n')


def render(infos: List[AudioInfo], output_format: str, basic_only: bool = False) -> str:
    """Render results in the named output format."""
    if output_format == 'json':
        return format_json(infos)
    if output_format == 'csv':
        return format_csv(infos)
    if output_format == 'text':
        return format_text(infos, basic_only)
    raise ValueError(f"Unknown output format: {output_format}")
