"""Audio metadata extraction."""

import logging
import re
from dataclasses import dataclass
from fractions import Fraction
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

import av

from ..exceptions import ExtractionError
from ..utils.file_utils import get_file_extension, get_file_size


# Extension -> FFmpeg demuxer name
FORMAT_HINTS = {
    'mp3': 'mp3',
    'flac': 'flac',
    'ogg': 'ogg',
    'wav': 'wav',
    'aac': 'aac',
    'm4a': 'mp4',
    'wma': 'asf',
}

# Raw tag keys (lower-cased) -> standardized tag identifiers
STANDARD_TAG_KEYS = {
    'title': 'TrackTitle',
    'artist': 'Artist',
    'album': 'Album',
    'album_artist': 'AlbumArtist',
    'albumartist': 'AlbumArtist',
    'track': 'TrackNumber',
    'tracknumber': 'TrackNumber',
    'tracktotal': 'TrackTotal',
    'totaltracks': 'TrackTotal',
    'disc': 'DiscNumber',
    'discnumber': 'DiscNumber',
    'disctotal': 'DiscTotal',
    'totaldiscs': 'DiscTotal',
    'date': 'Date',
    'year': 'Date',
    'genre': 'Genre',
    'comment': 'Comment',
    'description': 'Description',
    'composer': 'Composer',
    'conductor': 'Conductor',
    'lyricist': 'Lyricist',
    'performer': 'Performer',
    'copyright': 'Copyright',
    'encoder': 'Encoder',
    'encoded_by': 'EncodedBy',
    'language': 'Language',
    'lyrics': 'Lyrics',
    'publisher': 'Label',
    'label': 'Label',
    'organization': 'Label',
    'grouping': 'ContentGroup',
    'compilation': 'Compilation',
    'bpm': 'Bpm',
    'tbpm': 'Bpm',
    'mood': 'Mood',
    'isrc': 'IdentIsrc',
    'replaygain_track_gain': 'ReplayGainTrackGain',
    'replaygain_track_peak': 'ReplayGainTrackPeak',
    'replaygain_album_gain': 'ReplayGainAlbumGain',
    'replaygain_album_peak': 'ReplayGainAlbumPeak',
    'musicbrainz_trackid': 'MusicBrainzTrackId',
    'musicbrainz_albumid': 'MusicBrainzAlbumId',
    'musicbrainz_artistid': 'MusicBrainzArtistId',
}

_WORD_PATTERN = re.compile(r'[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+')


@dataclass(frozen=True)
class AudioInfo:
    """Technical metadata of one inspected audio file."""

    file_path: str
    file_size_bytes: int
    sample_rate: Optional[int] = None
    channels: Optional[int] = None
    duration_seconds: Optional[int] = None
    avg_bitrate_kbps: Optional[int] = None
    codec: Optional[str] = None
    tags: Tuple[Tuple[str, str], ...] = ()


def to_snake_case(text: str) -> str:
    """Convert an identifier like 'TrackTitle' or 'TRACK-TITLE' to 'track_title'."""
    words = _WORD_PATTERN.findall(text)
    if not words:
        return text.lower()
    return '_'.join(word.lower() for word in words)


def normalize_key(key: str) -> str:
    """Map a raw tag key to its standardized name when known, then snake-case it."""
    return to_snake_case(STANDARD_TAG_KEYS.get(key.lower(), key))


def calc_seconds(time_base: Optional[Fraction], ticks: Optional[int]) -> Optional[int]:
    """Apply a time base to a tick count, truncated to whole seconds."""
    if time_base is None or ticks is None:
        return None
    return int(ticks * time_base)


def calc_bitrate_kbps(file_size_bytes: int, duration_seconds: Optional[int]) -> Optional[int]:
    """Average bitrate over the whole file, or None without a usable duration."""
    if not duration_seconds:
        return None
    return file_size_bytes * 8 // (duration_seconds * 1000)


class AudioMetadataExtractor:
    """Extract metadata from audio files."""

    def __init__(self, config, logger=None):
        """Initialize audio metadata extractor."""
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    def process_file(self, file_path: Path) -> AudioInfo:
        """
        Extract metadata from audio file.

        Args:
            file_path: Path to audio file

        Returns:
            AudioInfo for the file

        Raises:
            ExtractionError: If the file cannot be opened or probed, or has
                no audio track
        """
        path = Path(file_path)

        try:
            file_size = get_file_size(path)
            with open(path, 'rb') as stream:
                container = self._probe(stream, self._build_hint(path))
                try:
                    return self._build_info(path, file_size, container)
                finally:
                    container.close()
        except (OSError, av.error.FFmpegError) as e:
            raise ExtractionError(str(e), details={'path': str(path)}) from e

    def _build_hint(self, path: Path) -> Optional[str]:
        extension = get_file_extension(path)
        return FORMAT_HINTS.get(extension.lower()) if extension else None

    def _probe(self, stream: BinaryIO, hint: Optional[str]):
        """Open a container, trying the hinted demuxer before content sniffing."""
        if hint is not None:
            try:
                return av.open(stream, mode='r', format=hint, metadata_errors='replace')
            except av.error.FFmpegError as e:
                self.logger.debug(f"Demuxer '{hint}' rejected {getattr(stream, 'name', stream)}: {e}")
                stream.seek(0)

        return av.open(stream, mode='r', metadata_errors='replace')

    def _build_info(self, path: Path, file_size: int, container) -> AudioInfo:
        stream = next(iter(container.streams.audio), None)
        if stream is None:
            raise ExtractionError("No supported audio track", details={'path': str(path)})

        codec_context = stream.codec_context
        if codec_context is None:
            # No decoder for this codec
            raise ExtractionError("No supported audio track", details={'path': str(path)})

        layout = getattr(codec_context, 'layout', None)
        channels = len(layout.channels) if layout is not None else 0
        if not channels:
            # Unspecified layouts only carry a count
            channels = getattr(codec_context, 'channels', 0) or 0

        duration = calc_seconds(stream.time_base, stream.duration)
        if duration is None:
            duration = calc_seconds(Fraction(1, av.time_base), container.duration)

        metadata = dict(container.metadata or {}) or dict(stream.metadata or {})
        tags = tuple((normalize_key(key), str(value)) for key, value in metadata.items())

        self.logger.debug(f"Probed {path}: codec={codec_context.name}, duration={duration}, tags={len(tags)}")

        return AudioInfo(
            file_path=str(path),
            file_size_bytes=file_size,
            sample_rate=codec_context.sample_rate or None,
            channels=channels or None,
            duration_seconds=duration,
            avg_bitrate_kbps=calc_bitrate_kbps(file_size, duration),
            codec=codec_context.name,
            tags=tags,
        )
