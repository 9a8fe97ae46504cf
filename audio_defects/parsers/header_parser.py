"""
RIFF/WAVE header parser.

This module provides the WavHeaderParser class, which walks the RIFF chunk
sequence of a WAV file, extracts the PCM format parameters and leaves the
reader positioned at the first byte of the audio payload.
"""

import logging
from typing import BinaryIO, Optional, Tuple

from audio_defects.exceptions import (
    BadContainerError,
    UnexpectedEndError,
    UnsupportedCodecError,
)
from audio_defects.models.audio_format import AudioFormat
from audio_defects.readers.byte_reader import ByteReader
from audio_defects.utils.structured_logger import log_header_parsed

logger = logging.getLogger(__name__)


RIFF_TAG = b'RIFF'
WAVE_TAG = b'WAVE'
FMT_TAG = b'fmt '
DATA_TAG = b'data'

PCM_FORMAT_CODE = 1
FMT_BASE_SIZE = 16
SUPPORTED_BITS_PER_SAMPLE = (8, 16, 24)


class WavHeaderParser:
    """
    Parses the header of a PCM RIFF/WAVE container.

    Unknown chunks ('LIST', 'iXML', 'PAD ', 'bext', ...) are skipped by
    their declared length wherever they appear. When several 'fmt ' chunks
    are present the last one read before 'data' wins.

    Examples:
        >>> with open('take1.wav', 'rb') as f:
        ...     reader = ByteReader(f)
        ...     audio_format = WavHeaderParser().parse(reader)
        >>> audio_format.sample_rate
        48000
    """

    def parse(self, reader: ByteReader, source: str = 'unknown') -> AudioFormat:
        """
        Parses the header and positions the reader at the payload.

        Args:
            reader: Reader positioned at byte 0 of the container
            source: Name used in log entries

        Returns:
            AudioFormat describing the payload

        Raises:
            BadContainerError: Missing RIFF/WAVE marker, 'data' before any
                'fmt ', or zero channels / sample rate
            UnsupportedCodecError: Non-PCM format code or bit depth other
                than 8, 16 or 24
            UnexpectedEndError: Stream ended before the 'data' chunk
        """
        self._expect_tag(reader, RIFF_TAG)
        reader.skip(4)  # Declared RIFF size, not validated
        self._expect_tag(reader, WAVE_TAG)

        fmt_fields: Optional[Tuple[int, int, int]] = None

        while True:
            try:
                chunk_id = reader.read_tag()
            except UnexpectedEndError as e:
                raise UnexpectedEndError(
                    "Stream ended before a 'data' chunk was found",
                    expected=e.expected,
                    received=e.received
                ) from e

            if chunk_id == FMT_TAG:
                fmt_fields = self._read_fmt_chunk(reader)
                continue

            if chunk_id == DATA_TAG:
                payload_length = reader.read_u32()
                break

            chunk_size = reader.read_u32()
            logger.debug(
                f"Skipping chunk {chunk_id!r} ({chunk_size} bytes) in {source}"
            )
            reader.skip(chunk_size)

        if fmt_fields is None:
            raise BadContainerError(
                "'data' chunk found before any 'fmt ' chunk",
                format_details={'offset': reader.position}
            )

        channels, sample_rate, bits_per_sample = fmt_fields
        self._validate_fmt_fields(channels, sample_rate, bits_per_sample)

        audio_format = AudioFormat(
            channels=channels,
            sample_rate=sample_rate,
            bytes_per_sample=bits_per_sample // 8,
            payload_length=payload_length
        )

        log_header_parsed(source, audio_format, payload_offset=reader.position)
        return audio_format

    def _expect_tag(self, reader: ByteReader, expected: bytes) -> None:
        tag = reader.read_tag()
        if tag != expected:
            raise BadContainerError(
                f'Bad header marker: expected {expected.decode("ascii")!r}, got {tag!r}',
                format_details={'expected': expected, 'actual': tag}
            )

    def _read_fmt_chunk(self, reader: ByteReader) -> Tuple[int, int, int]:
        """
        Reads a 'fmt ' chunk body.

        Layout after the size field: format code (2), channels (2), sample
        rate (4), byte rate (4), block align (2), bits per sample (2), then
        optional extension bytes.
        """
        chunk_size = reader.read_u32()

        format_code = reader.read_u16()
        if format_code != PCM_FORMAT_CODE:
            raise UnsupportedCodecError(
                f'Unsupported audio format code: {format_code} (only PCM is supported)',
                format_details={'format_code': format_code}
            )

        channels = reader.read_u16()
        sample_rate = reader.read_u32()
        reader.read_u32()  # byte rate
        reader.read_u16()  # block align
        bits_per_sample = reader.read_u16()

        if chunk_size > FMT_BASE_SIZE:
            reader.skip(chunk_size - FMT_BASE_SIZE)

        return channels, sample_rate, bits_per_sample

    def _validate_fmt_fields(self, channels: int, sample_rate: int, bits_per_sample: int) -> None:
        """Checks the format that survived the chunk walk."""
        if bits_per_sample not in SUPPORTED_BITS_PER_SAMPLE:
            raise UnsupportedCodecError(
                f'Unsupported bit depth: {bits_per_sample} '
                f'(supported: {list(SUPPORTED_BITS_PER_SAMPLE)})',
                format_details={'bits_per_sample': bits_per_sample}
            )

        if channels < 1:
            raise BadContainerError(
                'Format chunk declares zero channels',
                format_details={'channels': channels}
            )

        if sample_rate == 0:
            raise BadContainerError(
                'Format chunk declares a zero sample rate',
                format_details={'sample_rate': sample_rate}
            )


def parse_header(stream: BinaryIO, source: str = 'unknown') -> Tuple[AudioFormat, ByteReader]:
    """
    Convenience wrapper: parses the header of a binary stream.

    Returns:
        Tuple of the parsed AudioFormat and the reader positioned at the
        start of the payload, ready to build a SampleStream.
    """
    reader = ByteReader(stream)
    audio_format = WavHeaderParser().parse(reader, source=source)
    return audio_format, reader
