"""
PCM sample decoder.

This module decodes little-endian 8/16/24-bit PCM samples into signed
integers occupying the high-order bytes of a 32-bit value, so every bit
depth is compared against the same full-scale reference. It also provides
SampleStream, the lazy frame-interleaved view of a WAV payload.
"""

import logging
from typing import Iterator

import numpy as np

from audio_defects.exceptions import UnexpectedEndError
from audio_defects.models.audio_format import AudioFormat
from audio_defects.readers.byte_reader import ByteReader

logger = logging.getLogger(__name__)


DEFAULT_BLOCK_FRAMES = 4096


def decode_block(data: bytes, bytes_per_sample: int) -> np.ndarray:
    """
    Decodes a run of packed samples.

    Each sample's bytes are copied into the top bytes of a little-endian
    int32 whose low bytes are zero. An 8-bit byte becomes the most
    significant byte as-is (no unsigned re-centering).

    Args:
        data: Packed little-endian samples; trailing bytes that do not form
              a whole sample are ignored
        bytes_per_sample: 1, 2 or 3

    Returns:
        int32 numpy array, one value per whole sample

    Raises:
        ValueError: If bytes_per_sample is not 1, 2 or 3

    Examples:
        >>> decode_block(b'\\x00\\x80\\xff\\x7f', 2).tolist()
        [-2147483648, 2147418112]
    """
    if bytes_per_sample not in (1, 2, 3):
        raise ValueError(f'bytes_per_sample must be 1, 2 or 3, got {bytes_per_sample}')

    sample_count = len(data) // bytes_per_sample
    if sample_count == 0:
        return np.zeros(0, dtype=np.int32)

    raw = np.frombuffer(data, dtype=np.uint8, count=sample_count * bytes_per_sample)
    raw = raw.reshape(sample_count, bytes_per_sample)

    widened = np.zeros((sample_count, 4), dtype=np.uint8)
    widened[:, 4 - bytes_per_sample:] = raw
    return widened.view('<i4').reshape(sample_count).astype(np.int32)


def decode_sample(raw: bytes, bytes_per_sample: int) -> int:
    """
    Decodes one sample to a signed 32-bit-range integer.

    Raises:
        UnexpectedEndError: If fewer than bytes_per_sample bytes are given
    """
    if len(raw) < bytes_per_sample:
        raise UnexpectedEndError(
            f'Truncated sample: needed {bytes_per_sample} bytes, got {len(raw)}',
            expected=bytes_per_sample,
            received=len(raw)
        )
    return int(decode_block(raw[:bytes_per_sample], bytes_per_sample)[0])


class SampleStream:
    """
    Lazy, finite, single-pass sequence of decoded samples.

    Values come out in frame-interleaved channel order (channel 0, 1, ...,
    N-1, channel 0, ...). Iteration stops after the last whole frame of the
    declared payload; trailing partial-frame bytes are not read.

    If the underlying source ends early, every whole sample that did arrive
    is yielded before UnexpectedEndError is raised.

    Attributes:
        audio_format: Format of the payload
        samples_read: Number of samples yielded so far
    """

    def __init__(
        self,
        audio_format: AudioFormat,
        reader: ByteReader,
        block_frames: int = DEFAULT_BLOCK_FRAMES
    ):
        if block_frames <= 0:
            raise ValueError(f'block_frames must be positive, got {block_frames}')

        self.audio_format = audio_format
        self._reader = reader
        self._block_frames = block_frames
        self._started = False
        self.samples_read = 0

    @property
    def total_frames(self) -> int:
        return self.audio_format.sample_count

    def __iter__(self) -> Iterator[int]:
        if self._started:
            raise RuntimeError('SampleStream can only be iterated once')
        self._started = True
        return self._generate()

    def _generate(self) -> Iterator[int]:
        frame_size = self.audio_format.frame_size
        bytes_per_sample = self.audio_format.bytes_per_sample
        frames_left = self.total_frames

        while frames_left > 0:
            frames_wanted = min(frames_left, self._block_frames)
            wanted = frames_wanted * frame_size
            data = self._reader.read_up_to(wanted)

            for value in decode_block(data, bytes_per_sample).tolist():
                self.samples_read += 1
                yield value

            if len(data) < wanted:
                logger.debug(
                    f'Payload truncated after {self.samples_read} samples '
                    f'({self._reader.position} bytes consumed)'
                )
                raise UnexpectedEndError(
                    f'Payload truncated: expected {self.audio_format.payload_length} bytes, '
                    f'stream ended after {self.samples_read * bytes_per_sample}',
                    expected=self.total_frames * frame_size,
                    received=self.samples_read * bytes_per_sample
                )

            frames_left -= frames_wanted
