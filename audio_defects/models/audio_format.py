"""
Audio format data model.

This module defines the AudioFormat dataclass produced by the WAV header
parser and consumed by the sample stream and the defect scanner.
"""

from dataclasses import dataclass
from typing import ClassVar, List, Tuple


@dataclass(frozen=True)
class AudioFormat:
    """PCM format parameters of a parsed WAV file."""

    channels: int          # Channel count (>= 1)
    sample_rate: int       # Hz
    bytes_per_sample: int  # 1, 2 or 3 (8/16/24-bit PCM)
    payload_length: int    # Declared 'data' chunk size in bytes

    SUPPORTED_BYTES_PER_SAMPLE: ClassVar[Tuple[int, ...]] = (1, 2, 3)

    @property
    def bits_per_sample(self) -> int:
        return self.bytes_per_sample * 8

    @property
    def frame_size(self) -> int:
        """Bytes occupied by one frame (one sample for every channel)."""
        return self.bytes_per_sample * self.channels

    @property
    def sample_count(self) -> int:
        """Number of whole frames contained in the declared payload."""
        if self.frame_size <= 0:
            return 0
        return self.payload_length // self.frame_size

    @property
    def duration_s(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return self.sample_count / self.sample_rate

    def position_seconds(self, frame_index: int) -> float:
        """Converts a frame index to a time offset in seconds."""
        return frame_index / self.sample_rate

    def is_valid(self) -> bool:
        """
        Checks if format is supported.

        Returns:
            True if format is valid and supported, False otherwise.
        """
        return not self.get_validation_errors()

    def get_validation_errors(self) -> List[str]:
        """
        Gets detailed validation error messages.

        Returns:
            List of error messages. Empty if format is valid.
        """
        errors = []

        if self.channels < 1:
            errors.append(f'Channel count must be at least 1, got {self.channels}')

        if self.sample_rate <= 0:
            errors.append(f'Sample rate must be positive, got {self.sample_rate} Hz')

        if self.bytes_per_sample not in self.SUPPORTED_BYTES_PER_SAMPLE:
            errors.append(
                f'Bit depth {self.bits_per_sample} not supported. '
                f'Supported depths: {[b * 8 for b in self.SUPPORTED_BYTES_PER_SAMPLE]}'
            )

        if self.payload_length < 0:
            errors.append(f'Payload length must be non-negative, got {self.payload_length}')

        return errors

    def to_dict(self) -> dict:
        return {
            'channels': self.channels,
            'sample_rate': self.sample_rate,
            'bits_per_sample': self.bits_per_sample,
            'payload_length': self.payload_length,
            'sample_count': self.sample_count,
            'duration_s': self.duration_s,
        }
