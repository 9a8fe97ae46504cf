"""
Digital silence detector.

This module provides the SilenceDetector class, which reports runs of
exact zero samples. Unlike an energy threshold, digital silence means the
signal path delivered literal zeros, which points at a dropout rather than
a quiet passage.
"""

from typing import Optional

from audio_defects.analyzers.debounce import DebounceWindow
from audio_defects.models.defect_event import SilenceEvent


class SilenceDetector:
    """
    Detects runs of repeated zero samples on each channel.

    The scanner counts zero duplicates per channel and calls ``check`` with
    the current run length. An event fires exactly when the run reaches the
    threshold, so a long run produces a single event.

    Attributes:
        threshold_samples: Zero duplicates required to report silence
        debounce: Per-channel emission cursor
    """

    def __init__(self, channels: int, threshold_samples: int, debounce_frames: int):
        """
        Initialize silence detector.

        Args:
            channels: Number of channels in the stream
            threshold_samples: Run length that triggers an event
            debounce_frames: Minimum frames between two silence events on
                             the same channel

        Raises:
            ValueError: If threshold_samples is not positive
        """
        if threshold_samples < 1:
            raise ValueError(
                f"threshold_samples must be positive, got {threshold_samples}"
            )

        self.threshold_samples = threshold_samples
        self.debounce = DebounceWindow(channels, debounce_frames)

    def check(self, channel: int, frame_index: int, zero_run: int) -> Optional[SilenceEvent]:
        """
        Evaluates the zero run of a channel after a zero duplicate.

        The reported start is ``frame_index - threshold_samples``. A file
        that opens with zeros counts its first sample as a duplicate of the
        implicit initial zero, so its silence starts at -1.

        Args:
            channel: 0-based channel
            frame_index: Current frame
            zero_run: Consecutive zero duplicates on this channel

        Returns:
            SilenceEvent if the run just reached the threshold outside the
            debounce window, otherwise None.
        """
        if zero_run != self.threshold_samples:
            return None

        if not self.debounce.is_clear(channel, frame_index):
            return None

        self.debounce.mark(channel, frame_index)
        return SilenceEvent(
            channel=channel,
            start_sample_index=frame_index - self.threshold_samples,
            detected_at=frame_index
        )
