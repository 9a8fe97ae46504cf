"""
Hold (stuck value) detector.

This module provides the HoldDetector class for detecting non-zero sample
values that repeat unchanged for too long, which suggests a frozen signal
path (a converter or interface delivering the same word again and again).
"""

from typing import Optional

from audio_defects.analyzers.debounce import DebounceWindow
from audio_defects.models.defect_event import HoldEvent
from audio_defects.utils.levels import amplitude_to_dbfs


class HoldDetector:
    """
    Detects stuck sample values above a minimum level.

    The scanner passes the current duplicate run length of the channel for
    every sample that contributed to neither silence nor clipping. When the
    run reaches the threshold the level of the stuck value is measured;
    quiet values are not worth reporting, but they still consume the
    debounce window so they are not re-tested on every later sample.

    Attributes:
        threshold_samples: Duplicate run length that triggers a check
        level_threshold_dbfs: Stuck values must be louder than this
        debounce: Per-channel emission cursor
    """

    def __init__(
        self,
        channels: int,
        threshold_samples: int,
        level_threshold_dbfs: float,
        debounce_frames: int
    ):
        if threshold_samples < 1:
            raise ValueError(
                f"threshold_samples must be positive, got {threshold_samples}"
            )

        self.threshold_samples = threshold_samples
        self.level_threshold_dbfs = level_threshold_dbfs
        self.debounce = DebounceWindow(channels, debounce_frames)

    def check(
        self,
        channel: int,
        frame_index: int,
        amplitude: int,
        same_value_run: int
    ) -> Optional[HoldEvent]:
        """
        Evaluates the duplicate run of a channel.

        Args:
            channel: 0-based channel
            frame_index: Current frame
            amplitude: Current (repeated) sample value
            same_value_run: Consecutive duplicates on this channel

        Returns:
            HoldEvent starting at ``frame_index - threshold_samples + 1`` if
            the run just reached the threshold outside the debounce window
            and the level is above the floor, otherwise None.
        """
        if same_value_run != self.threshold_samples:
            return None

        if not self.debounce.is_clear(channel, frame_index):
            return None

        # Sub-threshold levels still restart the window
        self.debounce.mark(channel, frame_index)

        level = amplitude_to_dbfs(amplitude)
        if level <= self.level_threshold_dbfs:
            return None

        return HoldEvent(
            channel=channel,
            start_sample_index=frame_index - self.threshold_samples + 1,
            level_dbfs=level
        )
