"""
Overmodulation (clipping) detector.

This module provides the ClippingDetector class for detecting samples that
reach the limits of the representable range.
"""

from typing import Optional

from audio_defects.analyzers.debounce import DebounceWindow
from audio_defects.models.defect_event import OvermodulationEvent
from audio_defects.utils.levels import is_clipped


class ClippingDetector:
    """
    Detects overmodulated samples.

    A sample is clipped when it equals the most negative 32-bit value or is
    at least 0x7FFF0000 (the top 1/32768 of positive full scale). The
    scanner only consults this detector when a channel's value changes, so
    a clipped value held over several samples is reported once.

    Algorithm:
    1. Check the new sample against both clipping limits
    2. Emit an event if the channel is outside its debounce window
    3. Record the emission frame for the channel

    Attributes:
        debounce: Per-channel emission cursor
    """

    def __init__(self, channels: int, debounce_frames: int):
        """
        Initializes the ClippingDetector.

        Args:
            channels: Number of channels in the stream
            debounce_frames: Minimum frames between two overmodulation
                             events on the same channel
        """
        self.debounce = DebounceWindow(channels, debounce_frames)

    @staticmethod
    def is_clipped(amplitude: int) -> bool:
        return is_clipped(amplitude)

    def check(self, channel: int, frame_index: int) -> Optional[OvermodulationEvent]:
        """
        Evaluates a changed sample value.

        Callers must first confirm the value is clipped with ``is_clipped``;
        the result of that test also decides whether the hold detector runs.

        Returns:
            OvermodulationEvent, or None when debounced.
        """
        if not self.debounce.is_clear(channel, frame_index):
            return None

        self.debounce.mark(channel, frame_index)
        return OvermodulationEvent(channel=channel, sample_index=frame_index)
