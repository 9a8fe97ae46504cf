"""
Per-channel debounce cursor shared by the defect detectors.
"""

from typing import List


class DebounceWindow:
    """
    Tracks the last emission frame of one detector on every channel.

    An emission at frame ``i`` is allowed only when ``i > last + window_frames``.
    Cursors start at ``-window_frames``, so nothing is reported at frame 0.

    Attributes:
        window_frames: Frames that must elapse between two emissions
    """

    def __init__(self, channels: int, window_frames: int):
        if channels < 1:
            raise ValueError(f'channels must be at least 1, got {channels}')
        if window_frames < 0:
            raise ValueError(f'window_frames must be non-negative, got {window_frames}')

        self.window_frames = window_frames
        self._last_emitted: List[int] = [-window_frames] * channels

    def is_clear(self, channel: int, frame_index: int) -> bool:
        return frame_index > self._last_emitted[channel] + self.window_frames

    def mark(self, channel: int, frame_index: int) -> None:
        self._last_emitted[channel] = frame_index
