"""
Defect event data models.

This module defines the three defect events emitted by the scanner. They
form a closed tagged union: every event carries a ``kind`` tag, a 0-based
channel and an integer sample ``position`` used for marker export.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Union

from audio_defects.utils.number_format import format_decimal


@dataclass(frozen=True)
class SilenceEvent:
    """A run of digital silence (repeated exact zeros)."""

    channel: int
    start_sample_index: int
    detected_at: int  # Frame at which the run reached the threshold

    kind: ClassVar[str] = 'silence'

    @property
    def position(self) -> int:
        return self.start_sample_index

    @property
    def label(self) -> str:
        return 'Silence'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'channel': self.channel,
            'start_sample_index': self.start_sample_index,
            'detected_at': self.detected_at,
        }


@dataclass(frozen=True)
class OvermodulationEvent:
    """A sample at (or within 1/32768 of) full scale."""

    channel: int
    sample_index: int

    kind: ClassVar[str] = 'overmodulation'

    @property
    def position(self) -> int:
        return self.sample_index

    @property
    def label(self) -> str:
        return 'Overmodulation'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'channel': self.channel,
            'sample_index': self.sample_index,
        }


@dataclass(frozen=True)
class HoldEvent:
    """A non-zero value stuck for an anomalously long run."""

    channel: int
    start_sample_index: int
    level_dbfs: float

    kind: ClassVar[str] = 'hold'

    @property
    def position(self) -> int:
        return self.start_sample_index

    @property
    def label(self) -> str:
        return f'Hold at {format_decimal(self.level_dbfs)} dBFS'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'channel': self.channel,
            'start_sample_index': self.start_sample_index,
            'level_dbfs': round(float(self.level_dbfs), 2),
        }


DefectEvent = Union[SilenceEvent, OvermodulationEvent, HoldEvent]

EVENT_KINDS = (SilenceEvent.kind, OvermodulationEvent.kind, HoldEvent.kind)
