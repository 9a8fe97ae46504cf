"""
Scan result data models.

This module defines the peak record, the result of one defect scan and the
per-file analysis outcome handed to reporting collaborators.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from audio_defects.models.audio_format import AudioFormat
from audio_defects.models.defect_event import DefectEvent
from audio_defects.utils.levels import amplitude_to_dbfs


@dataclass
class PeakRecord:
    """
    Running peak amplitude of a scan.

    Starts as "no peak". The location is the frame and channel at which the
    running maximum last strictly increased. ``level_dbfs`` is only set by
    ``finalize()`` and stays None when no non-zero sample was read.
    """

    max_abs: int = 0
    sample_index: Optional[int] = None
    channel: Optional[int] = None
    level_dbfs: Optional[float] = None
    finalized: bool = False

    def update(self, amplitude: int, sample_index: int, channel: int) -> bool:
        """
        Folds one sample into the running maximum.

        Returns:
            True if the maximum increased.
        """
        magnitude = abs(amplitude)
        if magnitude > self.max_abs:
            self.max_abs = magnitude
            self.sample_index = sample_index
            self.channel = channel
            return True
        return False

    def finalize(self) -> None:
        if self.max_abs > 0:
            self.level_dbfs = amplitude_to_dbfs(self.max_abs)
        self.finalized = True

    @property
    def has_peak(self) -> bool:
        return self.sample_index is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'level_dbfs': None if self.level_dbfs is None else round(self.level_dbfs, 2),
            'sample_index': self.sample_index,
            'channel': self.channel,
        }


@dataclass
class ScanResult:
    """Events and peak produced by one defect scan."""

    audio_format: AudioFormat
    events: List[DefectEvent] = field(default_factory=list)
    peak: PeakRecord = field(default_factory=PeakRecord)
    frames_scanned: int = 0
    truncated: bool = False

    def events_of_kind(self, kind: str) -> List[DefectEvent]:
        return [event for event in self.events if event.kind == kind]

    def count_by_kind(self) -> Dict[str, int]:
        counts = {'silence': 0, 'overmodulation': 0, 'hold': 0}
        for event in self.events:
            counts[event.kind] += 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            'format': self.audio_format.to_dict(),
            'peak': self.peak.to_dict(),
            'frames_scanned': self.frames_scanned,
            'truncated': self.truncated,
            'events': [event.to_dict() for event in self.events],
        }


@dataclass
class FileAnalysis:
    """
    Outcome of analysing one file.

    ``error_code`` is None on success. A truncated file has both an error
    code and a partial ``scan``; a header failure has no ``scan`` at all.
    """

    path: str
    file_size: int = 0
    audio_format: Optional[AudioFormat] = None
    scan: Optional[ScanResult] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error_code is None

    @property
    def is_partial(self) -> bool:
        return self.error_code is not None and self.scan is not None

    @property
    def has_results(self) -> bool:
        return self.scan is not None
