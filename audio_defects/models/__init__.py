"""
Defect detection data models.

This module contains dataclasses for the audio format, detection
configuration, defect events and scan results.
"""

from audio_defects.models.audio_format import AudioFormat
from audio_defects.models.detection_config import DetectionConfig
from audio_defects.models.defect_event import (
    DefectEvent,
    HoldEvent,
    OvermodulationEvent,
    SilenceEvent,
)
from audio_defects.models.results import FileAnalysis, PeakRecord, ScanResult

__all__ = [
    'AudioFormat',
    'DetectionConfig',
    'DefectEvent',
    'HoldEvent',
    'OvermodulationEvent',
    'SilenceEvent',
    'FileAnalysis',
    'PeakRecord',
    'ScanResult',
]
