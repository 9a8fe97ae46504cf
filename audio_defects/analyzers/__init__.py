"""
Defect analyzers.

This module contains the per-channel silence, clipping and hold detectors
and the DefectScanner that drives them over a sample stream.
"""

from audio_defects.analyzers.clipping_detector import ClippingDetector
from audio_defects.analyzers.debounce import DebounceWindow
from audio_defects.analyzers.defect_scanner import ChannelState, DefectScanner
from audio_defects.analyzers.hold_detector import HoldDetector
from audio_defects.analyzers.silence_detector import SilenceDetector

__all__ = [
    'ChannelState',
    'ClippingDetector',
    'DebounceWindow',
    'DefectScanner',
    'HoldDetector',
    'SilenceDetector',
]
