"""
Digital Audio Error Detection package.

This package parses PCM RIFF/WAVE files and scans their samples in a
single streaming pass for recording defects: digital silence runs,
overmodulation (clipping) and hold (stuck) values, while tracking the
global peak level.
"""

__version__ = '1.0.0'

# Import main classes for convenient access
from audio_defects.models.audio_format import AudioFormat
from audio_defects.models.detection_config import DetectionConfig
from audio_defects.models.defect_event import (
    DefectEvent,
    HoldEvent,
    OvermodulationEvent,
    SilenceEvent,
)
from audio_defects.models.results import FileAnalysis, PeakRecord, ScanResult
from audio_defects.readers.byte_reader import ByteReader
from audio_defects.parsers.header_parser import WavHeaderParser, parse_header
from audio_defects.decoders.sample_decoder import SampleStream, decode_sample
from audio_defects.analyzers.defect_scanner import DefectScanner
from audio_defects.utils.graceful_degradation import analyze_stream, analyze_with_fallback
from audio_defects.reporting.result_writer import ResultWriter
from audio_defects.notifiers.metrics_emitter import DefectMetricsEmitter

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
    'ByteReader',
    'WavHeaderParser',
    'parse_header',
    'SampleStream',
    'decode_sample',
    'DefectScanner',
    'analyze_stream',
    'analyze_with_fallback',
    'ResultWriter',
    'DefectMetricsEmitter',
]
