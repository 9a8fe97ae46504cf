"""
Graceful degradation utilities for per-file analysis.

This module wraps header parsing and the defect scan with error handling
so one malformed or truncated file never interrupts a batch run. Failures
become a typed FileAnalysis result; partial findings of a truncated file
are kept.
"""

import logging
import os
from typing import BinaryIO, Optional

from audio_defects.analyzers.defect_scanner import DefectScanner
from audio_defects.decoders.sample_decoder import SampleStream
from audio_defects.exceptions import UnexpectedEndError, WavFormatError
from audio_defects.models.detection_config import DetectionConfig
from audio_defects.models.results import FileAnalysis, ScanResult
from audio_defects.parsers.header_parser import parse_header
from audio_defects.utils.structured_logger import log_scan_failure

logger = logging.getLogger(__name__)


IO_ERROR = 'IO_ERROR'

READ_BUFFER_SIZE = 1024 * 1024


def analyze_stream(
    stream: BinaryIO,
    config: Optional[DetectionConfig] = None,
    source: str = 'unknown'
) -> ScanResult:
    """
    Parses and scans one WAV byte stream.

    Args:
        stream: Binary stream positioned at byte 0 of the container
        config: Detection thresholds. If None, uses defaults.
        source: Name used in log entries

    Returns:
        Complete ScanResult

    Raises:
        BadContainerError, UnsupportedCodecError: On header failures
        UnexpectedEndError: On truncation; ``partial_result`` is set when
            the header was complete and the payload was cut short
    """
    audio_format, reader = parse_header(stream, source=source)
    scanner = DefectScanner(audio_format, config, source=source)
    return scanner.scan(SampleStream(audio_format, reader))


def analyze_with_fallback(
    path: str,
    config: Optional[DetectionConfig] = None
) -> FileAnalysis:
    """
    Analyzes a WAV file, converting failures into a FileAnalysis.

    The function handles different types of errors:
    - WavFormatError subclasses: header failures keep no results,
      payload truncation keeps the partial scan
    - OSError: missing or unreadable file

    Args:
        path: Path of the WAV file
        config: Detection thresholds. If None, uses defaults.

    Returns:
        FileAnalysis whose ``error_code`` is None on success.

    Notes:
        - This function never raises for data or I/O problems
        - Configuration errors still propagate, they are caller bugs
    """
    source = os.path.basename(path)
    analysis = FileAnalysis(path=path)

    try:
        analysis.file_size = os.path.getsize(path)
        with open(path, 'rb', buffering=READ_BUFFER_SIZE) as stream:
            scan = analyze_stream(stream, config, source=source)
        analysis.scan = scan
        analysis.audio_format = scan.audio_format

    except UnexpectedEndError as e:
        analysis.error_code = e.error_code
        analysis.error_message = str(e)
        if e.partial_result is not None:
            analysis.scan = e.partial_result
            analysis.audio_format = e.partial_result.audio_format
        log_scan_failure(source, e.error_code, str(e), partial=analysis.scan is not None)

    except WavFormatError as e:
        analysis.error_code = e.error_code
        analysis.error_message = str(e)
        log_scan_failure(source, e.error_code, str(e))

    except OSError as e:
        logger.error(f"Failed to read {path}: {e}", exc_info=True)
        analysis.error_code = IO_ERROR
        analysis.error_message = str(e)
        log_scan_failure(source, IO_ERROR, str(e))

    return analysis
