"""
Defect detection utilities package.

This package provides level conversion, number formatting and structured
logging helpers. The per-file fallback driver lives in
``audio_defects.utils.graceful_degradation`` and is imported from there
directly, since it depends on the analyzers.
"""

from audio_defects.utils.levels import amplitude_to_dbfs, is_clipped
from audio_defects.utils.number_format import format_decimal
from audio_defects.utils.structured_logger import (
    configure_logging,
    log_configuration_loaded,
    log_defect_event,
    log_header_parsed,
    log_metrics_emission,
    log_scan_failure,
    log_scan_summary,
)

__all__ = [
    'amplitude_to_dbfs',
    'is_clipped',
    'format_decimal',
    'configure_logging',
    'log_configuration_loaded',
    'log_defect_event',
    'log_header_parsed',
    'log_metrics_emission',
    'log_scan_failure',
    'log_scan_summary',
]
