"""
Result reporting.

This module contains the writer that persists analyses as a results table,
per-file info files and WaveLab marker files.
"""

from audio_defects.reporting.result_writer import (
    DEFAULT_TABLE_FILE,
    TABLE_COLUMNS,
    ResultWriter,
    select_marker_events,
    summary_values,
)

__all__ = [
    'DEFAULT_TABLE_FILE',
    'TABLE_COLUMNS',
    'ResultWriter',
    'select_marker_events',
    'summary_values',
]
