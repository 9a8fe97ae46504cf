"""
Result file writer.

This module persists finished analyses in the three formats produced by
the tool: an appended tab-separated results table shared by all files, a
per-file info text file, and a WaveLab marker (.mrk) file listing the
detected defects.
"""

import logging
import os
from typing import List, Optional, Sequence, TextIO

from audio_defects.models.defect_event import DefectEvent
from audio_defects.models.detection_config import DetectionConfig
from audio_defects.models.results import FileAnalysis
from audio_defects.utils.number_format import format_decimal

logger = logging.getLogger(__name__)


DEFAULT_TABLE_FILE = 'results.txt'

TABLE_COLUMNS = [
    'File name',
    'Bits per sample',
    'Channel count',
    'Sample freq',
    'Sample count',
    'File duration',
    'File size',
    'Peak channel',
    'Peak position',
    'Peak value',
]


def summary_values(analysis: FileAnalysis) -> List[str]:
    """
    Builds the report values of one analysis, in TABLE_COLUMNS order.

    Channels are reported 1-based. A missing peak renders as empty fields.

    Raises:
        ValueError: If the analysis has no scan results
    """
    if analysis.scan is None:
        raise ValueError(f'No scan results for {analysis.path}')

    audio_format = analysis.scan.audio_format
    peak = analysis.scan.peak

    return [
        os.path.basename(analysis.path),
        str(audio_format.bits_per_sample),
        str(audio_format.channels),
        str(audio_format.sample_rate),
        str(audio_format.sample_count),
        format_decimal(audio_format.duration_s),
        str(analysis.file_size),
        '' if peak.channel is None else str(peak.channel + 1),
        '' if peak.sample_index is None else str(peak.sample_index),
        '' if peak.level_dbfs is None else format_decimal(peak.level_dbfs),
    ]


def info_file_path(wav_path: str) -> str:
    return wav_path + '.txt'


def marker_file_path(wav_path: str) -> str:
    root, _ = os.path.splitext(wav_path)
    return root + '.mrk'


def select_marker_events(
    events: Sequence[DefectEvent],
    sample_rate: int,
    report_start_s: float = 0.0,
    report_end_s: Optional[float] = None
) -> List[tuple]:
    """
    Picks the events to export as markers.

    An event sharing its position with the next event is dropped in favour
    of the later one. Events before ``report_start_s`` are skipped; the
    first event after ``report_end_s`` ends the export.

    Returns:
        List of ``(marker_number, event)`` tuples, where marker_number is
        the 1-based index of the event in the full list.
    """
    selected = []
    for index, event in enumerate(events):
        if index + 1 < len(events) and events[index + 1].position == event.position:
            continue

        seconds = event.position / sample_rate
        if seconds < report_start_s:
            continue
        if report_end_s is not None and seconds > report_end_s:
            break

        selected.append((index + 1, event))
    return selected


class ResultWriter:
    """
    Writes result files for finished analyses.

    Attributes:
        table_path: Path of the shared results table
        config: Detection configuration (marker window)
    """

    def __init__(
        self,
        table_path: str = DEFAULT_TABLE_FILE,
        config: Optional[DetectionConfig] = None
    ):
        self.table_path = table_path
        self.config = config if config is not None else DetectionConfig()

    def write_all(self, analysis: FileAnalysis) -> List[str]:
        """
        Writes the table row, info file and marker file of one analysis.

        Analyses without scan results (header failures) are skipped.

        Returns:
            Paths written
        """
        if analysis.scan is None:
            logger.debug(f'No results to write for {analysis.path}')
            return []

        written = [self.append_table_row(analysis), self.write_info_file(analysis)]
        marker_path = self.write_marker_file(analysis)
        if marker_path is not None:
            written.append(marker_path)
        return written

    def append_table_row(self, analysis: FileAnalysis) -> str:
        """Appends one row, writing the header first if the table is new."""
        create_header = not os.path.exists(self.table_path)

        with open(self.table_path, 'a', encoding='utf-8', newline='') as table:
            if create_header:
                table.write('\t'.join(TABLE_COLUMNS) + os.linesep)
            table.write('\t'.join(summary_values(analysis)) + os.linesep)

        return self.table_path

    def write_info_file(self, analysis: FileAnalysis) -> str:
        path = info_file_path(analysis.path)
        with open(path, 'w', encoding='utf-8', newline='') as info:
            for column, value in zip(TABLE_COLUMNS, summary_values(analysis)):
                info.write(f'{column}\t{value}{os.linesep}')
        return path

    def write_marker_file(self, analysis: FileAnalysis) -> Optional[str]:
        """
        Writes the WaveLab marker file.

        Returns:
            Path written, or None when the analysis found no events.
        """
        scan = analysis.scan
        if not scan.events:
            return None

        markers = select_marker_events(
            scan.events,
            scan.audio_format.sample_rate,
            report_start_s=self.config.report_start_s,
            report_end_s=self.config.report_end_s
        )

        path = marker_file_path(analysis.path)
        with open(path, 'w', encoding='utf-8', newline='') as mrk:
            _write_markers(mrk, markers)
        return path


def _write_markers(out: TextIO, markers: List[tuple]) -> None:
    eol = os.linesep
    out.write('Markers' + eol)
    out.write('{' + eol)
    for number, event in markers:
        out.write(f'\tMarker{number}{eol}')
        out.write('\t{' + eol)
        out.write(f'\t\tName={event.label}{eol}')
        out.write(f'\t\tPos={event.position}{eol}')
        out.write('\t\tType=0' + eol)
        out.write('\t\tFlags=0' + eol)
        out.write('\t\tExtra=0' + eol)
        out.write('\t}' + eol)
    out.write('}' + eol)
