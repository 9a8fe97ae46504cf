"""
Integration tests for file analysis.

These tests write complete WAV files to disk and run them through header
parsing, the defect scan and result file writing.
"""

import json
import logging

import pytest

from audio_defects.models.detection_config import DetectionConfig
from audio_defects.reporting.result_writer import ResultWriter
from audio_defects.utils.graceful_degradation import analyze_with_fallback
from audio_defects.utils.structured_logger import StructuredFormatter


SAMPLE_RATE = 1000


def stereo_24bit_samples():
    """
    Two seconds of stereo 24-bit audio at 1 kHz.

    Left: a ramp with a stuck half-scale value from 0.5 s and a positive
    full-scale sample at 1.5 s. Right: a ramp with digital silence from 1 s.
    """
    left = [((k % 997) + 1) * 100 for k in range(2 * SAMPLE_RATE)]
    right = [-((k % 991) + 1) * 100 for k in range(2 * SAMPLE_RATE)]

    for k in range(500, 520):
        left[k] = 0x400000
    left[1500] = 0x7FFFFF
    for k in range(1000, 1100):
        right[k] = 0

    return [value for frame in zip(left, right) for value in frame]


@pytest.fixture
def config():
    """Thresholds with a 0.1 s debounce window."""
    return DetectionConfig(
        silence_threshold_samples=10,
        hold_threshold_samples=5,
        no_warning_duration_s=0.1,
        hold_level_threshold_dbfs=-50.0
    )


@pytest.fixture
def wav_path(tmp_path, make_wav, make_chunk):
    """Write the stereo fixture with metadata chunks around the format."""
    path = tmp_path / 'session.wav'
    path.write_bytes(make_wav(
        samples=stereo_24bit_samples(),
        channels=2,
        sample_rate=SAMPLE_RATE,
        bits_per_sample=24,
        before_fmt=(make_chunk(b'JUNK', bytes(28)),),
        before_data=(make_chunk(b'LIST', b'INFOICMT\x06\x00\x00\x00notes\x00'),)
    ))
    return path


class TestFileAnalysisIntegration:
    """End-to-end analysis of files on disk."""

    def test_detects_all_defect_kinds(self, wav_path, config):
        """Test that hold, overmodulation and silence are found on the right channels."""
        analysis = analyze_with_fallback(str(wav_path), config)

        assert analysis.succeeded
        scan = analysis.scan
        assert scan.audio_format.channels == 2
        assert scan.audio_format.bits_per_sample == 24
        assert scan.frames_scanned == 2 * SAMPLE_RATE

        assert [(e.kind, e.channel, e.position) for e in scan.events] == [
            ('hold', 0, 500),
            ('silence', 1, 1000),
            ('overmodulation', 0, 1500),
        ]
        assert scan.peak.sample_index == 1500
        assert scan.peak.channel == 0

    def test_writes_result_files(self, tmp_path, wav_path, config):
        """Test the table, info and marker files produced for the analysis."""
        analysis = analyze_with_fallback(str(wav_path), config)
        writer = ResultWriter(str(tmp_path / 'results.txt'), config)

        writer.write_all(analysis)

        table = (tmp_path / 'results.txt').read_text(encoding='utf-8').splitlines()
        assert len(table) == 2
        assert table[1].split('\t')[:9] == [
            'session.wav', '24', '2', '1000', '2000', '2',
            str(wav_path.stat().st_size), '1', '1500'
        ]

        markers = (tmp_path / 'session.mrk').read_text(encoding='utf-8')
        assert markers.count('\tMarker') == 3
        assert 'Name=Hold at -6.021 dBFS' in markers
        assert 'Pos=1000' in markers

    def test_truncated_file_reports_partial_results(self, tmp_path, wav_path, config):
        """Test that a file cut after 1.2 s keeps the events found so far."""
        data = wav_path.read_bytes()
        header_size = len(data) - 2 * SAMPLE_RATE * 6
        cut_path = tmp_path / 'cut.wav'
        cut_path.write_bytes(data[:header_size + 1200 * 6 + 4])

        analysis = analyze_with_fallback(str(cut_path), config)
        ResultWriter(str(tmp_path / 'results.txt'), config).write_all(analysis)

        assert analysis.error_code == 'UNEXPECTED_END'
        assert analysis.scan.frames_scanned == 1201
        assert [e.kind for e in analysis.scan.events] == ['hold', 'silence']
        assert (tmp_path / 'cut.mrk').exists()

    def test_defects_are_logged_as_json(self, wav_path, config, caplog):
        """Test that every detected defect produces a structured log entry."""
        with caplog.at_level(logging.WARNING, logger='audio_defects'):
            analyze_with_fallback(str(wav_path), config)

        entries = [
            json.loads(record.getMessage())
            for record in caplog.records
            if record.name == 'audio_defects.utils.structured_logger'
        ]
        detected = [entry for entry in entries if entry['event'] == 'defect_detected']
        assert [entry['defectType'] for entry in detected] == ['hold', 'silence', 'overmodulation']
        assert detected[1]['channel'] == 2

        formatted = json.loads(StructuredFormatter().format(caplog.records[0]))
        assert formatted['level'] == 'WARNING'
        assert 'event' in formatted
