"""
Defect Scanner.

This module provides the DefectScanner class that consumes a decoded sample
stream once, tracks the global peak and drives the silence, clipping and
hold detectors for every channel.
"""

import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional

from audio_defects.analyzers.clipping_detector import ClippingDetector
from audio_defects.analyzers.hold_detector import HoldDetector
from audio_defects.analyzers.silence_detector import SilenceDetector
from audio_defects.exceptions import UnexpectedEndError
from audio_defects.models.audio_format import AudioFormat
from audio_defects.models.detection_config import DetectionConfig
from audio_defects.models.defect_event import DefectEvent
from audio_defects.models.results import PeakRecord, ScanResult
from audio_defects.utils.structured_logger import (
    log_defect_event,
    log_scan_summary,
)

logger = logging.getLogger(__name__)


@dataclass
class ChannelState:
    """Run-length state of one channel, mutated sample by sample."""

    last_value: int = 0
    same_value_run: int = 0
    zero_run: int = 0


class DefectScanner:
    """
    Scans a PCM payload for recording defects.

    One scanner instance owns the detector state, peak record and event
    list of a single file. It is not reusable: build a new scanner per file.

    Per sample ``v`` on channel ``c`` at frame ``i``:
    1. Fold ``|v|`` into the global peak
    2. Duplicate of the channel's last value: extend the run; a zero
       duplicate extends the zero run and may report silence
    3. Changed value: reset the runs; a clipped value may report
       overmodulation
    4. Samples that fed neither silence nor clipping go to the hold detector

    Attributes:
        audio_format: Format of the scanned payload
        config: Detection thresholds
        debounce_frames: Shared debounce window in frames
        events: Events in detection order
        peak: Running peak record
    """

    def __init__(
        self,
        audio_format: AudioFormat,
        config: Optional[DetectionConfig] = None,
        source: str = 'unknown'
    ):
        """
        Initialize the scanner.

        Args:
            audio_format: Format of the payload to scan
            config: Detection thresholds. If None, uses defaults.
            source: Name used in log entries

        Raises:
            ConfigurationError: If configuration validation fails
            ValueError: If the format declares no channels
        """
        self.config = config if config is not None else DetectionConfig()
        self.config.raise_if_invalid()

        if audio_format.channels < 1:
            raise ValueError(f'Format must have at least one channel, got {audio_format.channels}')

        self.audio_format = audio_format
        self.source = source
        self.debounce_frames = self.config.debounce_frames(audio_format.sample_rate)

        channels = audio_format.channels
        self.silence_detector = SilenceDetector(
            channels,
            threshold_samples=self.config.silence_threshold_samples,
            debounce_frames=self.debounce_frames
        )
        self.clipping_detector = ClippingDetector(
            channels,
            debounce_frames=self.debounce_frames
        )
        self.hold_detector = HoldDetector(
            channels,
            threshold_samples=self.config.hold_threshold_samples,
            level_threshold_dbfs=self.config.hold_level_threshold_dbfs,
            debounce_frames=self.debounce_frames
        )

        self.channel_states: List[ChannelState] = [ChannelState() for _ in range(channels)]
        self.events: List[DefectEvent] = []
        self.peak = PeakRecord()
        self.frames_scanned = 0
        self._consumed = False

    def scan(self, samples: Iterable[int]) -> ScanResult:
        """
        Consumes the sample sequence and returns the findings.

        Args:
            samples: Decoded amplitudes in frame-interleaved order, usually
                     a SampleStream

        Returns:
            ScanResult with events in detection order and the finalized peak

        Raises:
            UnexpectedEndError: If the sample source was truncated. The
                exception's ``partial_result`` holds everything computed
                from the samples that did arrive.
            RuntimeError: If the scanner was already used
        """
        if self._consumed:
            raise RuntimeError('DefectScanner instances scan a single stream only')
        self._consumed = True

        logger.debug(
            f"Scanning {self.source}: {self.audio_format.sample_count} frames, "
            f"debounce_frames={self.debounce_frames}"
        )
        start_time = time.perf_counter()
        channels = self.audio_format.channels
        sample_number = 0

        try:
            for value in samples:
                frame_index, channel = divmod(sample_number, channels)
                self._process_sample(value, frame_index, channel)
                sample_number += 1
        except UnexpectedEndError as e:
            self.frames_scanned = (sample_number + channels - 1) // channels
            result = self._finalize(truncated=True)
            duration_ms = (time.perf_counter() - start_time) * 1000
            log_scan_summary(self.source, result, duration_ms)
            raise UnexpectedEndError(
                str(e),
                expected=e.expected,
                received=e.received,
                partial_result=result
            ) from e

        self.frames_scanned = (sample_number + channels - 1) // channels
        result = self._finalize(truncated=False)
        duration_ms = (time.perf_counter() - start_time) * 1000
        log_scan_summary(self.source, result, duration_ms)
        return result

    def _process_sample(self, value: int, frame_index: int, channel: int) -> None:
        self.peak.update(value, frame_index, channel)

        state = self.channel_states[channel]
        event: Optional[DefectEvent] = None
        silence_or_clip = False

        if value == state.last_value:
            state.same_value_run += 1
            if value == 0:
                silence_or_clip = True
                state.zero_run += 1
                event = self.silence_detector.check(channel, frame_index, state.zero_run)
            else:
                state.zero_run = 0
        else:
            state.same_value_run = 0
            state.zero_run = 0
            state.last_value = value
            if self.clipping_detector.is_clipped(value):
                silence_or_clip = True
                event = self.clipping_detector.check(channel, frame_index)

        if not silence_or_clip:
            event = self.hold_detector.check(
                channel, frame_index, value, state.same_value_run
            )

        if event is not None:
            self.events.append(event)
            log_defect_event(self.source, event)

    def _finalize(self, truncated: bool) -> ScanResult:
        self.peak.finalize()
        return ScanResult(
            audio_format=self.audio_format,
            events=list(self.events),
            peak=self.peak,
            frames_scanned=self.frames_scanned,
            truncated=truncated
        )
