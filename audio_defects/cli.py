"""
Command-line interface for WAV defect detection.

Usage:
    audio-defects take1.wav take2.wav          # Analyse files
    audio-defects recordings/                  # Analyse every .wav below a directory
    audio-defects --jobs 4 recordings/         # One process per file, 4 at a time
    audio-defects --no-reports take1.wav       # Print results only
    DAED_NO_WARNING_DURATION=0.5 audio-defects take1.wav
"""

import argparse
import logging
import os
import sys
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from typing import Iterable, List, Optional

from audio_defects import __version__
from audio_defects.exceptions import ConfigurationError
from audio_defects.models.detection_config import DetectionConfig
from audio_defects.models.results import FileAnalysis
from audio_defects.notifiers.metrics_emitter import DefectMetricsEmitter
from audio_defects.reporting.result_writer import DEFAULT_TABLE_FILE, ResultWriter
from audio_defects.utils.graceful_degradation import analyze_with_fallback
from audio_defects.utils.number_format import format_decimal
from audio_defects.utils.structured_logger import (
    configure_logging,
    log_configuration_loaded,
)

logger = logging.getLogger(__name__)


WAV_SUFFIXES = ('wav', 'WAV')


def collect_wav_files(paths: Iterable[str]) -> List[str]:
    """
    Expands the command-line paths into the list of WAV files to analyse.

    Directories are expanded recursively, their entries visited after the
    explicit paths. Missing paths are skipped silently; files whose name
    does not end in 'wav' or 'WAV' are logged and skipped.
    """
    pending = list(paths)
    files = []

    position = 0
    while position < len(pending):
        path = pending[position]
        position += 1

        if not os.path.exists(path):
            logger.debug(f'{path} does not exist, skipping')
            continue

        if os.path.isdir(path):
            pending.extend(os.path.join(path, name) for name in sorted(os.listdir(path)))
            continue

        if not path.endswith(WAV_SUFFIXES):
            logger.warning(f'{path} is not a wav, go next')
            continue

        files.append(path)

    return files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='audio-defects',
        description='Detect digital silence, overmodulation and hold values in PCM WAV files'
    )
    parser.add_argument(
        'paths',
        nargs='+',
        help='WAV files or directories to analyse'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    output = parser.add_argument_group('output')
    output.add_argument(
        '--table-file',
        default=DEFAULT_TABLE_FILE,
        help=f'Tab-separated results table to append to (default: {DEFAULT_TABLE_FILE})'
    )
    output.add_argument(
        '--no-reports',
        action='store_true',
        help='Do not write the results table, info files or marker files'
    )
    output.add_argument(
        '--cloudwatch-namespace',
        help='Publish per-file metrics to this CloudWatch namespace'
    )
    output.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Log level (default: WARNING, which shows every detected defect)'
    )
    output.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit structured JSON log lines'
    )

    detection = parser.add_argument_group('detection (overrides DAED_* environment variables)')
    detection.add_argument(
        '--silence-samples',
        type=int,
        help='Repeated zero samples that make digital silence'
    )
    detection.add_argument(
        '--hold-samples',
        type=int,
        help='Repeated samples that make a hold value'
    )
    detection.add_argument(
        '--no-warning-duration',
        type=float,
        help='Seconds after an event during which the same defect is not reported again'
    )
    detection.add_argument(
        '--hold-level',
        type=float,
        help='Minimum level in dBFS for a hold value to be reported'
    )
    detection.add_argument(
        '--report-start',
        type=float,
        help='Skip markers before this time in seconds'
    )
    detection.add_argument(
        '--report-end',
        type=float,
        help='Skip markers after this time in seconds'
    )

    parser.add_argument(
        '--jobs',
        type=int,
        default=1,
        help='Number of files analysed in parallel (default: 1)'
    )
    return parser


def load_config(args: argparse.Namespace) -> DetectionConfig:
    """
    Builds the detection configuration from the environment and CLI options.

    Raises:
        ConfigurationError: If the resulting configuration is invalid
    """
    config = DetectionConfig.from_env().with_overrides(
        silence_threshold_samples=args.silence_samples,
        hold_threshold_samples=args.hold_samples,
        no_warning_duration_s=args.no_warning_duration,
        hold_level_threshold_dbfs=args.hold_level,
        report_start_s=args.report_start,
        report_end_s=args.report_end,
    )
    log_configuration_loaded(config.to_dict())
    return config


def run_analyses(files: List[str], config: DetectionConfig, jobs: int = 1) -> Iterable[FileAnalysis]:
    """
    Analyses files independently, in order.

    With ``jobs > 1`` each file runs in a worker process; results are still
    yielded in input order.
    """
    if jobs <= 1 or len(files) <= 1:
        for path in files:
            print(path)
            yield analyze_with_fallback(path, config)
        return

    with ProcessPoolExecutor(max_workers=jobs) as executor:
        for analysis in executor.map(partial(analyze_with_fallback, config=config), files):
            print(analysis.path)
            yield analysis


def print_banner(config: DetectionConfig) -> None:
    print(f'Digital Audio Error Detection v{__version__}')
    print()
    if config.has_report_window:
        end = 'end' if config.report_end_s is None else f'{format_decimal(config.report_end_s)} sec'
        print(f'Partial MRK result : {format_decimal(config.report_start_s)} sec to {end}')
        print()


def print_analysis(analysis: FileAnalysis) -> None:
    if analysis.error_code is not None:
        print(
            f'{analysis.path}: {analysis.error_code}: {analysis.error_message}',
            file=sys.stderr
        )

    if analysis.scan is None:
        return

    peak = analysis.scan.peak
    level = '' if peak.level_dbfs is None else format_decimal(peak.level_dbfs)
    index = '' if peak.sample_index is None else str(peak.sample_index)
    channel = '' if peak.channel is None else str(peak.channel + 1)
    print(f'Peak value:\t{level}\t{index}\t{channel}')


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, use_json=args.json_logs)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 2

    print_banner(config)

    writer = None if args.no_reports else ResultWriter(args.table_file, config)
    emitter = None
    if args.cloudwatch_namespace:
        emitter = DefectMetricsEmitter.create(namespace=args.cloudwatch_namespace)

    files = collect_wav_files(args.paths)
    failures = 0

    for analysis in run_analyses(files, config, jobs=args.jobs):
        if writer is not None:
            try:
                writer.write_all(analysis)
            except OSError as e:
                logger.error(f'Failed to write results for {analysis.path}: {e}')
                failures += 1

        if emitter is not None:
            emitter.emit_metrics(analysis)

        print_analysis(analysis)

        if not analysis.succeeded:
            failures += 1

    return 0 if failures == 0 else 1


if __name__ == '__main__':
    sys.exit(main())
