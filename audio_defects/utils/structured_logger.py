"""
Structured logging utilities for defect detection.

Provides JSON-formatted log entries for parsed headers, detected defects,
scan summaries and failures, plus the formatter used by the CLI.
"""

import json
import logging
import math
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ')


def _convert_to_json_serializable(obj: Any) -> Any:
    """
    Converts numpy scalars, bytes and non-finite floats for JSON output.

    Args:
        obj: Object to convert

    Returns:
        JSON-serializable version of the object
    """
    import numpy as np

    if isinstance(obj, (np.integer,)):
        return int(obj)
    elif isinstance(obj, (np.floating, float)):
        value = float(obj)
        return value if math.isfinite(value) else str(value)
    elif isinstance(obj, (np.bool_, bool)):
        return bool(obj)
    elif isinstance(obj, bytes):
        return obj.decode('latin-1')
    elif isinstance(obj, dict):
        return {k: _convert_to_json_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_convert_to_json_serializable(item) for item in obj]
    else:
        return obj


def log_header_parsed(source: str, audio_format, payload_offset: int) -> None:
    """
    Logs a successfully parsed WAV header.

    Args:
        source: File name or stream identifier
        audio_format: Parsed AudioFormat
        payload_offset: Byte offset of the first payload byte
    """
    log_entry = {
        'event': 'header_parsed',
        'timestamp': _utc_timestamp(),
        'source': source,
        'format': _convert_to_json_serializable(audio_format.to_dict()),
        'payloadOffset': payload_offset
    }

    logger.debug(json.dumps(log_entry))


def log_defect_event(source: str, event) -> None:
    """
    Logs a detected defect.

    Args:
        source: File name or stream identifier
        event: SilenceEvent, OvermodulationEvent or HoldEvent
    """
    log_entry = {
        'event': 'defect_detected',
        'timestamp': _utc_timestamp(),
        'source': source,
        'defectType': event.kind,
        'label': event.label,
        'channel': event.channel + 1,
        'position': event.position,
        'details': _convert_to_json_serializable(event.to_dict())
    }

    logger.warning(json.dumps(log_entry))


def log_scan_summary(source: str, result, duration_ms: float) -> None:
    """
    Logs the outcome of a defect scan.

    Truncated scans are logged at WARNING, complete ones at INFO.

    Args:
        source: File name or stream identifier
        result: ScanResult (complete or partial)
        duration_ms: Scan duration in milliseconds
    """
    peak = result.peak
    log_entry = {
        'event': 'scan_summary',
        'timestamp': _utc_timestamp(),
        'source': source,
        'framesScanned': result.frames_scanned,
        'truncated': result.truncated,
        'eventCounts': result.count_by_kind(),
        'peak': {
            'level_dbfs': None if peak.level_dbfs is None else round(float(peak.level_dbfs), 2),
            'sample_index': peak.sample_index,
            'channel': None if peak.channel is None else peak.channel + 1
        },
        'duration_ms': round(duration_ms, 2)
    }

    log_message = json.dumps(log_entry)

    if result.truncated:
        logger.warning(log_message)
    else:
        logger.info(log_message)


def log_scan_failure(
    source: str,
    error_code: str,
    message: str,
    partial: bool = False
) -> None:
    """
    Logs a file that could not be analysed completely.

    Args:
        source: File name or stream identifier
        error_code: Stable error code (BAD_CONTAINER, UNEXPECTED_END, ...)
        message: Error message
        partial: Whether partial results were kept
    """
    log_entry = {
        'event': 'scan_failure',
        'timestamp': _utc_timestamp(),
        'source': source,
        'errorCode': error_code,
        'error': message,
        'partialResult': partial
    }

    logger.error(json.dumps(log_entry))


def log_metrics_emission(
    source: str,
    metric_count: int,
    success: bool = True,
    error: Optional[str] = None
) -> None:
    """
    Logs CloudWatch metrics emission.

    Args:
        source: File name
        metric_count: Number of metrics emitted
        success: Whether emission succeeded
        error: Error message if emission failed
    """
    log_entry = {
        'event': 'metrics_emission',
        'timestamp': _utc_timestamp(),
        'source': source,
        'metricCount': metric_count,
        'success': success
    }

    if error:
        log_entry['error'] = error

    log_message = json.dumps(log_entry)

    if success:
        logger.debug(log_message)
    else:
        logger.error(log_message)


def log_configuration_loaded(config_dict: Dict[str, Any]) -> None:
    """
    Logs configuration loading event.

    Args:
        config_dict: Configuration dictionary
    """
    log_entry = {
        'event': 'configuration_loaded',
        'timestamp': _utc_timestamp(),
        'config': _convert_to_json_serializable(config_dict)
    }

    logger.info(json.dumps(log_entry))


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Messages that are already JSON objects (from the helpers above) are
    merged into the record instead of being nested as a string.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': _utc_timestamp(),
            'level': record.levelname,
            'component': record.name,
        }

        message = record.getMessage()
        try:
            payload = json.loads(message)
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            log_entry.update(payload)
        else:
            log_entry['message'] = message

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def configure_logging(level: str = 'WARNING', use_json: bool = False) -> None:
    """
    Configures the package logger for command-line use.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        use_json: Emit one JSON object per line instead of plain text
    """
    package_logger = logging.getLogger('audio_defects')
    package_logger.setLevel(level.upper())

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if use_json:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
    package_logger.addHandler(handler)
