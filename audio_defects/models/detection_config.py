"""
Detection configuration data model.

This module defines the DetectionConfig dataclass holding the numeric
thresholds used by the defect scanner, and loads it from environment
variables with sensible defaults.
"""

import math
import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, Optional

from audio_defects.exceptions import ConfigurationError


ENV_PREFIX = 'DAED_'


@dataclass(frozen=True)
class DetectionConfig:
    """Configuration for WAV defect detection."""

    # Zero duplicates needed to report digital silence
    silence_threshold_samples: int = 10

    # Identical duplicates needed to report a hold (stuck) value
    hold_threshold_samples: int = 5

    # Quiet period after an event during which the same detector stays silent
    no_warning_duration_s: float = 1.0

    # Stuck values at or below this level are not reported
    hold_level_threshold_dbfs: float = -50.0

    # Marker export window (seconds, absolute)
    report_start_s: float = 0.0
    report_end_s: Optional[float] = None

    def validate(self) -> List[str]:
        """
        Validates configuration parameters.

        Returns:
            List of error messages. Empty list if configuration is valid.
        """
        errors = []

        if self.silence_threshold_samples < 1:
            errors.append('Silence threshold must be at least 1 sample')

        if self.hold_threshold_samples < 1:
            errors.append('Hold threshold must be at least 1 sample')

        if self.no_warning_duration_s < 0:
            errors.append('No-warning duration must be non-negative')

        if self.hold_level_threshold_dbfs > 0:
            errors.append('Hold level threshold must be at or below 0 dBFS')

        if self.report_start_s < 0:
            errors.append('Report start position must be non-negative')

        if self.report_end_s is not None and self.report_end_s < self.report_start_s:
            errors.append('Report end position must not precede the start position')

        return errors

    def debounce_frames(self, sample_rate: int) -> int:
        """
        Computes the debounce window in frames for a sample rate.

        The product is rounded half up, so 0.5 frames becomes 1.

        Args:
            sample_rate: Sample rate in Hz

        Returns:
            Number of frames that must elapse between two events of the
            same kind on the same channel.
        """
        return int(math.floor(sample_rate * self.no_warning_duration_s + 0.5))

    @property
    def has_report_window(self) -> bool:
        return self.report_start_s > 0 or self.report_end_s is not None

    def with_overrides(self, **overrides: Any) -> 'DetectionConfig':
        """
        Returns a copy with the given non-None fields replaced.

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        config = replace(self, **changes)
        config.raise_if_invalid()
        return config

    def raise_if_invalid(self) -> None:
        errors = self.validate()
        if errors:
            raise ConfigurationError('Invalid detection configuration', validation_errors=errors)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'DetectionConfig':
        """
        Loads configuration from DAED_* environment variables.

        Unset variables fall back to the dataclass defaults.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Validated DetectionConfig

        Raises:
            ConfigurationError: If a variable cannot be parsed or the
                resulting configuration is invalid
        """
        environ = os.environ if environ is None else environ
        defaults = cls()

        config = cls(
            silence_threshold_samples=_read_env(
                environ, 'SAME_SAMPLE_THRESHOLD_SILENCE', int,
                defaults.silence_threshold_samples
            ),
            hold_threshold_samples=_read_env(
                environ, 'SAME_SAMPLE_THRESHOLD_HOLD', int,
                defaults.hold_threshold_samples
            ),
            no_warning_duration_s=_read_env(
                environ, 'NO_WARNING_DURATION', float,
                defaults.no_warning_duration_s
            ),
            hold_level_threshold_dbfs=_read_env(
                environ, 'LEVEL_THRESHOLD_HOLD', float,
                defaults.hold_level_threshold_dbfs
            ),
            report_start_s=_read_env(
                environ, 'START_POSITION_RESULT_VALUES', float,
                defaults.report_start_s
            ),
            report_end_s=_read_env(
                environ, 'END_POSITION_RESULT_VALUES', float,
                defaults.report_end_s
            ),
        )
        config.raise_if_invalid()
        return config


def _read_env(
    environ: Mapping[str, str],
    name: str,
    parse: Callable[[str], Any],
    default: Any
) -> Any:
    key = ENV_PREFIX + name
    raw = environ.get(key)
    if raw is None or raw.strip() == '':
        return default
    try:
        return parse(raw.strip())
    except ValueError as e:
        raise ConfigurationError(
            'Invalid environment configuration',
            validation_errors=[f'{key}={raw!r} is not a valid {parse.__name__}']
        ) from e
