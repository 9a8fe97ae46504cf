"""Unit tests for DetectionConfig."""

import pytest

from audio_defects.exceptions import ConfigurationError
from audio_defects.models.detection_config import DetectionConfig


class TestDetectionConfig:
    """Test suite for DetectionConfig."""

    def test_defaults(self):
        """Test default configuration values."""
        config = DetectionConfig()

        assert config.silence_threshold_samples == 10
        assert config.hold_threshold_samples == 5
        assert config.no_warning_duration_s == 1.0
        assert config.hold_level_threshold_dbfs == -50.0
        assert config.report_start_s == 0.0
        assert config.report_end_s is None
        assert config.validate() == []
        assert not config.has_report_window

    @pytest.mark.parametrize('overrides,message', [
        ({'silence_threshold_samples': 0}, 'Silence threshold'),
        ({'hold_threshold_samples': -1}, 'Hold threshold'),
        ({'no_warning_duration_s': -0.1}, 'No-warning duration'),
        ({'hold_level_threshold_dbfs': 3.0}, 'Hold level threshold'),
        ({'report_start_s': -1.0}, 'Report start'),
        ({'report_start_s': 10.0, 'report_end_s': 5.0}, 'Report end'),
    ])
    def test_validation_errors(self, overrides, message):
        """Test that out-of-range values are reported."""
        errors = DetectionConfig(**overrides).validate()

        assert len(errors) == 1
        assert message in errors[0]

    @pytest.mark.parametrize('sample_rate,duration,expected', [
        (48000, 1.0, 48000),
        (44100, 0.5, 22050),
        (3, 0.5, 2),
        (1, 0.4, 0),
        (48000, 0.0, 0),
    ])
    def test_debounce_frames(self, sample_rate, duration, expected):
        """Test the rounded debounce window."""
        config = DetectionConfig(no_warning_duration_s=duration)

        assert config.debounce_frames(sample_rate) == expected

    def test_with_overrides_ignores_none(self):
        """Test that None overrides keep the existing values."""
        config = DetectionConfig(silence_threshold_samples=20)

        updated = config.with_overrides(silence_threshold_samples=None, hold_threshold_samples=8)

        assert updated.silence_threshold_samples == 20
        assert updated.hold_threshold_samples == 8

    def test_with_overrides_validates(self):
        """Test that an invalid override raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match='Hold threshold'):
            DetectionConfig().with_overrides(hold_threshold_samples=0)

    def test_report_window(self):
        """Test the report window flag."""
        assert DetectionConfig(report_start_s=1.5).has_report_window
        assert DetectionConfig(report_end_s=30.0).has_report_window

    def test_to_dict(self):
        """Test dictionary conversion."""
        config_dict = DetectionConfig().to_dict()

        assert config_dict['silence_threshold_samples'] == 10
        assert config_dict['report_end_s'] is None


class TestDetectionConfigFromEnv:
    """Test suite for loading DetectionConfig from the environment."""

    def test_empty_environment_uses_defaults(self):
        """Test that unset variables keep the defaults."""
        assert DetectionConfig.from_env({}) == DetectionConfig()

    def test_reads_every_variable(self):
        """Test that every DAED_ variable is applied."""
        environ = {
            'DAED_SAME_SAMPLE_THRESHOLD_SILENCE': '100',
            'DAED_SAME_SAMPLE_THRESHOLD_HOLD': '20',
            'DAED_NO_WARNING_DURATION': '0.25',
            'DAED_LEVEL_THRESHOLD_HOLD': '-60',
            'DAED_START_POSITION_RESULT_VALUES': '2',
            'DAED_END_POSITION_RESULT_VALUES': '90.5',
        }

        config = DetectionConfig.from_env(environ)

        assert config == DetectionConfig(
            silence_threshold_samples=100,
            hold_threshold_samples=20,
            no_warning_duration_s=0.25,
            hold_level_threshold_dbfs=-60.0,
            report_start_s=2.0,
            report_end_s=90.5
        )

    def test_blank_value_uses_default(self):
        """Test that an empty variable is treated as unset."""
        config = DetectionConfig.from_env({'DAED_SAME_SAMPLE_THRESHOLD_HOLD': '  '})

        assert config.hold_threshold_samples == 5

    def test_unparseable_value(self):
        """Test that a malformed value raises ConfigurationError naming the variable."""
        with pytest.raises(ConfigurationError) as exc_info:
            DetectionConfig.from_env({'DAED_SAME_SAMPLE_THRESHOLD_SILENCE': 'ten'})

        assert 'DAED_SAME_SAMPLE_THRESHOLD_SILENCE' in str(exc_info.value)

    def test_out_of_range_value(self):
        """Test that a parseable but invalid value is rejected."""
        with pytest.raises(ConfigurationError):
            DetectionConfig.from_env({'DAED_NO_WARNING_DURATION': '-1'})

    def test_reads_os_environ_by_default(self, monkeypatch):
        """Test that os.environ is used when no mapping is given."""
        monkeypatch.setenv('DAED_LEVEL_THRESHOLD_HOLD', '-40')

        assert DetectionConfig.from_env().hold_level_threshold_dbfs == -40.0
