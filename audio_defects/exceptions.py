"""
Custom exceptions for WAV defect detection.

This module defines the exception hierarchy raised while parsing RIFF/WAVE
containers and scanning their PCM payload. Every format failure carries a
stable ``error_code`` so callers can report it without string matching.
"""


class AudioDefectError(Exception):
    """
    Base exception for defect detection errors.

    All package-specific exceptions inherit from this base class,
    allowing for easy catching of every defect detection error.
    """
    pass


class WavFormatError(AudioDefectError):
    """
    Raised when a WAV file cannot be parsed or scanned.

    None of the subclasses are retryable: a malformed or truncated file is
    a data problem, not a transient one.

    Attributes:
        message: Error message describing the format issue
        format_details: Optional dict with format details

    Examples:
        >>> raise WavFormatError("Invalid chunk", format_details={'chunk_id': 'LIST'})
    """

    error_code = 'WAV_FORMAT_ERROR'

    def __init__(self, message: str, format_details: dict = None):
        """
        Initialize WavFormatError.

        Args:
            message: Error message
            format_details: Optional dict with format details
        """
        super().__init__(message)
        self.format_details = format_details or {}


class BadContainerError(WavFormatError):
    """
    Raised when the RIFF container is garbled.

    This exception is raised when:
    - The 'RIFF' or 'WAVE' marker is missing
    - A 'data' chunk appears before any 'fmt ' chunk
    - The format chunk declares zero channels or a zero sample rate
    """

    error_code = 'BAD_CONTAINER'


class UnsupportedCodecError(WavFormatError):
    """
    Raised when the format chunk describes something other than 8/16/24-bit PCM.

    Examples:
        >>> raise UnsupportedCodecError(
        ...     "Unsupported audio format code: 3",
        ...     format_details={'format_code': 3}
        ... )
    """

    error_code = 'UNSUPPORTED_CODEC'


class UnexpectedEndError(WavFormatError):
    """
    Raised when the stream ends before a structurally required read completes.

    When raised from the defect scan, ``partial_result`` holds the events and
    peak computed before the truncation point. Those findings remain valid
    and should be reported rather than discarded.

    Attributes:
        expected: Number of bytes the read required (if known)
        received: Number of bytes actually available (if known)
        partial_result: ScanResult computed before truncation (scan only)
    """

    error_code = 'UNEXPECTED_END'

    def __init__(
        self,
        message: str,
        expected: int = None,
        received: int = None,
        partial_result=None
    ):
        """
        Initialize UnexpectedEndError.

        Args:
            message: Error message
            expected: Number of bytes requested (optional)
            received: Number of bytes received (optional)
            partial_result: Partial ScanResult (optional)
        """
        details = {}
        if expected is not None:
            details['expected'] = expected
        if received is not None:
            details['received'] = received
        super().__init__(message, format_details=details)
        self.expected = expected
        self.received = received
        self.partial_result = partial_result


class ConfigurationError(AudioDefectError):
    """
    Raised when detection configuration is invalid.

    This exception is raised when:
    - An environment variable cannot be parsed
    - Configuration parameters are out of valid range

    Attributes:
        message: Error message describing the configuration issue
        validation_errors: List of validation error messages

    Examples:
        >>> raise ConfigurationError(
        ...     "Invalid configuration",
        ...     validation_errors=["Hold threshold must be at least 1 sample"]
        ... )
    """

    def __init__(self, message: str, validation_errors: list = None):
        """
        Initialize ConfigurationError.

        Args:
            message: Error message
            validation_errors: List of validation error messages (optional)
        """
        super().__init__(message)
        self.validation_errors = validation_errors or []

    def __str__(self):
        """Return string representation with validation errors if available."""
        if self.validation_errors:
            errors_str = "; ".join(self.validation_errors)
            return f"{super().__str__()}: {errors_str}"
        return super().__str__()
