"""
Amplitude constants and dBFS conversion.

Decoded samples live in the signed 32-bit range regardless of source bit
depth, so a single full-scale reference serves 8, 16 and 24-bit files.
"""

import math

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# Full-scale reference used for dBFS conversion
INT32_MAX_ABS = float(INT32_MAX)

# Positive clipping starts within the top 1/32768 of full scale
CLIP_POSITIVE_THRESHOLD = 0x7FFF0000


def amplitude_to_dbfs(amplitude: int) -> float:
    """
    Converts a decoded amplitude to decibels relative to full scale.

    Args:
        amplitude: Signed 32-bit-range amplitude (sign is ignored)

    Returns:
        Level in dBFS. Zero amplitude yields -inf.
    """
    magnitude = abs(amplitude)
    if magnitude == 0:
        return -math.inf
    return 20 * math.log10(magnitude / INT32_MAX_ABS)


def is_clipped(amplitude: int) -> bool:
    """Returns True for the most negative value or anything near positive full scale."""
    return amplitude == INT32_MIN or amplitude >= CLIP_POSITIVE_THRESHOLD
