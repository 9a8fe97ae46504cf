"""
Number formatting for reports and labels.
"""

import math


def format_decimal(value: float, max_fraction_digits: int = 3) -> str:
    """
    Formats a number with digit grouping and at most N fraction digits.

    Trailing zeros are dropped, so ``-12.500`` becomes ``-12.5`` and
    ``48000.0`` becomes ``48,000``.

    Args:
        value: Number to format
        max_fraction_digits: Maximum digits after the decimal point

    Returns:
        Formatted string. Non-finite values render as '-inf', 'inf' or 'nan'.
    """
    if value is None:
        return ''
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)

    text = f'{value:,.{max_fraction_digits}f}'
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text in ('-0', ''):
        text = '0'
    return text
