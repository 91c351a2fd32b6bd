"""
Host Values

Conversions between the library's date, time and rational text and the
Python objects handed to callers.
"""

from datetime import date, datetime, time
from fractions import Fraction
from typing import Tuple

from ..errors import ValueParseError

DATE_FORMATS = ['%Y-%m-%d', '%Y:%m:%d', '%Y%m%d']
TIME_FORMATS = ['%H:%M:%S%z', '%H:%M:%S', '%H%M%S%z', '%H%M%S']


def parse_date(text: str) -> date:
    """
    Parse a metadata date.

    Args:
        text: Date such as ``2025-04-03``, ``2025:04:03`` or ``20250403``

    Returns:
        Parsed date

    Raises:
        ValueParseError: If no known format matches
    """
    text = text.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueParseError(f"Unrecognized date: {text!r}")


def parse_time(text: str) -> time:
    """
    Parse a metadata time, keeping any UTC offset as tzinfo.

    Raises:
        ValueParseError: If no known format matches
    """
    text = text.strip()
    for fmt in TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return parsed.timetz()
    raise ValueParseError(f"Unrecognized time: {text!r}")


def format_date(value: date) -> str:
    return value.strftime('%Y-%m-%d')


def format_time(value: time) -> str:
    """Render a time as ``HH:MM:SS+HH:MM``, treating naive times as UTC."""
    offset = value.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    sign = '-' if minutes < 0 else '+'
    hours, minutes = divmod(abs(minutes), 60)
    return f"{value.strftime('%H:%M:%S')}{sign}{hours:02d}:{minutes:02d}"


def to_fraction(pair: Tuple[int, int]) -> Fraction:
    """
    Build a Fraction from a ``(numerator, denominator)`` pair.

    Raises:
        ValueParseError: If the denominator is zero
    """
    numerator, denominator = pair
    if denominator == 0:
        raise ValueParseError(f"Rational with zero denominator: {numerator}/{denominator}")
    return Fraction(numerator, denominator)
