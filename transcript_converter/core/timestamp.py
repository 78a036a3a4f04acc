"""Timestamp parsing and formatting.

WHY: Every input format carries time as text ("00:00:06,210", "0:30",
"01:02:03.456") or as a number. The parsers need one strict grammar that
turns all of them into float seconds, and consumers need a stable way to
render seconds back into a human-readable clock string.

HOW: parse_timestamp() matches a single regex, splits the clock part on
colons, and reads the fraction as milliseconds. format_timestamp() works in
whole milliseconds so rounding carries into the seconds field. A
TimestampFormatter singleton lets callers swap in their own renderer.

RULES:
- Accepted: [HH:][MM:]SS[(.|,)fff]; more than three clock fields is an error
- The fraction is a count of milliseconds: ",780" → 0.780, ".5" → 0.005
- Numbers (int/float, not bool) are already seconds and pass through
- NaN results are rejected
- Default rendering: HH:MM:SS.fff, hours unbounded
"""

from __future__ import annotations

import math
import re
from typing import Callable, Optional, Union

from transcript_converter.core.errors import GrammarError

# Clock part (colon-separated digit fields) with an optional fraction.
# The fraction may be empty ("12." / "12,") which reads as zero.
_TIMESTAMP_RE = re.compile(r"^(?P<time>\d+(?::\d+)*)(?:[,.](?P<ms>\d*))?$")

# HH:MM:SS is the longest clock the grammar accepts.
_MAX_TIME_FIELDS = 3


def parse_timestamp(value: Union[str, int, float]) -> float:
    """Parse a timestamp string (or pass through a number) into seconds.

    Args:
        value: Timestamp text such as ``"00:00:06,210"`` or a number of
               seconds.

    Returns:
        The timestamp in seconds.

    Raises:
        TypeError: If value is neither a string nor a number.
        GrammarError: If the string does not match the grammar, has more
                      than three clock fields, or the result is NaN.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise TypeError(
            "Cannot parse timestamp of type {}".format(type(value).__name__)
        )

    if not isinstance(value, str):
        if math.isnan(value):
            raise GrammarError("Timestamp value is NaN")
        return value

    match = _TIMESTAMP_RE.match(value.strip())
    if match is None:
        raise GrammarError("Invalid timestamp string: {!r}".format(value))

    fields = [int(part) for part in match.group("time").split(":")]
    if len(fields) > _MAX_TIME_FIELDS:
        raise GrammarError(
            "Too many time fields in timestamp {!r} (at most {})".format(
                value, _MAX_TIME_FIELDS
            )
        )

    timestamp = 0
    for part in fields:
        timestamp = timestamp * 60 + part

    ms_text = match.group("ms")
    ms = int(ms_text) if ms_text else 0
    if ms != 0:
        timestamp += ms / 1000

    return timestamp


def format_timestamp(timestamp: float) -> str:
    """Render seconds as ``HH:MM:SS.fff``.

    Milliseconds are rounded to the nearest integer; a rounding carry
    (e.g. 1.9996 → 2.000) moves into the seconds field instead of
    producing ``.1000``.
    """
    total_ms = int(round(timestamp * 1000))
    total_seconds, millis = divmod(total_ms, 1000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return "{:02d}:{:02d}:{:02d}.{:03d}".format(hours, minutes, seconds, millis)


class TimestampFormatter:
    """Process-wide timestamp renderer with an optional custom override.

    WHY: Some consumers want "1:02:03" or frame counts instead of
    HH:MM:SS.fff. Registering a formatter once changes every
    ``Segment.*_formatted`` value produced afterwards.

    RULES:
    - Only one custom formatter is active at a time; registering replaces it
    - unregister_custom_formatter() restores the default rendering
    - Shared global state: do not switch formatters while another thread
      is converting
    """

    def __init__(self) -> None:
        self._custom_formatter: Optional[Callable[[float], str]] = None

    def register_custom_formatter(self, formatter: Callable[[float], str]) -> None:
        if not callable(formatter):
            raise TypeError("Custom timestamp formatter must be callable")
        self._custom_formatter = formatter

    def unregister_custom_formatter(self) -> None:
        self._custom_formatter = None

    def format(self, timestamp: float) -> str:
        if self._custom_formatter is not None:
            return self._custom_formatter(timestamp)
        return format_timestamp(timestamp)


timestamp_formatter = TimestampFormatter()
