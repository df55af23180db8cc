"""Human duration grammar (``10s``, ``1m0s``, ``1h2m3.5s``, ``300ms``)."""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal
from typing import Final

from flatini.exceptions import ScalarSyntaxError

_NANOSECOND: Final[int] = 1
_MICROSECOND: Final[int] = 1000 * _NANOSECOND
_MILLISECOND: Final[int] = 1000 * _MICROSECOND
_SECOND: Final[int] = 1000 * _MILLISECOND
_MINUTE: Final[int] = 60 * _SECOND
_HOUR: Final[int] = 60 * _MINUTE

_UNITS: Final[dict[str, int]] = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "µs": _MICROSECOND,  # micro sign
    "μs": _MICROSECOND,  # greek mu
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
}

# Two-letter units first so "ms" is not read as "m" followed by garbage.
_COMPONENT_RE = re.compile(
    r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)", re.ASCII
)
_MAX_NANOSECONDS: Final[int] = (1 << 63) - 1


def parse_duration(text: str) -> timedelta:
    """Parse a duration string into a timedelta.

    A duration is an optionally signed sequence of decimal numbers, each with
    an optional fraction and a mandatory unit suffix. ``"0"`` alone is also
    accepted. Precision below one microsecond is truncated toward zero.

    Args:
        text: Duration text, e.g. ``"1h30m"`` or ``"-1.5s"``.

    Returns:
        The equivalent timedelta.

    Raises:
        ScalarSyntaxError: If the text is not a valid duration or is out of
            the signed 64-bit nanosecond range.
    """
    rest = text
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]

    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ScalarSyntaxError(f"invalid duration: {text!r}")

    total = 0
    pos = 0
    while pos < len(rest):
        match = _COMPONENT_RE.match(rest, pos)
        if match is None:
            raise ScalarSyntaxError(f"invalid duration: {text!r}")
        number, unit = match.groups()
        total += int(Decimal(number) * _UNITS[unit])
        pos = match.end()

    if total > _MAX_NANOSECONDS:
        raise ScalarSyntaxError(f"invalid duration: {text!r}")

    nanoseconds = -total if negative else total
    return _from_nanoseconds(nanoseconds)


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the form accepted by :func:`parse_duration`.

    Zero is ``0s``. Durations under one second use the largest fitting unit
    of ``ns``, ``µs`` or ``ms``; longer ones use hours, minutes and seconds,
    always showing seconds, e.g. ``1m0s`` or ``2h0m0.5s``.
    """
    nanoseconds = _to_nanoseconds(value)
    sign = "-" if nanoseconds < 0 else ""
    magnitude = abs(nanoseconds)

    if magnitude == 0:
        return "0s"
    if magnitude < _MICROSECOND:
        return f"{sign}{magnitude}ns"
    if magnitude < _MILLISECOND:
        return f"{sign}{_decimal(magnitude, _MICROSECOND)}µs"
    if magnitude < _SECOND:
        return f"{sign}{_decimal(magnitude, _MILLISECOND)}ms"

    minutes_total, remainder = divmod(magnitude, _MINUTE)
    hours, minutes = divmod(minutes_total, 60)
    out = f"{_decimal(remainder, _SECOND)}s"
    if minutes_total:
        out = f"{minutes}m{out}"
    if hours:
        out = f"{hours}h{out}"
    return f"{sign}{out}"


def is_representable(value: timedelta) -> bool:
    """True if ``value`` fits the range :func:`parse_duration` accepts."""
    return abs(_to_nanoseconds(value)) <= _MAX_NANOSECONDS


def _decimal(value: int, unit: int) -> str:
    """Format value/unit with trailing fractional zeros trimmed."""
    whole, fraction = divmod(value, unit)
    if not fraction:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{fraction:0{digits}d}".rstrip("0")


def _to_nanoseconds(value: timedelta) -> int:
    return ((value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds) * 1000


def _from_nanoseconds(nanoseconds: int) -> timedelta:
    microseconds = abs(nanoseconds) // _MICROSECOND
    return timedelta(microseconds=-microseconds if nanoseconds < 0 else microseconds)
