"""Scalar text grammars shared by the accessors, decoder and encoder."""

from __future__ import annotations

import math
import re
from datetime import timedelta
from enum import Enum

from flatini.durations import format_duration
from flatini.exceptions import ScalarSyntaxError, ValueOverflowError
from flatini.types import FloatWidth, IntWidth

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_UINT_RE = re.compile(r"\d+", re.ASCII)
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_SPECIAL_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE | re.ASCII
)

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_FLOAT64 = FloatWidth(64)


def parse_int(text: str, width: IntWidth | None = None) -> int:
    """Parse a base-10 integer literal.

    Args:
        text: Literal with an optional sign (unsigned widths reject signs).
        width: Optional bit width to range-check against.

    Returns:
        The parsed integer.

    Raises:
        ScalarSyntaxError: If the text is not an integer literal.
        ValueOverflowError: If the value does not fit ``width``.
    """
    pattern = _UINT_RE if width is not None and not width.signed else _INT_RE
    if not pattern.fullmatch(text):
        raise ScalarSyntaxError(f"invalid integer syntax: {text!r}")
    value = int(text)
    if width is not None and not width.min_value <= value <= width.max_value:
        kind = "int" if width.signed else "uint"
        raise ValueOverflowError(f"{value} overflow {kind}{width.bits}")
    return value


def parse_float(text: str, width: FloatWidth | None = None) -> float:
    """Parse a decimal floating point literal (``inf``/``nan`` included).

    A finite literal that only fits as infinity, or exceeds ``width``, is an
    overflow.
    """
    special = _SPECIAL_FLOAT_RE.fullmatch(text) is not None
    if not special and not _FLOAT_RE.fullmatch(text):
        raise ScalarSyntaxError(f"invalid float syntax: {text!r}")
    value = float(text)
    if special:
        return value
    width = width or _FLOAT64
    if math.isinf(value) or abs(value) > width.max_value:
        raise ValueOverflowError(f"{text} overflow float{width.bits}")
    return value


def parse_bool(text: str) -> bool:
    """Parse one of the accepted boolean literals."""
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise ScalarSyntaxError(f"invalid bool syntax: {text!r}")


def is_scalar(value: object) -> bool:
    """Return True for values rendered as a single ``key = value`` line."""
    return isinstance(value, (bool, int, float, str, timedelta))


def format_scalar(value: bool | int | float | str | timedelta) -> str:
    """Render a scalar in the text form its parser accepts.

    Enum members are rendered by value, so ``Color.RED`` with value ``"red"``
    is written as ``red``.
    """
    if isinstance(value, Enum):
        return format_scalar(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, float):
        return repr(value)
    return str(value)
