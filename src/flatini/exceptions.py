"""Custom exceptions for flatini."""

from __future__ import annotations


class FlatiniError(Exception):
    """Base exception for flatini operations."""


class ParseError(FlatiniError):
    """Malformed configuration text.

    Attributes:
        line: The offending raw line.
        lineno: 1-based line number, or None when unknown.
    """

    def __init__(self, message: str, *, line: str, lineno: int | None = None) -> None:
        location = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{location}{message}, {line}")
        self.line = line
        self.lineno = lineno


class DecodeError(FlatiniError):
    """Error while projecting a node tree onto a destination."""


class ScalarSyntaxError(DecodeError, ValueError):
    """Scalar text does not follow the target type's grammar."""


class ValueOverflowError(DecodeError):
    """Value parsed correctly but does not fit the destination's range."""


class ContainerConversionError(DecodeError):
    """A section or root node was used where a scalar was expected."""


class UnsupportedKeyTypeError(DecodeError):
    """Mapping destination whose key type is not string-like."""


class UnsupportedKindError(DecodeError):
    """Destination type outside the supported shapes."""


class NotAddressableError(DecodeError):
    """Destination cannot be populated in place."""


class EncodeError(FlatiniError):
    """Error while serializing a value to text."""


class UnsupportedRootError(EncodeError):
    """Dump root is neither a record nor a mapping."""


class UnsupportedElementError(EncodeError):
    """Sequence element type outside the scalar set."""


class UnsupportedValueError(EncodeError):
    """Value the text format cannot express."""


class NestingTooDeepError(DecodeError, EncodeError):
    """Containers nested deeper than the two-level format allows.

    Raised by both the decoder and the encoder.
    """
