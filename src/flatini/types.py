"""Sized numeric annotations.

Python numbers carry no bit width, so destinations that need range checks
declare one with ``Annotated``::

    @dataclass
    class Limits:
        retries: UInt8 = 3
        ratio: Float32 = 0.5
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated


@dataclass(frozen=True)
class IntWidth:
    """Bit width of an integer destination."""

    bits: int
    signed: bool = True

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


@dataclass(frozen=True)
class FloatWidth:
    """Bit width of a floating point destination (32 or 64)."""

    bits: int

    @property
    def max_value(self) -> float:
        if self.bits == 32:
            return 3.4028234663852886e38
        return 1.7976931348623157e308


Int8 = Annotated[int, IntWidth(8)]
Int16 = Annotated[int, IntWidth(16)]
Int32 = Annotated[int, IntWidth(32)]
Int64 = Annotated[int, IntWidth(64)]

UInt = Annotated[int, IntWidth(64, signed=False)]
UInt8 = Annotated[int, IntWidth(8, signed=False)]
UInt16 = Annotated[int, IntWidth(16, signed=False)]
UInt32 = Annotated[int, IntWidth(32, signed=False)]
UInt64 = Annotated[int, IntWidth(64, signed=False)]

Float32 = Annotated[float, FloatWidth(32)]
Float64 = Annotated[float, FloatWidth(64)]
