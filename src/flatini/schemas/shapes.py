"""Type shape model used by the decoder dispatch."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from flatini.types import FloatWidth, IntWidth


class ShapeKind(str, Enum):
    """Closed set of destination shapes."""

    DURATION = "duration"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    RECORD = "record"
    ANY = "any"


class TypeShape(BaseModel):
    """A type hint reduced to its shape.

    Attributes:
        kind: Which decoder branch handles the type.
        hint: The original type hint.
        int_width: Declared width for integer destinations.
        float_width: Declared width for floating point destinations.
        item: Element hint for sequences, value hint for mappings.
        record_type: The dataclass or pydantic model class for records.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ShapeKind
    hint: Any = None
    int_width: IntWidth | None = None
    float_width: FloatWidth | None = None
    item: Any = None
    record_type: Any = None

    @property
    def is_container(self) -> bool:
        return self.kind in (ShapeKind.MAPPING, ShapeKind.RECORD)
