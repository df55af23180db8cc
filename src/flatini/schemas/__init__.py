"""Shared schemas for flatini."""

from flatini.schemas.fields import FieldSpec
from flatini.schemas.shapes import ShapeKind, TypeShape

__all__ = ["FieldSpec", "ShapeKind", "TypeShape"]
