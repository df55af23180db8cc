"""Reduce type hints to the closed set of shapes the decoder supports."""

from __future__ import annotations

import collections.abc
import dataclasses
import types
from datetime import timedelta
from functools import lru_cache
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel

from flatini.exceptions import UnsupportedKeyTypeError, UnsupportedKindError
from flatini.schemas import ShapeKind, TypeShape
from flatini.types import FloatWidth, IntWidth

_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)
_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)


def type_name(hint: Any) -> str:
    """Readable name of a type hint for error messages."""
    if isinstance(hint, type) and not get_args(hint):
        return hint.__name__
    return repr(hint).replace("typing.", "")


def is_record_type(hint: Any) -> bool:
    """True for dataclass classes and pydantic model classes."""
    if not isinstance(hint, type) or get_origin(hint) is not None:
        return False
    return dataclasses.is_dataclass(hint) or issubclass(hint, BaseModel)


def is_record(value: Any) -> bool:
    """True for dataclass instances and pydantic model instances."""
    return is_record_type(type(value))


@lru_cache(maxsize=None)
def resolve_shape(hint: Any) -> TypeShape:
    """Resolve a type hint to its shape.

    Args:
        hint: A type or typing construct, e.g. ``int``, ``UInt8``,
            ``dict[str, list[int]]`` or a dataclass.

    Returns:
        The cached shape for the hint.

    Raises:
        UnsupportedKeyTypeError: For mappings whose key type is not a string.
        UnsupportedKindError: For hints outside the supported shapes.
    """
    if hint is Any or hint is object:
        return TypeShape(kind=ShapeKind.ANY, hint=hint)

    if isinstance(hint, str):
        raise UnsupportedKindError(f"can't map to unresolved annotation {hint!r}")

    supertype = getattr(hint, "__supertype__", None)
    if supertype is not None:
        return resolve_shape(supertype).model_copy(update={"hint": hint})

    origin = get_origin(hint)

    if origin is Annotated:
        return _resolve_annotated(hint)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(members) != 1:
            raise UnsupportedKindError(f"can't map to {type_name(hint)}")
        return resolve_shape(members[0])

    if origin in _MAPPING_ORIGINS or hint in _MAPPING_ORIGINS:
        key, value = get_args(hint) or (str, Any)
        if not _is_string_like(key):
            raise UnsupportedKeyTypeError(f"can't map to {type_name(hint)}")
        return TypeShape(kind=ShapeKind.MAPPING, hint=hint, item=value)

    if origin in _SEQUENCE_ORIGINS or hint in _SEQUENCE_ORIGINS:
        (item,) = get_args(hint) or (Any,)
        return TypeShape(kind=ShapeKind.SEQUENCE, hint=hint, item=item)

    if origin is not None:
        raise UnsupportedKindError(f"can't map to {type_name(hint)}")

    if hint is timedelta:
        return TypeShape(kind=ShapeKind.DURATION, hint=hint)
    if hint is bool:
        return TypeShape(kind=ShapeKind.BOOL, hint=hint)
    if hint is int:
        return TypeShape(kind=ShapeKind.INT, hint=hint)
    if hint is float:
        return TypeShape(kind=ShapeKind.FLOAT, hint=hint)
    if isinstance(hint, type) and issubclass(hint, str):
        return TypeShape(kind=ShapeKind.STRING, hint=hint)

    if is_record_type(hint):
        return TypeShape(kind=ShapeKind.RECORD, hint=hint, record_type=hint)

    raise UnsupportedKindError(f"can't map to {type_name(hint)}")


def _resolve_annotated(hint: Any) -> TypeShape:
    base, *extras = get_args(hint)
    shape = resolve_shape(base)
    for extra in extras:
        if isinstance(extra, IntWidth) and shape.kind is ShapeKind.INT:
            return shape.model_copy(update={"hint": hint, "int_width": extra})
        if isinstance(extra, FloatWidth) and shape.kind is ShapeKind.FLOAT:
            return shape.model_copy(update={"hint": hint, "float_width": extra})
    return shape


def _is_string_like(key: Any) -> bool:
    while getattr(key, "__supertype__", None) is not None:
        key = key.__supertype__
    return isinstance(key, type) and get_origin(key) is None and issubclass(key, str)
