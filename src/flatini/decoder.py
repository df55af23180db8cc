"""Project a node tree onto typed destinations."""

from __future__ import annotations

import collections.abc
import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel

from flatini.config import MAX_NESTING_DEPTH
from flatini.durations import parse_duration
from flatini.exceptions import (
    DecodeError,
    NestingTooDeepError,
    NotAddressableError,
    ScalarSyntaxError,
)
from flatini.fields import record_fields
from flatini.node import Node
from flatini.scalars import parse_bool, parse_float, parse_int
from flatini.schemas import ShapeKind, TypeShape
from flatini.shapes import is_record, resolve_shape, type_name

logger = logging.getLogger(__name__)


def decode_node(node: Node, hint: Any) -> Any:
    """Build a new value of type ``hint`` from a node.

    Args:
        node: Source node (root, section or leaf).
        hint: Destination type, e.g. ``int``, ``list[float]`` or a dataclass.

    Returns:
        The decoded value.

    Raises:
        DecodeError: If the type is unsupported or a value does not convert.
    """
    return _decode(node, resolve_shape(hint), 0)


def map_into(node: Node, destination: Any, hint: Any = None) -> None:
    """Populate ``destination`` from ``node`` in place.

    Records keep fields that have no counterpart in the node; dicts keep keys
    that have no counterpart; lists are replaced by the decoded items.

    Raises:
        NotAddressableError: If the destination cannot be changed in place.
        DecodeError: If the type is unsupported or a value does not convert.
    """
    shape = resolve_shape(hint if hint is not None else _hint_for(destination))
    logger.debug("Decoding into %s", type_name(shape.hint))

    if shape.kind is ShapeKind.RECORD and isinstance(destination, shape.record_type):
        _decode_record_into(node, destination, shape, 0)
    elif shape.kind is ShapeKind.MAPPING and isinstance(
        destination, collections.abc.MutableMapping
    ):
        _decode_mapping_into(node, destination, shape, 0)
    elif shape.kind is ShapeKind.SEQUENCE and isinstance(
        destination, collections.abc.MutableSequence
    ):
        _decode_sequence_into(node, destination, shape, 0)
    else:
        raise NotAddressableError(
            f"can't map {type_name(shape.hint)} into {type(destination).__name__} in place"
        )


def _hint_for(destination: Any) -> Any:
    if is_record(destination):
        return type(destination)
    if isinstance(destination, collections.abc.MutableMapping):
        return dict[str, Any]
    if isinstance(destination, collections.abc.MutableSequence):
        return list[Any]
    raise NotAddressableError(
        f"can't map to non-mutable value of type {type(destination).__name__}"
    )


def _decode(node: Node, shape: TypeShape, depth: int) -> Any:
    kind = shape.kind
    if kind is ShapeKind.DURATION:
        return parse_duration(node.value())
    if kind is ShapeKind.BOOL:
        return parse_bool(node.value())
    if kind is ShapeKind.INT:
        return parse_int(node.value(), shape.int_width)
    if kind is ShapeKind.FLOAT:
        return parse_float(node.value(), shape.float_width)
    if kind is ShapeKind.STRING:
        text = node.value()
        if shape.hint is str:
            return text
        try:
            return shape.hint(text)
        except ValueError as exc:
            raise ScalarSyntaxError(
                f"invalid {type_name(shape.hint)} value: {text!r}"
            ) from exc
    if kind is ShapeKind.ANY:
        return node
    if kind is ShapeKind.MAPPING:
        mapping: dict[str, Any] = {}
        _decode_mapping_into(node, mapping, shape, depth)
        return mapping
    if kind is ShapeKind.SEQUENCE:
        items: list[Any] = []
        _decode_sequence_into(node, items, shape, depth)
        return items
    return _build_record(node, shape, depth)


def _check_depth(shape: TypeShape, depth: int) -> None:
    if depth > MAX_NESTING_DEPTH:
        raise NestingTooDeepError(
            f"can't map {type_name(shape.hint)}: containers nested more than "
            f"{MAX_NESTING_DEPTH} levels"
        )


def _decode_mapping_into(
    node: Node,
    target: collections.abc.MutableMapping[str, Any],
    shape: TypeShape,
    depth: int,
) -> None:
    _check_depth(shape, depth)
    if node.children is None:
        return
    item_shape = resolve_shape(shape.item)
    decoded = {
        key: _decode(child, item_shape, depth + 1)
        for key, child in node.children.items()
    }
    target.update(decoded)


def _decode_sequence_into(
    node: Node,
    target: collections.abc.MutableSequence[Any],
    shape: TypeShape,
    depth: int,
) -> None:
    tokens = node.values()
    if not tokens:
        return
    item_shape = resolve_shape(shape.item)
    target[:] = [_decode(Node(data=token), item_shape, depth + 1) for token in tokens]


def _build_record(node: Node, shape: TypeShape, depth: int) -> Any:
    _check_depth(shape, depth)
    record_type = shape.record_type
    init_values: dict[str, Any] = {}
    late_values: dict[str, Any] = {}

    for spec in record_fields(record_type):
        if spec.excluded:
            continue
        if spec.name not in node:
            continue
        child = node.get(spec.name)
        field_shape = resolve_shape(spec.annotation)
        if child.is_empty() and not _has_empty_text_form(field_shape):
            continue
        value = _decode(child, field_shape, depth + 1)
        if spec.init:
            init_values[spec.attr] = value
        else:
            late_values[spec.attr] = value

    if issubclass(record_type, BaseModel):
        return record_type.model_construct(**init_values)

    try:
        record = record_type(**init_values)
    except TypeError as exc:
        raise DecodeError(f"can't construct {record_type.__name__}: {exc}") from exc
    for attr, value in late_values.items():
        object.__setattr__(record, attr, value)
    return record


def _has_empty_text_form(shape: TypeShape) -> bool:
    """True when an empty ``key =`` line is the encoding of the zero value."""
    if shape.kind is ShapeKind.SEQUENCE:
        return True
    if shape.kind is not ShapeKind.STRING:
        return False
    hint = shape.hint
    return not (isinstance(hint, type) and issubclass(hint, Enum))


def _decode_record_into(node: Node, record: Any, shape: TypeShape, depth: int) -> None:
    _check_depth(shape, depth)
    if _is_frozen(record):
        raise NotAddressableError(f"can't map into frozen {type(record).__name__}")

    for spec in record_fields(type(record)):
        if spec.excluded:
            continue
        child = node.get(spec.name)
        if child.is_empty():
            continue

        field_shape = resolve_shape(spec.annotation)
        current = getattr(record, spec.attr, None)
        if (
            field_shape.kind is ShapeKind.RECORD
            and is_record(current)
            and not _is_frozen(current)
        ):
            _decode_record_into(child, current, field_shape, depth + 1)
        elif field_shape.kind is ShapeKind.MAPPING and isinstance(
            current, collections.abc.MutableMapping
        ):
            _decode_mapping_into(child, current, field_shape, depth + 1)
        else:
            setattr(record, spec.attr, _decode(child, field_shape, depth + 1))


def _is_frozen(record: Any) -> bool:
    if isinstance(record, BaseModel):
        return bool(record.model_config.get("frozen", False))
    params = getattr(type(record), "__dataclass_params__", None)
    return bool(params is not None and params.frozen)
