"""Serialize records and dicts to configuration text."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Iterator, TextIO

from flatini.config import (
    COMMENT_LINE_PREFIX,
    LIST_JOINER,
    MAX_NESTING_DEPTH,
    SECTION_CLOSE,
    SECTION_OPEN,
)
from flatini.durations import is_representable
from flatini.exceptions import (
    NestingTooDeepError,
    UnsupportedElementError,
    UnsupportedRootError,
    UnsupportedValueError,
)
from flatini.fields import record_fields
from flatini.scalars import format_scalar, is_scalar
from flatini.shapes import is_record, type_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Item:
    """One named value of a container, in output order."""

    name: str
    value: Any
    comments: tuple[str, ...] = ()


def dump(source: Any) -> str:
    """Serialize a record or dict to configuration text.

    Scalars and lists come first in each container, followed by one
    ``[section]`` per nested record or dict. Field comments are written as
    ``; comment`` lines above the field.

    Args:
        source: A dataclass instance, pydantic model instance or ``dict``.

    Returns:
        The configuration text.

    Raises:
        UnsupportedRootError: If ``source`` is not a record or dict.
        UnsupportedElementError: If a list holds a non-scalar element.
        UnsupportedValueError: If a value has no text representation.
        NestingTooDeepError: If a section contains another container.
    """
    buffer = io.StringIO()
    write(buffer, source)
    return buffer.getvalue()


def write(stream: TextIO, source: Any) -> None:
    """Serialize a record or dict to a text stream.

    Output is built in memory first, so nothing is written when the source
    cannot be encoded.
    """
    if not (is_record(source) or isinstance(source, dict)):
        raise UnsupportedRootError(
            f"dump only support dict and record, got {type(source).__name__}"
        )
    lines: list[str] = []
    _write_container(lines, source, 1)
    stream.writelines(f"{line}\n" for line in lines)
    logger.debug("Dumped %s as %d lines", type(source).__name__, len(lines))


def _write_container(lines: list[str], container: Any, depth: int) -> None:
    if depth > MAX_NESTING_DEPTH:
        raise NestingTooDeepError(
            f"not support nested dict or record more than {MAX_NESTING_DEPTH} level"
        )

    items = list(_items_of(container))
    sections: list[_Item] = []
    start = len(lines)

    for item in items:
        if _is_container(item.value):
            sections.append(item)
            continue
        _write_comments(lines, item)
        lines.append(f"{item.name} = {_format_value(item.name, item.value)}")

    for item in sections:
        if len(lines) > start:
            lines.append("")
        _write_comments(lines, item)
        lines.append(f"{SECTION_OPEN}{item.name}{SECTION_CLOSE}")
        _write_container(lines, item.value, depth + 1)


def _items_of(container: Any) -> Iterator[_Item]:
    if isinstance(container, dict):
        for key, value in container.items():
            if not isinstance(key, str):
                raise UnsupportedValueError(
                    f"dict keys must be str, got {type(key).__name__}"
                )
            if value is not None:
                yield _Item(key, value)
        return

    for spec in record_fields(type(container)):
        if spec.excluded:
            continue
        value = getattr(container, spec.attr)
        if value is not None:
            yield _Item(spec.name, value, spec.comments)


def _is_container(value: Any) -> bool:
    return is_record(value) or isinstance(value, dict)


def _write_comments(lines: list[str], item: _Item) -> None:
    lines.extend(f"{COMMENT_LINE_PREFIX} {comment}" for comment in item.comments)


def _format_value(name: str, value: Any) -> str:
    if is_scalar(value):
        return _format_scalar(name, value)
    if isinstance(value, (list, tuple)):
        for element in value:
            if not is_scalar(element):
                raise UnsupportedElementError(
                    f"not support {type_name(type(element))} in list {name!r}"
                )
        return LIST_JOINER.join(_format_scalar(name, element) for element in value)
    raise UnsupportedValueError(f"not support {type_name(type(value))} for {name!r}")


def _format_scalar(name: str, value: Any) -> str:
    if isinstance(value, timedelta) and not is_representable(value):
        raise UnsupportedValueError(
            f"duration {value} for {name!r} is out of the int64 nanosecond range"
        )
    return format_scalar(value)
