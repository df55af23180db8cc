"""Field metadata for records: tag parsing and per-type resolution."""

from __future__ import annotations

import dataclasses
from functools import lru_cache
from typing import Annotated, Any, Iterable, get_type_hints

from pydantic import BaseModel

from flatini.config import (
    EXCLUDE_MARKER,
    TAG_COMMENT_SEPARATOR,
    TAG_KEY,
    TAG_NAME_SEPARATOR,
)
from flatini.exceptions import UnsupportedKindError
from flatini.schemas import FieldSpec


def parse_tag(tag: str) -> tuple[str, tuple[str, ...]]:
    """Split a field tag into its name and comment lines.

    The tag format is ``"name, comment one; comment two"``: the name ends at
    the first comma, and the rest is a semicolon-separated list of comments.

    Args:
        tag: Raw tag text. An empty name means "use the attribute name".

    Returns:
        Tuple of (name, comments).
    """
    parts = TAG_NAME_SEPARATOR.split(tag.strip(), maxsplit=1)
    if len(parts) == 1:
        return parts[0], ()
    return parts[0], tuple(TAG_COMMENT_SEPARATOR.split(parts[1]))


def ini_field(
    tag: str | None = None,
    *,
    name: str | None = None,
    comments: Iterable[str] = (),
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field with format metadata.

    Either pass a tag string (``ini_field("r1, root item 1")``) or the name
    and comments separately (``ini_field(name="r1", comments=["root item 1"])``).
    Remaining keyword arguments go to :func:`dataclasses.field`.
    """
    if tag is not None:
        parsed = parse_tag(tag)
    else:
        parsed = (name or "", tuple(comments))
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = parsed
    return dataclasses.field(metadata=metadata, **kwargs)


@lru_cache(maxsize=None)
def record_fields(record_type: type) -> tuple[FieldSpec, ...]:
    """Resolve the field metadata of a dataclass or pydantic model once.

    Raises:
        UnsupportedKindError: If ``record_type`` is not a record class.
    """
    if dataclasses.is_dataclass(record_type):
        return tuple(_dataclass_fields(record_type))
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return tuple(_model_fields(record_type))
    raise UnsupportedKindError(f"{record_type!r} is not a record type")


def _dataclass_fields(record_type: type) -> Iterable[FieldSpec]:
    try:
        hints = get_type_hints(record_type, include_extras=True)
    except NameError:
        # Classes defined in a local scope under postponed evaluation.
        hints = {}

    for field in dataclasses.fields(record_type):
        raw = field.metadata.get(TAG_KEY, "")
        name, comments = parse_tag(raw) if isinstance(raw, str) else raw
        yield _spec(
            attr=field.name,
            name=name,
            comments=comments,
            annotation=hints.get(field.name, field.type),
            init=field.init,
        )


def _model_fields(record_type: type[BaseModel]) -> Iterable[FieldSpec]:
    for attr, info in record_type.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        tag = extra.get(TAG_KEY)
        name, comments = parse_tag(tag) if isinstance(tag, str) else ("", ())
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        yield _spec(
            attr=attr,
            name=name or info.alias or "",
            comments=comments,
            annotation=annotation,
            excluded=info.exclude is True,
        )


def _spec(
    *,
    attr: str,
    name: str,
    comments: tuple[str, ...],
    annotation: Any,
    excluded: bool = False,
    init: bool = True,
) -> FieldSpec:
    name = name or attr
    return FieldSpec(
        attr=attr,
        name=name,
        comments=tuple(comments),
        excluded=excluded or name == EXCLUDE_MARKER or attr.startswith("_"),
        annotation=annotation,
        init=init,
    )
