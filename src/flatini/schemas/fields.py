"""Record field metadata model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class FieldSpec(BaseModel):
    """Resolved metadata of one record field.

    Attributes:
        attr: Python attribute name on the record.
        name: Key used in the text format.
        comments: Comment lines emitted before the field when dumping.
        excluded: True when the field takes part in neither decode nor dump.
        annotation: Resolved type hint of the field (a string when the
            annotation could not be resolved).
        init: False for dataclass fields that the constructor does not accept.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    attr: str
    name: str
    comments: tuple[str, ...] = ()
    excluded: bool = False
    annotation: Any = None
    init: bool = True
