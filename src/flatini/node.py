"""The node tree: the intermediate form between text and typed values."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ConfigDict

from flatini.config import LIST_SEPARATOR
from flatini.durations import parse_duration
from flatini.exceptions import ContainerConversionError, DecodeError
from flatini.scalars import parse_bool, parse_float, parse_int

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Node(BaseModel):
    """A leaf holding raw scalar text, or a container of named children.

    The root and every section are containers (``children`` is a dict, possibly
    empty); key/value entries are leaves (``children`` is None). Nodes are
    frozen once built.

    Attributes:
        data: Raw scalar text of a leaf.
        children: Child nodes by key, or None for a leaf.
    """

    model_config = ConfigDict(frozen=True)

    data: str = ""
    children: dict[str, Node] | None = None

    # Navigation

    def get(self, *path: str) -> Node:
        """Follow child keys; a missing step yields the empty node."""
        node = self
        for key in path:
            if node.children is None:
                return _EMPTY
            node = node.children.get(key, _EMPTY)
        return node

    def is_empty(self) -> bool:
        """True only for a missing node (no text and no children)."""
        return self.data == "" and self.children is None

    def is_container(self) -> bool:
        return self.children is not None

    def keys(self) -> list[str]:
        return list(self.children or {})

    def items(self) -> list[tuple[str, Node]]:
        return list((self.children or {}).items())

    def __contains__(self, key: object) -> bool:
        return self.children is not None and key in self.children

    def __len__(self) -> int:
        return len(self.children or {})

    # Accessors

    def value(self) -> str:
        """Return the raw text of a leaf.

        Raises:
            ContainerConversionError: If the node is a section or the root.
        """
        if self.children is not None:
            raise ContainerConversionError("can't convert section to scalar")
        return self.data

    def as_int(self) -> int:
        return parse_int(self.value())

    def as_float(self) -> float:
        return parse_float(self.value())

    def as_bool(self) -> bool:
        return parse_bool(self.value())

    def as_duration(self) -> timedelta:
        return parse_duration(self.value())

    def values(self) -> list[str]:
        """Split a leaf on commas (surrounding whitespace ignored).

        Empty text yields an empty list rather than an error.

        Raises:
            ContainerConversionError: If the node is a section or the root.
        """
        if self.children is not None:
            raise ContainerConversionError("can't convert section to list")
        if self.data == "":
            return []
        return LIST_SEPARATOR.split(self.data)

    def as_ints(self) -> list[int]:
        return [parse_int(item) for item in self.values()]

    def as_floats(self) -> list[float]:
        return [parse_float(item) for item in self.values()]

    # Accessors with a fallback

    def must_value(self, default: str) -> str:
        return self._must(self.value, default)

    def must_int(self, default: int) -> int:
        return self._must(self.as_int, default)

    def must_float(self, default: float) -> float:
        return self._must(self.as_float, default)

    def must_bool(self, default: bool) -> bool:
        return self._must(self.as_bool, default)

    def must_duration(self, default: timedelta) -> timedelta:
        return self._must(self.as_duration, default)

    def must_values(self, default: list[str]) -> list[str]:
        return self._must(self.values, default)

    def must_ints(self, default: list[int]) -> list[int]:
        return self._must(self.as_ints, default)

    def must_floats(self, default: list[float]) -> list[float]:
        return self._must(self.as_floats, default)

    def _must(self, accessor: Callable[[], T], default: T) -> T:
        try:
            return accessor()
        except DecodeError as exc:
            logger.debug("Falling back to default %r: %s", default, exc)
            return default

    # Decoding

    def map_to(self, destination: Any, hint: Any = None) -> None:
        """Populate a mutable destination from this node in place.

        Args:
            destination: A dataclass or pydantic model instance, a dict or a
                list.
            hint: Optional type hint overriding the destination's own type,
                e.g. ``dict[str, int]``.

        Raises:
            DecodeError: If the destination is immutable, its type is not
                supported, or a value cannot be converted.
        """
        from flatini.decoder import map_into

        map_into(self, destination, hint)

    def decode(self, hint: Any) -> Any:
        """Build a new value of type ``hint`` from this node."""
        from flatini.decoder import decode_node

        return decode_node(self, hint)


_EMPTY = Node()
