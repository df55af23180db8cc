"""Read configuration text into a node tree."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Any, Iterable

from flatini.config import (
    COMMENT_PREFIXES,
    DEFAULT_ENCODING,
    INLINE_COMMENT_CHARS,
    KEY_VALUE_SEPARATOR,
    SECTION_CLOSE,
    SECTION_OPEN,
)
from flatini.exceptions import ParseError
from flatini.node import Node

logger = logging.getLogger(__name__)


def read(lines: Iterable[str]) -> Node:
    """Build a node tree from configuration lines.

    Grammar, applied to each line after trimming whitespace:
    - blank lines and lines starting with ``#`` or ``;`` are ignored
    - ``[name]`` starts a section at root level (sections never nest)
    - ``key = value`` stores a leaf in the current section, or in the root
      before the first section; the value is cut at the first ``;`` or ``#``

    A repeated section replaces the earlier one; a repeated key replaces the
    earlier value.

    Args:
        lines: Lines of text, with or without trailing newlines.

    Returns:
        The root node.

    Raises:
        ParseError: On an unterminated section header or a line without ``=``.
    """
    root: dict[str, Node | dict[str, Node]] = {}
    section: dict[str, Node] | None = None
    entry_count = 0

    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        if line.startswith(SECTION_OPEN):
            if len(line) < 2 or not line.endswith(SECTION_CLOSE):
                raise ParseError(
                    f"{SECTION_OPEN} should match with {SECTION_CLOSE}",
                    line=raw.rstrip("\r\n"),
                    lineno=lineno,
                )
            name = line[1:-1].strip()
            if name in root:
                logger.debug("Section %r redeclared on line %d", name, lineno)
            section = {}
            root[name] = section
            continue

        key, sep, value = line.partition(KEY_VALUE_SEPARATOR)
        if not sep:
            raise ParseError(
                "only support key = value",
                line=raw.rstrip("\r\n"),
                lineno=lineno,
            )
        receiver = root if section is None else section
        receiver[key.strip()] = Node(data=_strip_inline_comment(value).strip())
        entry_count += 1

    children = {
        name: Node(children=entry) if isinstance(entry, dict) else entry
        for name, entry in root.items()
    }
    logger.debug(
        "Read %d root children and %d entries", len(children), entry_count
    )
    return Node(children=children)


def _strip_inline_comment(value: str) -> str:
    cut = min(
        (index for index in map(value.find, INLINE_COMMENT_CHARS) if index != -1),
        default=-1,
    )
    return value if cut == -1 else value[:cut]


def load(text: str) -> Node:
    """Parse configuration text into a node tree."""
    return read(text.splitlines())


def load_file(path: str | PathLike[str]) -> Node:
    """Parse a UTF-8 configuration file into a node tree.

    Raises:
        OSError: If the file cannot be opened or read.
        ParseError: If the content is malformed.
    """
    file_path = Path(path)
    logger.debug("Loading configuration from %s", file_path)
    with file_path.open("r", encoding=DEFAULT_ENCODING) as handle:
        return read(handle)


def load_into(text: str, destination: Any, hint: Any = None) -> None:
    """Parse text and decode it into ``destination`` in place."""
    load(text).map_to(destination, hint)


def load_file_into(path: str | PathLike[str], destination: Any, hint: Any = None) -> None:
    """Parse a file and decode it into ``destination`` in place."""
    load_file(path).map_to(destination, hint)
