"""Format constants for flatini."""

from __future__ import annotations

import re
from typing import Final

DEFAULT_ENCODING: Final[str] = "utf-8"

# Full-line comment markers (first non-blank character).
COMMENT_PREFIXES: Final[tuple[str, ...]] = ("#", ";")
# A value is cut at the first of these characters.
INLINE_COMMENT_CHARS: Final[str] = ";#"

SECTION_OPEN: Final[str] = "["
SECTION_CLOSE: Final[str] = "]"
KEY_VALUE_SEPARATOR: Final[str] = "="

LIST_SEPARATOR: Final[re.Pattern[str]] = re.compile(r"\s*,\s*")
LIST_JOINER: Final[str] = ", "

TAG_KEY: Final[str] = "ini"
TAG_NAME_SEPARATOR: Final[re.Pattern[str]] = re.compile(r"\s*,\s*")
TAG_COMMENT_SEPARATOR: Final[re.Pattern[str]] = re.compile(r"\s*;\s*")
EXCLUDE_MARKER: Final[str] = "-"
COMMENT_LINE_PREFIX: Final[str] = ";"

# Root container plus one level of sections.
MAX_NESTING_DEPTH: Final[int] = 2
