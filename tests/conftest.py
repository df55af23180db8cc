"""Test setup for flatini."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

SAMPLE_CONFIG = """
root1 = 1
root2 = me ss age
# comment
; comment
root 3 = true # comment
root4 = 10s ; comment

[section1]
Sec1 = 10.9
Sec2 = 1,2,3,4

[section2]
sec = message
sec2 = false
"""


@pytest.fixture
def sample_text() -> str:
    """Configuration text with root keys, comments and two sections."""
    return SAMPLE_CONFIG


@pytest.fixture
def sample_root(sample_text: str):
    """Node tree parsed from the sample configuration."""
    from flatini import load

    return load(sample_text)
