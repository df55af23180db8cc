"""Tests for dumping records and dicts to text."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import timedelta

import pytest
from pydantic import BaseModel, Field

from flatini import (
    NestingTooDeepError,
    UnsupportedElementError,
    UnsupportedRootError,
    UnsupportedValueError,
    dump,
    ini_field,
    load,
    write,
)


@dataclass
class Commented:
    a: int = ini_field("a, comment", default=0)
    b: int = ini_field("b, comment1; comment2", default=0)


@dataclass
class I1:
    A: int = 0
    B: float = 0.0


@dataclass
class I2:
    A: str = ""
    B: list[str] = field(default_factory=list)


@dataclass
class Example:
    R1: int = ini_field("r1, root item 1", default=0)
    R2: str = ""
    _r3: float = 0.0
    R4: int = ini_field("-", default=0)
    R5: timedelta = timedelta(0)
    S1: I1 = field(default_factory=I1)
    S2: I2 = ini_field("section2", default_factory=I2)


@dataclass
class SectionFirst:
    S1: I1 = ini_field("S1, about s1", default_factory=I1)
    R1: int = 0
    R2: list[int] = field(default_factory=list)


@dataclass
class OnlySections:
    S1: I1 = field(default_factory=I1)
    S2: I1 = field(default_factory=I1)


@dataclass
class Inner:
    deep: I1 = field(default_factory=I1)


@dataclass
class TooDeep:
    section: Inner = field(default_factory=Inner)


@dataclass
class Flags:
    on: bool = True
    off: bool = False
    bits: list[bool] = field(default_factory=lambda: [True, False])
    maybe: int | None = None


class ModelWithSection(BaseModel):
    name: str = "svc"
    hidden: str = Field(default="x", exclude=True)
    limits: dict[str, int] = Field(
        default_factory=lambda: {"cpu": 2},
        json_schema_extra={"ini": "limits, resource caps"},
    )


EXAMPLE_DUMP = """\
; root item 1
r1 = 1
R2 = test
R5 = 1m0s

[S1]
A = 10
B = 20.1

[section2]
A = hello
B = Tim, Tom
"""


def _example() -> Example:
    return Example(
        R1=1,
        R2="test",
        _r3=1.23,
        R4=10,
        R5=timedelta(minutes=1),
        S1=I1(A=10, B=20.1),
        S2=I2(A="hello", B=["Tim", "Tom"]),
    )


class TestDumpRecords:
    """Tests for dumping dataclasses and models."""

    def test_comments(self) -> None:
        """Tag comments precede their field."""
        assert dump(Commented()) == "; comment\na = 0\n; comment1\n; comment2\nb = 0\n"

    def test_example_layout(self) -> None:
        """Scalars, then one section per nested record, blank-line separated."""
        assert dump(_example()) == EXAMPLE_DUMP

    def test_private_and_excluded_fields_are_hidden(self) -> None:
        """'_' fields and '-' tags never appear."""
        text = dump(_example())
        assert "_r3" not in text
        assert "R4" not in text
        assert "1.23" not in text

    def test_scalars_before_sections(self) -> None:
        """Scalar fields declared after a section are written first."""
        text = dump(SectionFirst(S1=I1(A=1), R1=7, R2=[1, 2]))
        assert text == (
            "R1 = 7\n"
            "R2 = 1, 2\n"
            "\n"
            "; about s1\n"
            "[S1]\n"
            "A = 1\n"
            "B = 0.0\n"
        )

    def test_no_leading_blank_line(self) -> None:
        """A container with only sections starts with the first header."""
        text = dump(OnlySections())
        assert text.startswith("[S1]\n")
        assert "\n\n[S2]\n" in text

    def test_booleans_and_none(self) -> None:
        """Booleans are lowercase and None fields are skipped."""
        assert dump(Flags()) == "on = true\noff = false\nbits = true, false\n"

    def test_pydantic_model(self) -> None:
        """Models dump with tags and exclude honoured."""
        assert dump(ModelWithSection()) == (
            "name = svc\n"
            "\n"
            "; resource caps\n"
            "[limits]\n"
            "cpu = 2\n"
        )

    def test_empty_list(self) -> None:
        """An empty list still writes its key."""
        assert dump(I2()) == "A = \nB = \n"


class TestDumpDicts:
    """Tests for dumping dicts."""

    def test_scalar_entries(self) -> None:
        """Entries are written in insertion order."""
        assert dump({"item1": 1, "item2": "test", "item3": False}) == (
            "item1 = 1\nitem2 = test\nitem3 = false\n"
        )

    def test_sections_after_scalars(self) -> None:
        """Nested dicts and records become sections after the scalars."""
        text = dump({"sec": {"x": 1}, "top": 2.5, "rec": I1(A=3)})
        assert text == "top = 2.5\n\n[sec]\nx = 1\n\n[rec]\nA = 3\nB = 0.0\n"

    def test_non_string_key(self) -> None:
        """Keys must be strings."""
        with pytest.raises(UnsupportedValueError, match="dict keys must be str"):
            dump({1: "a"})


class TestDumpErrors:
    """Tests for values the format cannot express."""

    @pytest.mark.parametrize("source", [1, "text", [1, 2], None])
    def test_unsupported_root(self, source: object) -> None:
        """Only records and dicts can be dumped."""
        with pytest.raises(UnsupportedRootError, match="dump only support"):
            dump(source)

    def test_nested_too_deep(self) -> None:
        """A record inside a section is rejected."""
        with pytest.raises(NestingTooDeepError):
            dump(TooDeep())

    def test_dict_inside_section(self) -> None:
        """A dict inside a section is rejected."""
        with pytest.raises(NestingTooDeepError):
            dump({"a": {"b": {"c": 1}}})

    def test_unsupported_list_element(self) -> None:
        """Lists of containers cannot be expressed."""
        with pytest.raises(UnsupportedElementError, match="not support dict in list 'items'"):
            dump({"items": [{"a": 1}]})

    def test_unsupported_value(self) -> None:
        """Sets and other types are rejected."""
        with pytest.raises(UnsupportedValueError, match="not support set"):
            dump({"tags": {"a", "b"}})

    def test_duration_out_of_range(self) -> None:
        """Durations the reader would reject are not written."""
        with pytest.raises(UnsupportedValueError, match="out of the int64 nanosecond range"):
            dump({"d": timedelta(days=200_000)})

    def test_duration_out_of_range_in_list(self) -> None:
        """The duration range also applies to list elements."""
        with pytest.raises(UnsupportedValueError, match="'ds'"):
            dump({"ds": [timedelta(seconds=1), timedelta(days=-200_000)]})

    def test_write_leaves_stream_untouched_on_error(self) -> None:
        """Nothing is written when encoding fails."""
        stream = io.StringIO()
        with pytest.raises(NestingTooDeepError):
            write(stream, {"ok": 1, "a": {"b": {"c": 1}}})
        assert stream.getvalue() == ""


class TestWrite:
    """Tests for write."""

    def test_writes_to_stream(self) -> None:
        """write produces the same text as dump."""
        stream = io.StringIO()
        write(stream, _example())
        assert stream.getvalue() == EXAMPLE_DUMP

    def test_dump_loads_back(self) -> None:
        """Dumped dicts read back to the same values."""
        text = dump({"item1": 1, "item2": "test", "item3": False})
        root = load(text)
        assert root.get("item1").must_int(0) == 1
        assert root.get("item2").must_value("") == "test"
        assert root.get("item3").must_bool(True) is False
