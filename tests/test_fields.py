"""Tests for field tags and record field resolution."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, Field

from flatini import UnsupportedKindError, ini_field, parse_tag, record_fields
from flatini.types import UInt8


@dataclass
class Tagged:
    plain: int = 0
    renamed: int = ini_field("r1, root item 1", default=0)
    split: str = ini_field(name="split_name", comments=["first", "second"], default="")
    raw: str = field(default="", metadata={"ini": "raw_name, a; b"})
    skipped: int = ini_field("-", default=0)
    _private: int = 0
    small: UInt8 = 0


class TaggedModel(BaseModel):
    plain: int = 0
    aliased: int = Field(default=0, alias="other")
    commented: str = Field(default="", json_schema_extra={"ini": "c, note"})
    hidden: int = Field(default=0, exclude=True)


class TestParseTag:
    """Tests for parse_tag function."""

    def test_name_only(self) -> None:
        """A tag without comma has no comments."""
        assert parse_tag("name") == ("name", ())

    def test_name_and_comments(self) -> None:
        """Comments follow the first comma, separated by semicolons."""
        assert parse_tag("b, comment1; comment2") == ("b", ("comment1", "comment2"))

    def test_whitespace_around_separators(self) -> None:
        """Spaces around ',' and ';' are dropped."""
        assert parse_tag(" a ,  x  ;y ") == ("a", ("x", "y"))

    def test_empty_name(self) -> None:
        """An empty name keeps its comments."""
        assert parse_tag(", only comment") == ("", ("only comment",))

    def test_comment_keeps_later_commas(self) -> None:
        """Only the first comma separates the name."""
        assert parse_tag("a, one, two") == ("a", ("one, two",))

    def test_exclusion_marker(self) -> None:
        """The '-' tag is returned as the name."""
        assert parse_tag("-") == ("-", ())


class TestRecordFields:
    """Tests for record_fields function."""

    def test_dataclass_names_and_comments(self) -> None:
        """Tag names, declared names and comments are resolved."""
        specs = {spec.attr: spec for spec in record_fields(Tagged)}

        assert specs["plain"].name == "plain"
        assert specs["renamed"].name == "r1"
        assert specs["renamed"].comments == ("root item 1",)
        assert specs["split"].name == "split_name"
        assert specs["split"].comments == ("first", "second")
        assert specs["raw"].name == "raw_name"
        assert specs["raw"].comments == ("a", "b")

    def test_dataclass_exclusions(self) -> None:
        """'-' tags and private attributes are excluded."""
        specs = {spec.attr: spec for spec in record_fields(Tagged)}

        assert specs["skipped"].excluded
        assert specs["_private"].excluded
        assert not specs["plain"].excluded

    def test_annotations_keep_extras(self) -> None:
        """Width annotations survive resolution."""
        specs = {spec.attr: spec for spec in record_fields(Tagged)}
        assert specs["small"].annotation == UInt8

    def test_resolution_is_cached(self) -> None:
        """The same tuple is returned for repeated calls."""
        assert record_fields(Tagged) is record_fields(Tagged)

    def test_pydantic_model(self) -> None:
        """Aliases, json_schema_extra tags and exclude are honoured."""
        specs = {spec.attr: spec for spec in record_fields(TaggedModel)}

        assert specs["plain"].name == "plain"
        assert specs["aliased"].name == "other"
        assert specs["commented"].name == "c"
        assert specs["commented"].comments == ("note",)
        assert specs["hidden"].excluded

    def test_non_record_type(self) -> None:
        """Plain classes are rejected."""
        with pytest.raises(UnsupportedKindError):
            record_fields(dict)
