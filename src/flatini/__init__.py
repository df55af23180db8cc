"""flatini: map flat INI-style configuration to and from typed Python values."""

from flatini.decoder import decode_node
from flatini.durations import format_duration, parse_duration
from flatini.encoder import dump, write
from flatini.exceptions import (
    ContainerConversionError,
    DecodeError,
    EncodeError,
    FlatiniError,
    NestingTooDeepError,
    NotAddressableError,
    ParseError,
    ScalarSyntaxError,
    UnsupportedElementError,
    UnsupportedKeyTypeError,
    UnsupportedKindError,
    UnsupportedRootError,
    UnsupportedValueError,
    ValueOverflowError,
)
from flatini.fields import ini_field, parse_tag, record_fields
from flatini.node import Node
from flatini.reader import load, load_file, load_file_into, load_into, read
from flatini.types import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)

__all__ = [
    "ContainerConversionError",
    "DecodeError",
    "EncodeError",
    "FlatiniError",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "NestingTooDeepError",
    "Node",
    "NotAddressableError",
    "ParseError",
    "ScalarSyntaxError",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "UnsupportedElementError",
    "UnsupportedKeyTypeError",
    "UnsupportedKindError",
    "UnsupportedRootError",
    "UnsupportedValueError",
    "ValueOverflowError",
    "decode_node",
    "dump",
    "format_duration",
    "ini_field",
    "load",
    "load_file",
    "load_file_into",
    "load_into",
    "parse_duration",
    "parse_tag",
    "read",
    "record_fields",
    "write",
]
