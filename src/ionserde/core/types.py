"""
Column type descriptors and the serialize-as compatibility table.

Column types are polars data types (classes such as ``pl.Int64`` or instances such as
``pl.List(pl.String)``). Type names are also accepted and parsed, covering the short
descriptor names ("i64", "f64", "str", "struct", "list[struct]") and table DDL names
("bigint", "double", "varchar(20)", "array<int>", "struct<a:int,b:string>",
"map<string,int>", "decimal(10,2)").

Responsibilities
- Normalize raw column types into polars dtypes (``coerce_dtype``).
- Classify dtypes into coarse families (``type_family``).
- Decide which nested-format value types a column may be serialized as
  (``allowed_value_types``, ``is_compatible_override``).
- Provide the default value type per column type (``default_value_type``).

Notes
- Maps have no dedicated polars dtype; like Arrow they are represented as
  ``List(Struct({"key": K, "value": V}))`` and therefore belong to the list family.
- Zero-IO; depends on polars for dtype objects only.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Final

import polars as pl

from .errors import SchemaError
from .grammar import ValueType

__all__ = [
    "TypeDescriptor",
    "TypeFamily",
    "COMPATIBILITY_TABLE",
    "coerce_dtype",
    "parse_type_name",
    "type_family",
    "allowed_value_types",
    "is_compatible_override",
    "default_value_type",
    "type_name",
]

# Polars exposes dtypes both as classes (pl.Int64) and instances (pl.List(pl.Int64)).
TypeDescriptor = Any


class TypeFamily(Enum):
    """Coarse grouping of column types used by the compatibility table."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    BINARY = "binary"
    TEMPORAL = "temporal"
    LIST = "list"
    STRUCT = "struct"


# Declared family -> value types a column may be serialized as. The first entry is the
# default mapping for that family.
COMPATIBILITY_TABLE: Final[Mapping[TypeFamily, tuple[ValueType, ...]]] = {
    TypeFamily.NULL: (ValueType.NULL,),
    TypeFamily.BOOLEAN: (ValueType.BOOL, ValueType.STRING, ValueType.SYMBOL),
    TypeFamily.INTEGER: (
        ValueType.INT,
        ValueType.DECIMAL,
        ValueType.FLOAT,
        ValueType.STRING,
        ValueType.SYMBOL,
    ),
    TypeFamily.FLOAT: (ValueType.FLOAT, ValueType.DECIMAL, ValueType.STRING),
    TypeFamily.DECIMAL: (ValueType.DECIMAL, ValueType.FLOAT, ValueType.STRING),
    TypeFamily.STRING: (ValueType.STRING, ValueType.SYMBOL),
    TypeFamily.BINARY: (ValueType.BLOB, ValueType.CLOB),
    TypeFamily.TEMPORAL: (ValueType.TIMESTAMP, ValueType.STRING),
    TypeFamily.LIST: (ValueType.LIST, ValueType.SEXP),
    TypeFamily.STRUCT: (ValueType.STRUCT,),
}

_SCALAR_NAMES: Final[Mapping[str, TypeDescriptor]] = {
    "null": pl.Null,
    "void": pl.Null,
    "bool": pl.Boolean,
    "boolean": pl.Boolean,
    "i8": pl.Int8,
    "tinyint": pl.Int8,
    "i16": pl.Int16,
    "smallint": pl.Int16,
    "i32": pl.Int32,
    "int": pl.Int32,
    "integer": pl.Int32,
    "i64": pl.Int64,
    "bigint": pl.Int64,
    "long": pl.Int64,
    "f32": pl.Float32,
    "float": pl.Float32,
    "f64": pl.Float64,
    "double": pl.Float64,
    "str": pl.String,
    "string": pl.String,
    "utf8": pl.String,
    "binary": pl.Binary,
    "date": pl.Date,
    "timestamp": pl.Datetime,
    "datetime": pl.Datetime,
}

_DECIMAL_RE: Final[re.Pattern[str]] = re.compile(r"^decimal\s*\(\s*(\d+)\s*(?:,\s*(\d+)\s*)?\)$")
_SIZED_STRING_RE: Final[re.Pattern[str]] = re.compile(r"^(?:varchar|char)\s*\(\s*\d+\s*\)$")


def _split_top_level(body: str) -> list[str]:
    # Split on commas that are not nested inside <>, [] or ().
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(body):
        if ch in "<[(":
            depth += 1
        elif ch in ">])":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(body[start:i].strip())
            start = i + 1
    tail = body[start:].strip()
    if tail:
        parts.append(tail)
    return parts


def _inner(name: str, open_: str, close: str) -> str | None:
    if name.endswith(close) and open_ in name:
        head, _, rest = name.partition(open_)
        return rest[: -len(close)].strip() if head.strip() else None
    return None


def parse_type_name(name: str) -> TypeDescriptor:
    """
    Parse a type name into a polars dtype.

    Args:
        name (str): Type name, case-insensitive (e.g., "bigint", "array<string>").

    Returns:
        polars dtype: Parsed type.

    Raises:
        SchemaError: If the name is not a recognized type.

    Examples:
        >>> import polars as pl
        >>> parse_type_name("array<int>") == pl.List(pl.Int32)
        True
    """
    raw = name
    s = (name or "").strip()
    lowered = s.lower()
    if lowered in _SCALAR_NAMES:
        return _SCALAR_NAMES[lowered]
    if _SIZED_STRING_RE.match(lowered):
        return pl.String
    m = _DECIMAL_RE.match(lowered)
    if m:
        return pl.Decimal(int(m.group(1)), int(m.group(2) or 0))
    if lowered == "decimal":
        return pl.Decimal(38, 18)
    if lowered == "struct":
        return pl.Struct([])

    head = lowered.split("<", 1)[0].split("[", 1)[0].strip()
    if head == "list":
        inner = _inner(s, "[", "]")
        if inner:
            return pl.List(parse_type_name(inner))
    elif head == "array":
        inner = _inner(s, "<", ">")
        if inner:
            return pl.List(parse_type_name(inner))
    elif head == "map":
        inner = _inner(s, "<", ">")
        parts = _split_top_level(inner) if inner else []
        if len(parts) == 2:
            return pl.List(
                pl.Struct({"key": parse_type_name(parts[0]), "value": parse_type_name(parts[1])})
            )
    elif head == "struct":
        inner = _inner(s, "<", ">")
        if inner is not None:
            fields: dict[str, TypeDescriptor] = {}
            for part in _split_top_level(inner):
                fname, sep, ftype = part.partition(":")
                if not sep or not fname.strip():
                    raise SchemaError(f"malformed struct field {part!r} in type {raw!r}")
                fields[fname.strip()] = parse_type_name(ftype)
            return pl.Struct(fields)
    raise SchemaError(f"unknown column type {raw!r}")


def coerce_dtype(value: Any) -> TypeDescriptor:
    """
    Normalize a column type given as a polars dtype or a type name.

    Raises:
        SchemaError: If the value is neither a polars dtype nor a recognized name.
    """
    if isinstance(value, str):
        return parse_type_name(value)
    if isinstance(value, pl.DataType) or (
        isinstance(value, type) and issubclass(value, pl.DataType)
    ):
        return value
    raise SchemaError(f"unsupported column type {value!r}")


def type_family(dtype: TypeDescriptor) -> TypeFamily:
    """
    Classify a polars dtype into its TypeFamily.

    Raises:
        SchemaError: For dtypes outside every family (e.g., pl.Object).
    """
    if dtype == pl.Null:
        return TypeFamily.NULL
    if dtype == pl.Boolean:
        return TypeFamily.BOOLEAN
    if dtype == pl.Decimal:
        return TypeFamily.DECIMAL
    if dtype.is_integer():
        return TypeFamily.INTEGER
    if dtype.is_float():
        return TypeFamily.FLOAT
    if dtype == pl.String or dtype == pl.Categorical or dtype == pl.Enum:
        return TypeFamily.STRING
    if dtype == pl.Binary:
        return TypeFamily.BINARY
    if dtype.is_temporal():
        return TypeFamily.TEMPORAL
    if dtype == pl.List or dtype == pl.Array:
        return TypeFamily.LIST
    if dtype == pl.Struct:
        return TypeFamily.STRUCT
    raise SchemaError(f"column type {type_name(dtype)} has no nested-format mapping")


def allowed_value_types(dtype: TypeDescriptor) -> tuple[ValueType, ...]:
    """Return the value types a column of ``dtype`` may be serialized as (default first)."""
    return COMPATIBILITY_TABLE[type_family(dtype)]


def is_compatible_override(dtype: TypeDescriptor, requested: ValueType) -> bool:
    """
    Check whether ``requested`` is a valid serialize-as override for ``dtype``.

    Examples:
        >>> import polars as pl
        >>> is_compatible_override(pl.Int64, ValueType.STRING)
        True
        >>> is_compatible_override(pl.Struct({"a": pl.Int64}), ValueType.INT)
        False
    """
    return requested in allowed_value_types(dtype)


def default_value_type(dtype: TypeDescriptor) -> ValueType:
    """Value type a column is serialized as when no override is configured."""
    return allowed_value_types(dtype)[0]


def type_name(dtype: TypeDescriptor) -> str:
    """Render a dtype for error messages."""
    return str(dtype)
