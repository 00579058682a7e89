"""
Canonical ionserde enums and normalization helpers.

Defines the wire encoding, null-serialization strategies, and nested-format value types
used by SerDe properties, together with zero-IO helpers that normalize raw configuration
strings into enum members.

Responsibilities
- Define enums whose serialized values are lower_snake.
- Parse raw, case-insensitive configuration strings into enum members (with aliases).
- Provide the lower_snake invariant check used by tests.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (configuration values): lower_snake
2) Parsing is forgiving about case and surrounding whitespace ("BINARY", " text ")
   but never about spelling; unknown values raise ValueError.

Examples
--------
>>> from ionserde.core.grammar import encoding_from_value, value_type_from_value, Encoding, ValueType
>>> encoding_from_value("BINARY") == Encoding.BINARY
True
>>> value_type_from_value("String") == ValueType.STRING
True
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Final, TypeVar

__all__ = [
    "Encoding",
    "SerializeNullStrategy",
    "ValueType",
    "SCALAR_VALUE_TYPES",
    "CONTAINER_VALUE_TYPES",
    "SERIALIZE_NULL_ALIASES",
    "VALUE_TYPE_ALIASES",
    "is_lower_snake",
    "enum_from_value",
    "encoding_from_value",
    "serialize_null_from_value",
    "value_type_from_value",
    "ensure_all_enum_values_lower_snake",
]

E = TypeVar("E", bound=Enum)


class Encoding(Enum):
    """
    Wire encoding of the nested document format.

    Notes:
        BINARY is compact and the default; TEXT is human readable.
    """

    BINARY = "binary"
    TEXT = "text"


class SerializeNullStrategy(Enum):
    """
    How a column's null value is emitted into the nested output.

    Members:
        OMIT: the field is left out of the output struct.
        UNTYPED: the field is written as an untyped null.
        TYPED: the field is written as a null typed after the column's value type.
    """

    OMIT = "omit"
    UNTYPED = "untyped"
    TYPED = "typed"


class ValueType(Enum):
    """
    Value types of the nested document format.

    Serialized values appear in:
      - ion.<column>.serialize_as
    """

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    DECIMAL = "decimal"
    TIMESTAMP = "timestamp"
    SYMBOL = "symbol"
    STRING = "string"
    CLOB = "clob"
    BLOB = "blob"
    LIST = "list"
    SEXP = "sexp"
    STRUCT = "struct"


SCALAR_VALUE_TYPES: Final[frozenset[ValueType]] = frozenset(
    t for t in ValueType if t not in {ValueType.LIST, ValueType.SEXP, ValueType.STRUCT}
)
CONTAINER_VALUE_TYPES: Final[frozenset[ValueType]] = frozenset(ValueType) - SCALAR_VALUE_TYPES

# Accepted spellings that differ from the canonical value.
SERIALIZE_NULL_ALIASES: Final[Mapping[str, str]] = {
    "untyped_null": "untyped",
    "typed_null": "typed",
}
VALUE_TYPE_ALIASES: Final[Mapping[str, str]] = {
    "boolean": "bool",
    "integer": "int",
}

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Examples:
      >>> is_lower_snake("untyped")
      True
      >>> is_lower_snake("Untyped")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def enum_from_value(
    enum_cls: type[E], raw: str, aliases: Mapping[str, str] | None = None
) -> E:
    """
    Parse a raw configuration string into a member of ``enum_cls``.

    Args:
      enum_cls (type[Enum]): Enum with lower_snake string values.
      raw (str): Raw value; case and surrounding whitespace are ignored.
      aliases (Mapping[str, str] | None): Extra spellings mapped to canonical values.

    Returns:
      Enum: Parsed member.

    Raises:
      ValueError: If the normalized value is not a member value or alias.
    """
    norm = (raw or "").strip().lower()
    if aliases:
        norm = aliases.get(norm, norm)
    try:
        return enum_cls(norm)
    except ValueError:
        allowed = sorted(m.value for m in enum_cls)
        raise ValueError(
            f"{enum_cls.__name__} must be one of {allowed} (got {raw!r})"
        ) from None


def encoding_from_value(s: str) -> Encoding:
    """Parse an encoding name ("binary" / "text")."""
    return enum_from_value(Encoding, s)


def serialize_null_from_value(s: str) -> SerializeNullStrategy:
    """Parse a null strategy name; "untyped_null" and "typed_null" are accepted aliases."""
    return enum_from_value(SerializeNullStrategy, s, SERIALIZE_NULL_ALIASES)


def value_type_from_value(s: str) -> ValueType:
    """Parse a nested-format value type name ("string", "decimal", "sexp", ...)."""
    return enum_from_value(ValueType, s, VALUE_TYPE_ALIASES)


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.
    """
    for E_ in enums:
        for m in E_:
            if not is_lower_snake(m.value):
                raise AssertionError(
                    f"{E_.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )
