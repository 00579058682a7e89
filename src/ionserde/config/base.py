"""
Common parsing helpers shared by every SerDe property component.

BaseProperties wraps a RawConfigSource and provides:
- required/optional lookups (blank values count as absent);
- typed coercions (bool, int, enum, comma-separated string list) that raise
  InvalidConfigValueError naming the key and raw value;
- the ``ion.<column>.<option>`` key namespacing, including enumeration of every configured
  key for an option and its mapping onto declared columns.

Column matching
- Column names in keys are matched case-insensitively against the declared columns,
  since table engines fold column names to lower case.
- A key naming an undeclared column raises UnknownColumnError.
- Two keys binding different values to one column raise ConflictingOverrideError
  (or the subclass passed by the caller, e.g. DuplicatePathError).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import Enum
from typing import Any, TypeVar

from ionserde.core.constants import COLUMN_OPTIONS, GLOBAL_KEYS, KEY_NAMESPACE
from ionserde.core.errors import (
    ConflictingOverrideError,
    InvalidConfigValueError,
    MissingConfigError,
    UnknownColumnError,
    UnknownConfigKeyError,
)
from ionserde.core.grammar import enum_from_value
from ionserde.core.log import get_logger

from .source import RawConfigSource, as_source

__all__ = ["BaseProperties", "ColumnKey"]

log = get_logger(__name__)

E = TypeVar("E", bound=Enum)

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}
_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

# (column as written in the key, full key, raw value)
ColumnKey = tuple[str, str, str]


class BaseProperties:
    """
    Parsing helpers over a raw configuration source.

    Args:
        source (RawConfigSource | Mapping[str, Any] | None): Raw key/value source; plain
            mappings are wrapped in a MappingSource.
    """

    def __init__(self, source: RawConfigSource | Mapping[str, Any] | None) -> None:
        self.source = as_source(source)

    @classmethod
    def wrap(cls, obj: BaseProperties | RawConfigSource | Mapping[str, Any] | None) -> BaseProperties:
        """Return ``obj`` if it already is a BaseProperties, else wrap it."""
        return obj if isinstance(obj, BaseProperties) else cls(obj)

    # ------------------------------------------------------------------ lookups

    def get_optional(self, key: str) -> str | None:
        raw = self.source.get(key)
        if raw is None or not raw.strip():
            return None
        return raw.strip()

    def get_required(self, key: str) -> str:
        raw = self.get_optional(key)
        if raw is None:
            raise MissingConfigError(key)
        return raw

    # ---------------------------------------------------------------- coercions

    @staticmethod
    def parse_bool(key: str, raw: str, column: str | None = None) -> bool:
        lo = raw.strip().lower()
        if lo in _TRUE:
            return True
        if lo in _FALSE:
            return False
        raise InvalidConfigValueError(key, raw, expected="a boolean (true/false)", column=column)

    @staticmethod
    def parse_int(key: str, raw: str, column: str | None = None) -> int:
        """Parse an optionally signed run of ASCII digits within the signed 32-bit range."""
        text = raw.strip()
        if not _INT_RE.match(text) or not _INT32_MIN <= int(text) <= _INT32_MAX:
            raise InvalidConfigValueError(key, raw, expected="an integer", column=column)
        return int(text)

    @staticmethod
    def parse_enum(
        key: str,
        raw: str,
        enum_cls: type[E],
        aliases: Mapping[str, str] | None = None,
        column: str | None = None,
    ) -> E:
        try:
            return enum_from_value(enum_cls, raw, aliases)
        except ValueError:
            allowed = sorted(m.value for m in enum_cls)
            raise InvalidConfigValueError(
                key, raw, expected=f"one of {allowed}", column=column
            ) from None

    def as_bool(self, key: str, default: bool) -> bool:
        raw = self.get_optional(key)
        return default if raw is None else self.parse_bool(key, raw)

    def as_int(self, key: str, default: int) -> int:
        raw = self.get_optional(key)
        return default if raw is None else self.parse_int(key, raw)

    def as_enum(
        self,
        key: str,
        enum_cls: type[E],
        default: E,
        aliases: Mapping[str, str] | None = None,
    ) -> E:
        raw = self.get_optional(key)
        return default if raw is None else self.parse_enum(key, raw, enum_cls, aliases)

    def as_string_list(self, key: str, default: Sequence[str] = ()) -> tuple[str, ...]:
        raw = self.get_optional(key)
        if raw is None:
            return tuple(default)
        return tuple(part.strip() for part in raw.split(",") if part.strip())

    # ------------------------------------------------------------ namespacing

    @staticmethod
    def column_key(column: str, option: str) -> str:
        """
        Build the key for a column-scoped option.

        Examples:
            >>> BaseProperties.column_key("id", "serialize_as")
            'ion.id.serialize_as'
        """
        return f"{KEY_NAMESPACE}{column}.{option}"

    @staticmethod
    def split_column_key(key: str, option: str) -> str | None:
        """Return the column named by ``key`` if it has the shape ``ion.<column>.<option>``."""
        suffix = "." + option
        if not key.startswith(KEY_NAMESPACE) or not key.endswith(suffix):
            return None
        if len(key) <= len(KEY_NAMESPACE) + len(suffix):
            return None
        return key[len(KEY_NAMESPACE) : -len(suffix)]

    def column_scoped(self, option: str) -> list[ColumnKey]:
        """Every configured ``ion.<column>.<option>`` key, in source key order."""
        found: list[ColumnKey] = []
        for key in self.source.keys():
            column = self.split_column_key(key, option)
            if column is None:
                continue
            raw = self.get_optional(key)
            if raw is not None:
                found.append((column, key, raw))
        return found

    def resolve_column_keys(
        self,
        option: str,
        column_names: Iterable[str],
        conflict_error: Callable[..., ConflictingOverrideError] = ConflictingOverrideError,
    ) -> dict[str, tuple[str, str]]:
        """
        Map every ``ion.<column>.<option>`` key onto a declared column.

        Args:
            option (str): Column-scoped option name (e.g., "fail_on_overflow").
            column_names (Iterable[str]): Declared column names.
            conflict_error: Error raised when a column receives two different values.

        Returns:
            dict[str, tuple[str, str]]: Declared column name -> (key, raw value).

        Raises:
            UnknownColumnError: If a key names an undeclared column.
            ConflictingOverrideError: If one column is bound to two different values.
        """
        declared = {c.lower(): c for c in column_names}
        resolved: dict[str, tuple[str, str]] = {}
        for written, key, raw in self.column_scoped(option):
            column = declared.get(written.lower())
            if column is None:
                raise UnknownColumnError(key, written, value=raw)
            if column in resolved:
                prev_key, prev_raw = resolved[column]
                if prev_raw != raw:
                    raise conflict_error(column, (prev_key, key), (prev_raw, raw))
                continue
            resolved[column] = (key, raw)
        return resolved

    def unrecognized_keys(self) -> list[str]:
        """Keys under the ion namespace that are neither global keys nor known column options."""
        unknown: list[str] = []
        for key in self.source.keys():
            if not key.startswith(KEY_NAMESPACE) or key in GLOBAL_KEYS:
                continue
            if any(self.split_column_key(key, opt) is not None for opt in COLUMN_OPTIONS):
                continue
            unknown.append(key)
        return unknown

    def check_unrecognized_keys(self, strict: bool = False) -> None:
        """
        Warn about (or, when ``strict``, reject) unrecognized keys under the ion namespace.

        Raises:
            UnknownConfigKeyError: For the first unrecognized key when ``strict`` is True.
        """
        for key in self.unrecognized_keys():
            if strict:
                raise UnknownConfigKeyError(key, self.source.get(key))
            log.warning("unrecognized_config_key", key=key)
