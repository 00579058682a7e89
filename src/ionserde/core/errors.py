"""
Exception types raised while resolving SerDe properties.

Provides typed exceptions for configuration failures detected at table initialization:
- MissingConfigError when a required key is absent.
- InvalidConfigValueError when a value cannot be coerced to its expected type or enum.
- UnknownColumnError when a column-scoped key names a column that is not in the schema.
- IncompatibleOverrideError when a serialize-as override does not fit the declared type.
- ConflictingOverrideError / DuplicatePathError when one column is bound twice.
- UnknownConfigKeyError for unrecognized keys under strict key checking.
- ExpressionSyntaxError when the path extraction engine rejects an expression.
- SchemaError for inconsistent column name/type lists.

Notes:
    - Every error carries ``key``, ``value`` and ``column`` attributes (None when not
      applicable) so failures point at the offending table property.
    - This module uses only the Python standard library and has no side effects.

Examples:
    Catch a malformed value.

    >>> from ionserde.core.errors import ConfigError, InvalidConfigValueError
    >>> try:
    ...     raise InvalidConfigValueError("ion.encoding", "utf8", expected="one of ['binary', 'text']")
    ... except ConfigError as e:
    ...     key = e.key
    >>> key
    'ion.encoding'
"""

from __future__ import annotations

__all__ = [
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigValueError",
    "UnknownColumnError",
    "UnknownConfigKeyError",
    "IncompatibleOverrideError",
    "ConflictingOverrideError",
    "DuplicatePathError",
    "ExpressionSyntaxError",
    "SchemaError",
]


class ConfigError(ValueError):
    """
    Base class for SerDe property resolution failures.

    Attributes:
        key (str | None): Offending configuration key.
        value (str | None): Raw value of the offending key.
        column (str | None): Column the failure relates to.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        column: str | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.value = value
        self.column = column


class MissingConfigError(ConfigError):
    """Required key is absent from the configuration source."""

    def __init__(self, key: str) -> None:
        super().__init__(f"missing required configuration key {key!r}", key=key)


class InvalidConfigValueError(ConfigError):
    """Value is present but cannot be parsed as its expected type."""

    def __init__(
        self, key: str, value: str, *, expected: str, column: str | None = None
    ) -> None:
        super().__init__(
            f"invalid value {value!r} for {key!r}: expected {expected}",
            key=key,
            value=value,
            column=column,
        )
        self.expected = expected


class UnknownColumnError(ConfigError):
    """Column-scoped key names a column that the table does not declare."""

    def __init__(self, key: str, column: str, *, value: str | None = None) -> None:
        super().__init__(
            f"key {key!r} refers to column {column!r} which is not declared in the table",
            key=key,
            value=value,
            column=column,
        )


class UnknownConfigKeyError(ConfigError):
    """Unrecognized key under the ion namespace (strict key checking only)."""

    def __init__(self, key: str, value: str | None = None) -> None:
        super().__init__(f"unrecognized configuration key {key!r}", key=key, value=value)


class IncompatibleOverrideError(ConfigError):
    """
    Serialize-as override is not valid for the column's declared type.

    Attributes:
        declared_type (str): Declared column type, rendered as text.
        requested (str): Requested value type.
    """

    def __init__(self, key: str, column: str, declared_type: str, requested: str) -> None:
        super().__init__(
            f"column {column!r} of type {declared_type} cannot be serialized as {requested!r} "
            f"(from {key!r})",
            key=key,
            value=requested,
            column=column,
        )
        self.declared_type = declared_type
        self.requested = requested


class ConflictingOverrideError(ConfigError):
    """Two column-scoped keys bind different values to the same column."""

    def __init__(self, column: str, keys: tuple[str, str], values: tuple[str, str]) -> None:
        super().__init__(
            f"column {column!r} is configured more than once with conflicting values: "
            f"{keys[0]}={values[0]!r}, {keys[1]}={values[1]!r}",
            key=keys[1],
            value=values[1],
            column=column,
        )
        self.keys = keys
        self.values = values


class DuplicatePathError(ConflictingOverrideError):
    """More than one path expression is bound to the same column."""


class ExpressionSyntaxError(ConfigError):
    """Path extraction engine rejected a path expression."""


class SchemaError(ConfigError):
    """Column names and column types are inconsistent (length mismatch, duplicates, unknown type)."""
