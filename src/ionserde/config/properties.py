"""
SerDeProperties facade.

Built once per table definition from a raw configuration source plus the ordered column
names and types. Each component parses and validates its own slice of keys at
construction; any failure aborts construction, so an instance is always fully valid.
Afterwards the facade is a read-only lookup consulted per record and per column.

Source of truth
- Key names and defaults: ionserde.core.constants
- Enums: ionserde.core.grammar
- Column types and the serialize-as compatibility table: ionserde.core.types
- Errors: ionserde.core.errors

Examples
--------
>>> import polars as pl
>>> from ionserde.config import SerDeProperties
>>> props = SerDeProperties(
...     {"ion.id.serialize_as": "string", "ion.id.fail_on_overflow": "false"},
...     ["id", "payload"],
...     [pl.Int64, pl.Struct({"a": pl.String})],
... )
>>> props.serialization_ion_type_for(0).value
'string'
>>> props.fail_on_overflow_for("id"), props.fail_on_overflow_for("payload")
(False, True)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict

from ionserde.core.errors import SchemaError
from ionserde.core.grammar import Encoding, SerializeNullStrategy, ValueType
from ionserde.core.log import get_logger
from ionserde.core.types import TypeDescriptor, coerce_dtype, type_name
from ionserde.path import Extractor, ExtractorBuilder

from .base import BaseProperties
from .encoding import EncodingConfig
from .fail_on_overflow import FailOnOverflowConfig
from .path_extraction import PathExtractionConfig
from .serialize_as import SerializeAsConfig
from .serialize_null import SerializeNullConfig
from .source import RawConfigSource
from .timestamp_offset import TimestampOffsetConfig

__all__ = ["SerDeProperties", "ResolvedSerDeConfig"]

log = get_logger(__name__)


class ResolvedSerDeConfig(BaseModel):
    """
    Snapshot of every resolved directive, keyed by column name.

    Notes:
        Two SerDeProperties built from identical inputs produce equal snapshots.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    column_names: tuple[str, ...]
    column_types: tuple[str, ...]
    encoding: Encoding
    serialize_null: SerializeNullStrategy
    timestamp_offset_minutes: int
    fail_on_overflow: dict[str, bool]
    serialize_as: dict[str, ValueType]
    path_case_sensitive: bool
    paths: dict[str, str]


def _validate_schema(
    column_names: Sequence[str], column_types: Sequence[Any]
) -> tuple[tuple[str, ...], tuple[TypeDescriptor, ...]]:
    names = tuple(column_names)
    if len(names) != len(column_types):
        raise SchemaError(
            f"column names and types differ in length: {len(names)} names, "
            f"{len(column_types)} types"
        )
    seen: dict[str, str] = {}
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise SchemaError(f"column names must be non-empty strings (got {name!r})")
        if name != name.strip():
            raise SchemaError(f"column name {name!r} has surrounding whitespace")
        folded = name.lower()
        if folded in seen:
            raise SchemaError(f"duplicate column name {name!r} (also declared as {seen[folded]!r})")
        seen[folded] = name
    return names, tuple(coerce_dtype(t) for t in column_types)


class SerDeProperties(BaseProperties):
    """
    Typed, validated SerDe properties for one table.

    Args:
        source (RawConfigSource | Mapping[str, Any] | None): Raw table properties.
        column_names (Sequence[str]): Column names in schema order.
        column_types (Sequence[Any]): Column types (polars dtypes or type names), same order.
        extractor_builder (ExtractorBuilder | None): Path extraction engine; defaults to
            the jmespath-backed builder.
        strict (bool): Reject unrecognized ``ion.*`` keys instead of logging a warning.

    Raises:
        SchemaError: If names and types are inconsistent.
        ConfigError: Any component validation failure (see ionserde.core.errors).
    """

    def __init__(
        self,
        source: RawConfigSource | Mapping[str, Any] | None,
        column_names: Sequence[str],
        column_types: Sequence[Any],
        *,
        extractor_builder: ExtractorBuilder | None = None,
        strict: bool = False,
    ) -> None:
        super().__init__(source)
        names, types = _validate_schema(column_names, column_types)

        self._encoding = EncodingConfig.from_source(self)
        self._serialize_null = SerializeNullConfig.from_source(self)
        self._timestamp_offset = TimestampOffsetConfig.from_source(self)
        self._fail_on_overflow = FailOnOverflowConfig.from_source(self, names)
        self._serialize_as = SerializeAsConfig.from_source(self, names, types)
        self._path_extraction = PathExtractionConfig.from_source(self, names, extractor_builder)
        self.check_unrecognized_keys(strict)

        self._column_names = names
        self._column_types = types
        log.debug("serde_properties_resolved", columns=len(names), strict=strict)

    # -------------------------------------------------------------- schema

    def get_column_names(self) -> tuple[str, ...]:
        return self._column_names

    def get_column_types(self) -> tuple[TypeDescriptor, ...]:
        return self._column_types

    # ------------------------------------------------------------- globals

    def get_encoding(self) -> Encoding:
        """See EncodingConfig.get_encoding."""
        return self._encoding.get_encoding()

    def get_timestamp_offset_in_minutes(self) -> int:
        """See TimestampOffsetConfig.get_timestamp_offset_in_minutes."""
        return self._timestamp_offset.get_timestamp_offset_in_minutes()

    def get_serialize_null(self) -> SerializeNullStrategy:
        """See SerializeNullConfig.get_serialize_null."""
        return self._serialize_null.get_serialize_null()

    # ----------------------------------------------------------- per column

    def fail_on_overflow_for(self, column_name: str) -> bool:
        """
        Args:
            column_name (str): Table column name.

        Returns:
            bool: True if overflow must fail, False to clamp/drop.
        """
        return self._fail_on_overflow.fail_on_overflow_for(column_name)

    def serialization_ion_type_for(self, index: int) -> ValueType | None:
        """
        Args:
            index (int): Table column index.

        Returns:
            ValueType | None: Override for the column, or None for the default mapping.
        """
        return self._serialize_as.serialization_ion_type_for(index)

    def path_extractor(self) -> Extractor:
        """See PathExtractionConfig.path_extractor."""
        return self._path_extraction.path_extractor()

    def path_extractor_case_sensitivity(self) -> bool:
        return self._path_extraction.get_case_sensitivity()

    # ------------------------------------------------------------- summary

    def describe(self) -> ResolvedSerDeConfig:
        """Snapshot of every resolved directive."""
        return ResolvedSerDeConfig(
            column_names=self._column_names,
            column_types=tuple(type_name(t) for t in self._column_types),
            encoding=self.get_encoding(),
            serialize_null=self.get_serialize_null(),
            timestamp_offset_minutes=self.get_timestamp_offset_in_minutes(),
            fail_on_overflow={c: self.fail_on_overflow_for(c) for c in self._column_names},
            serialize_as={
                c: t
                for c, t in self._serialize_as.directive.overrides.items()
                if t is not None
            },
            path_case_sensitive=self.path_extractor_case_sensitivity(),
            paths={r.column_name: r.expression for r in self._path_extraction.path_rules()},
        )

    def __repr__(self) -> str:
        return f"SerDeProperties(columns={list(self._column_names)!r})"
