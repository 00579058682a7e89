"""
Per-column serialization type overrides (``ion.<column>.serialize_as``).

An override replaces the implicit mapping from a column's declared type to a nested-format
value type, e.g. writing a bigint column as a string. Every override is checked against
ionserde.core.types.COMPATIBILITY_TABLE at construction.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ionserde.core.constants import SERIALIZE_AS_OPTION
from ionserde.core.errors import IncompatibleOverrideError
from ionserde.core.grammar import VALUE_TYPE_ALIASES, ValueType
from ionserde.core.log import get_logger
from ionserde.core.types import TypeDescriptor, is_compatible_override, type_name

from .base import BaseProperties
from .directive import ColumnDirective
from .source import RawConfigSource

__all__ = ["SerializeAsConfig"]

log = get_logger(__name__)


@dataclass(frozen=True)
class SerializeAsConfig:
    """
    Resolved serialize-as overrides.

    Attributes:
        column_names (tuple[str, ...]): Declared column names, in schema order.
        directive (ColumnDirective[ValueType | None]): Overrides by column name; the
            default is None ("use the mapping for the declared type").
    """

    column_names: tuple[str, ...] = ()
    directive: ColumnDirective[ValueType | None] = ColumnDirective(None)

    @classmethod
    def from_source(
        cls,
        source: BaseProperties | RawConfigSource | Mapping[str, Any] | None,
        column_names: Sequence[str],
        column_types: Sequence[TypeDescriptor],
    ) -> SerializeAsConfig:
        """
        Raises:
            InvalidConfigValueError: If an override is not a known value type.
            UnknownColumnError: If an override names an undeclared column.
            IncompatibleOverrideError: If an override does not fit the declared type.
        """
        props = BaseProperties.wrap(source)
        types_by_name = dict(zip(column_names, column_types, strict=True))
        overrides: dict[str, ValueType | None] = {}
        for column, (key, raw) in props.resolve_column_keys(
            SERIALIZE_AS_OPTION, column_names
        ).items():
            requested = props.parse_enum(key, raw, ValueType, VALUE_TYPE_ALIASES, column=column)
            declared = types_by_name[column]
            if not is_compatible_override(declared, requested):
                raise IncompatibleOverrideError(key, column, type_name(declared), requested.value)
            overrides[column] = requested
        if overrides:
            log.debug(
                "serialize_as_overrides",
                overrides={c: t.value for c, t in overrides.items() if t is not None},
            )
        return cls(tuple(column_names), ColumnDirective(None, overrides))

    def serialization_ion_type_for(self, index: int) -> ValueType | None:
        """
        Override for the column at ``index``, or None when the default mapping applies.

        Raises:
            IndexError: If ``index`` is outside the schema.
        """
        return self.directive.for_column(self.column_names[index])

    def serialization_ion_type_for_column(self, column_name: str) -> ValueType | None:
        return self.directive.for_column(column_name)
