"""
Per-column directive with a global fallback.

Several SerDe options follow the same pattern: one value for all columns, optionally
replaced for individual columns. ColumnDirective holds both and resolves a column to its
override or the default.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, TypeVar

__all__ = ["ColumnDirective"]

T = TypeVar("T")


@dataclass(frozen=True)
class ColumnDirective(Generic[T]):
    """
    Resolved value of type T for all columns, with per-column overrides.

    Attributes:
        default (T): Value for columns without an override.
        overrides (Mapping[str, T]): Column name -> override; read-only after construction.

    Examples:
        >>> d = ColumnDirective(True, {"id": False})
        >>> d.for_column("id"), d.for_column("payload")
        (False, True)
    """

    default: T
    overrides: Mapping[str, T] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))

    def for_column(self, column: str) -> T:
        return self.overrides.get(column, self.default)

    def has_override(self, column: str) -> bool:
        return column in self.overrides
