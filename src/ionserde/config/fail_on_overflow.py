"""
Per-column numeric overflow policy.

Keys:
    ion.fail_on_overflow             global default (true when absent)
    ion.<column>.fail_on_overflow    per-column override

When a value does not fit its column type the serializer either fails (true) or
clamps/drops the value (false).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ionserde.core.constants import (
    DEFAULT_FAIL_ON_OVERFLOW,
    FAIL_ON_OVERFLOW_KEY,
    FAIL_ON_OVERFLOW_OPTION,
)
from ionserde.core.log import get_logger

from .base import BaseProperties
from .directive import ColumnDirective
from .source import RawConfigSource

__all__ = ["FailOnOverflowConfig"]

log = get_logger(__name__)


@dataclass(frozen=True)
class FailOnOverflowConfig:
    """
    Resolved overflow policy per column.

    Attributes:
        directive (ColumnDirective[bool]): Global default plus per-column overrides.
    """

    directive: ColumnDirective[bool] = field(
        default_factory=lambda: ColumnDirective(DEFAULT_FAIL_ON_OVERFLOW)
    )

    @classmethod
    def from_source(
        cls,
        source: BaseProperties | RawConfigSource | Mapping[str, Any] | None,
        column_names: Iterable[str],
    ) -> FailOnOverflowConfig:
        """
        Raises:
            InvalidConfigValueError: If the default or an override is not a boolean.
            UnknownColumnError: If an override names an undeclared column.
            ConflictingOverrideError: If one column receives two different overrides.
        """
        props = BaseProperties.wrap(source)
        default = props.as_bool(FAIL_ON_OVERFLOW_KEY, DEFAULT_FAIL_ON_OVERFLOW)
        overrides = {
            column: props.parse_bool(key, raw, column=column)
            for column, (key, raw) in props.resolve_column_keys(
                FAIL_ON_OVERFLOW_OPTION, column_names
            ).items()
        }
        if overrides:
            log.debug("fail_on_overflow_overrides", default=default, overrides=overrides)
        return cls(ColumnDirective(default, overrides))

    def fail_on_overflow_for(self, column_name: str) -> bool:
        """True if overflow in ``column_name`` must fail; unknown names get the default."""
        return self.directive.for_column(column_name)
