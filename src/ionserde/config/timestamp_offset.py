"""Global timestamp offset in minutes (``ion.timestamp.serialization_offset``)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ionserde.core.constants import DEFAULT_TIMESTAMP_OFFSET_MINUTES, TIMESTAMP_OFFSET_KEY

from .base import BaseProperties
from .source import RawConfigSource

__all__ = ["TimestampOffsetConfig"]


@dataclass(frozen=True)
class TimestampOffsetConfig:
    """
    Offset applied when normalizing timestamps, as signed minutes from UTC.

    Notes:
        Any signed 32-bit integer is accepted; no further range check.
    """

    offset_minutes: int = DEFAULT_TIMESTAMP_OFFSET_MINUTES

    @classmethod
    def from_source(
        cls, source: BaseProperties | RawConfigSource | Mapping[str, Any] | None
    ) -> TimestampOffsetConfig:
        """
        Raises:
            InvalidConfigValueError: If the value is not an integer.
        """
        props = BaseProperties.wrap(source)
        return cls(props.as_int(TIMESTAMP_OFFSET_KEY, DEFAULT_TIMESTAMP_OFFSET_MINUTES))

    def get_timestamp_offset_in_minutes(self) -> int:
        return self.offset_minutes
