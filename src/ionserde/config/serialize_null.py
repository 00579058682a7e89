"""Global null serialization strategy (``ion.serialize_null``)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ionserde.core.constants import DEFAULT_SERIALIZE_NULL, SERIALIZE_NULL_KEY
from ionserde.core.grammar import SERIALIZE_NULL_ALIASES, SerializeNullStrategy

from .base import BaseProperties
from .source import RawConfigSource

__all__ = ["SerializeNullConfig"]


@dataclass(frozen=True)
class SerializeNullConfig:
    """
    How null column values are written.

    Attributes:
        serialize_null (SerializeNullStrategy): OMIT (default), UNTYPED or TYPED.

    Notes:
        Independent of the column schema; no per-column variant exists.
    """

    serialize_null: SerializeNullStrategy = SerializeNullStrategy(DEFAULT_SERIALIZE_NULL)

    @classmethod
    def from_source(
        cls, source: BaseProperties | RawConfigSource | Mapping[str, Any] | None
    ) -> SerializeNullConfig:
        """
        Raises:
            InvalidConfigValueError: If ``ion.serialize_null`` is not a known strategy.
        """
        props = BaseProperties.wrap(source)
        return cls(
            props.as_enum(
                SERIALIZE_NULL_KEY,
                SerializeNullStrategy,
                SerializeNullStrategy(DEFAULT_SERIALIZE_NULL),
                SERIALIZE_NULL_ALIASES,
            )
        )

    def get_serialize_null(self) -> SerializeNullStrategy:
        return self.serialize_null
