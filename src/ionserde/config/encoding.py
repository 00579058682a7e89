"""Global wire encoding (``ion.encoding``)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ionserde.core.constants import DEFAULT_ENCODING, ENCODING_KEY
from ionserde.core.grammar import Encoding

from .base import BaseProperties
from .source import RawConfigSource

__all__ = ["EncodingConfig"]


@dataclass(frozen=True)
class EncodingConfig:
    """
    Encoding used when writing nested documents.

    Attributes:
        encoding (Encoding): BINARY (default) or TEXT.
    """

    encoding: Encoding = Encoding(DEFAULT_ENCODING)

    @classmethod
    def from_source(
        cls, source: BaseProperties | RawConfigSource | Mapping[str, Any] | None
    ) -> EncodingConfig:
        """
        Raises:
            InvalidConfigValueError: If ``ion.encoding`` is not a known encoding.
        """
        props = BaseProperties.wrap(source)
        return cls(props.as_enum(ENCODING_KEY, Encoding, Encoding(DEFAULT_ENCODING)))

    def get_encoding(self) -> Encoding:
        return self.encoding
