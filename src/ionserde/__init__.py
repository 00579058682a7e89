"""
ionserde — SerDe property resolution for tables stored as nested (Ion-style) documents.

Subpackages
- ionserde.core — enums, column types, errors, constants, logging (zero-IO).
- ionserde.path — path rules and the extraction engine contract.
- ionserde.config — raw sources, per-option components and the SerDeProperties facade.
"""

from __future__ import annotations

from .config import SerDeProperties, load_source
from .core.errors import ConfigError
from .core.grammar import Encoding, SerializeNullStrategy, ValueType

__all__ = [
    "SerDeProperties",
    "load_source",
    "ConfigError",
    "Encoding",
    "SerializeNullStrategy",
    "ValueType",
]

__version__ = "0.1.0"
