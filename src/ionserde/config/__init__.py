"""
ionserde.config — Resolution of raw table properties into typed SerDe directives.

## Responsibilities
- Parse ``ion.*`` keys from a raw source and validate them against the column schema.
- Apply compiled-in defaults and per-column overrides.
- Expose one immutable, read-only facade (SerDeProperties) to serializers/deserializers.

## Public API
- SerDeProperties — facade; construction validates everything or raises.
- EncodingConfig, SerializeNullConfig, TimestampOffsetConfig — global options.
- FailOnOverflowConfig, SerializeAsConfig, PathExtractionConfig — per-column options.
- BaseProperties, ColumnDirective — shared parsing helpers and the override/default resolver.
- MappingSource, EnvSource, TomlSource, ChainedSource, load_source — raw sources.

## Import DAG discipline
- Depends on ionserde.core, ionserde.path, pydantic and structlog.

## Examples
```python
import polars as pl
from ionserde.config import SerDeProperties, load_source

props = SerDeProperties(load_source(), ["id", "payload"], [pl.Int64, "struct<a:string>"])
props.get_encoding()  # Encoding.BINARY unless configured
```
"""

from __future__ import annotations

from .base import BaseProperties
from .directive import ColumnDirective
from .encoding import EncodingConfig
from .fail_on_overflow import FailOnOverflowConfig
from .path_extraction import PathExtractionConfig
from .properties import ResolvedSerDeConfig, SerDeProperties
from .serialize_as import SerializeAsConfig
from .serialize_null import SerializeNullConfig
from .source import (
    ChainedSource,
    EnvSource,
    MappingSource,
    RawConfigSource,
    TomlSource,
    as_source,
    load_source,
)
from .timestamp_offset import TimestampOffsetConfig

__all__ = [
    "SerDeProperties",
    "ResolvedSerDeConfig",
    "BaseProperties",
    "ColumnDirective",
    "EncodingConfig",
    "SerializeNullConfig",
    "TimestampOffsetConfig",
    "FailOnOverflowConfig",
    "SerializeAsConfig",
    "PathExtractionConfig",
    "RawConfigSource",
    "MappingSource",
    "EnvSource",
    "TomlSource",
    "ChainedSource",
    "as_source",
    "load_source",
]
