"""
Core contracts for ionserde (grammar, column types, errors, constants, logging).

## Contracts (single source of truth)
- Grammar — Encoding, SerializeNullStrategy and ValueType enums plus normalizers.
- Types — polars dtypes as column type descriptors and the serialize-as compatibility table.
- Errors — the configuration error taxonomy raised at table initialization.
- Constants — key names and compiled-in defaults.

## Notes
- Zero-IO policy: stdlib + polars only; no file/network IO.
- Naming policy: enum `.value` and configuration option names are lower_snake.

## Downstream usage
- ionserde.path — builds extractors from path rules and raises core errors.
- ionserde.config — parses raw keys into typed directives using grammar/types/constants.

## Examples
```python
import polars as pl
from ionserde.core.grammar import ValueType, value_type_from_value
from ionserde.core.types import is_compatible_override

is_compatible_override(pl.Int64, value_type_from_value("string"))  # True
is_compatible_override(pl.Struct({"a": pl.Int64}), ValueType.INT)  # False
```
"""
