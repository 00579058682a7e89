"""
ionserde.path — Path rules and the extraction engine contract.

## Public API
- PathRule — frozen model binding a path expression to a column.
- Extractor / ExtractorBuilder — protocols for the opaque extraction engine.
- JmesPathExtractorBuilder — default builder compiling expressions with jmespath.

## Import DAG discipline
- Depends on ionserde.core, pydantic and jmespath.
- MUST NOT import ionserde.config.
"""

from __future__ import annotations

from .extractor import Extractor, ExtractorBuilder, JmesPathExtractor, JmesPathExtractorBuilder
from .rules import PathRule

__all__ = [
    "PathRule",
    "Extractor",
    "ExtractorBuilder",
    "JmesPathExtractor",
    "JmesPathExtractorBuilder",
]
