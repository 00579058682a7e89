"""
Path extraction engine contract and the default jmespath-backed builder.

PathExtractionConfig never interprets path expressions. It validates which column each
expression belongs to and delegates compilation to an ExtractorBuilder:

    build(rules, case_sensitive) -> Extractor      (raises ExpressionSyntaxError)

The returned Extractor is immutable and reusable across records and threads.

Default engine
- JmesPathExtractorBuilder compiles each expression with ``jmespath.compile``
  (dotted field access, indexes, wildcards and projections such as ``items[*].id``).
- Case-insensitive matching lower-cases field names on both sides of the lookup (the
  expression's field nodes and a lookup copy of the document). Literals are compared
  as written and matched values are returned unchanged. When sibling fields differ
  only by case, the first one in document order is the one a path reaches.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import jmespath
from jmespath.exceptions import JMESPathError
from jmespath.parser import ParsedResult

from ionserde.core.errors import ExpressionSyntaxError

from .rules import PathRule

__all__ = [
    "Extractor",
    "ExtractorBuilder",
    "JmesPathExtractor",
    "JmesPathExtractorBuilder",
]


@runtime_checkable
class Extractor(Protocol):
    """Compiled set of path rules."""

    def match(self, document: Mapping[str, Any]) -> dict[str, Any]:
        """Return column name -> matched value for every rule that matched ``document``."""
        ...


@runtime_checkable
class ExtractorBuilder(Protocol):
    """Compiles path rules into an Extractor."""

    def build(self, rules: Sequence[PathRule], case_sensitive: bool) -> Extractor:
        """
        Raises:
            ExpressionSyntaxError: If an expression is malformed; ``column`` names its rule.
        """
        ...


def _fold_document(value: Any, originals: dict[int, Any]) -> Any:
    # Lookup copy with lower-cased field names; originals maps each copied container
    # back to the document object it was made from.
    if isinstance(value, Mapping):
        folded: dict[str, Any] = {}
        for k, v in value.items():
            name = str(k).lower()
            if name not in folded:
                folded[name] = _fold_document(v, originals)
        originals[id(folded)] = value
        return folded
    if isinstance(value, list):
        items = [_fold_document(v, originals) for v in value]
        originals[id(items)] = value
        return items
    return value


def _restore(found: Any, originals: dict[int, Any]) -> Any:
    if isinstance(found, (dict, list)):
        if id(found) in originals:
            return originals[id(found)]
        if isinstance(found, dict):
            return {k: _restore(v, originals) for k, v in found.items()}
        return [_restore(v, originals) for v in found]
    return found


def _fold_fields(node: dict[str, Any]) -> dict[str, Any]:
    # Copy of a parsed expression with field names lower-cased; literals are untouched.
    folded = dict(node)
    folded["children"] = [
        _fold_fields(c) if isinstance(c, dict) else c for c in node.get("children", [])
    ]
    if node.get("type") == "field":
        folded["value"] = node["value"].lower()
    return folded


@dataclass(frozen=True, slots=True)
class JmesPathExtractor:
    """
    Extractor evaluating compiled jmespath expressions, one per column.

    Notes:
        Matched values are always the document's own objects; case-insensitive mode only
        changes how field names are looked up.
    """

    compiled: tuple[tuple[str, Any], ...]
    case_sensitive: bool = True

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.compiled)

    def match(self, document: Mapping[str, Any]) -> dict[str, Any]:
        originals: dict[int, Any] = {}
        doc = document if self.case_sensitive else _fold_document(document, originals)
        out: dict[str, Any] = {}
        for column, expr in self.compiled:
            found = expr.search(doc)
            if found is not None:
                out[column] = found if self.case_sensitive else _restore(found, originals)
        return out


class JmesPathExtractorBuilder:
    """Default ExtractorBuilder backed by jmespath."""

    def build(self, rules: Sequence[PathRule], case_sensitive: bool) -> JmesPathExtractor:
        compiled: list[tuple[str, Any]] = []
        for rule in rules:
            try:
                parsed = jmespath.compile(rule.expression)
            except JMESPathError as exc:
                raise ExpressionSyntaxError(
                    f"malformed path expression {rule.expression!r}: {exc}",
                    value=rule.expression,
                    column=rule.column_name,
                ) from exc
            if not case_sensitive:
                # Compiled trees are cached by jmespath, so fold a copy.
                parsed = ParsedResult(rule.expression, _fold_fields(parsed.parsed))
            compiled.append((rule.column_name, parsed))
        return JmesPathExtractor(tuple(compiled), case_sensitive)
