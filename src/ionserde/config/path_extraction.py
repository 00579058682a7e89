"""
Per-column path extraction rules.

Keys:
    ion.<column>.path_extractor           path expression locating the column's value
    ion.path_extractor.case_sensitive     global case sensitivity (true when absent)

This module decides which column every expression feeds and threads the case-sensitivity
flag; compiling and evaluating expressions is the ExtractorBuilder's job.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ionserde.core.constants import (
    DEFAULT_PATH_CASE_SENSITIVE,
    PATH_CASE_SENSITIVE_KEY,
    PATH_EXTRACTOR_OPTION,
)
from ionserde.core.errors import DuplicatePathError, ExpressionSyntaxError
from ionserde.core.log import get_logger
from ionserde.path import Extractor, ExtractorBuilder, JmesPathExtractorBuilder, PathRule

from .base import BaseProperties
from .directive import ColumnDirective
from .source import RawConfigSource

__all__ = ["PathExtractionConfig"]

log = get_logger(__name__)


@dataclass(frozen=True)
class PathExtractionConfig:
    """
    Resolved path rules and the extractor built from them.

    Attributes:
        case_sensitive (bool): Whether field names must match exactly.
        rules (tuple[PathRule, ...]): One rule per configured column, in schema order.
        extractor (Extractor): Compiled, reusable extractor.
    """

    case_sensitive: bool
    rules: tuple[PathRule, ...]
    extractor: Extractor = field(compare=False)

    @classmethod
    def from_source(
        cls,
        source: BaseProperties | RawConfigSource | Mapping[str, str] | None,
        column_names: Sequence[str],
        builder: ExtractorBuilder | None = None,
    ) -> PathExtractionConfig:
        """
        Raises:
            InvalidConfigValueError: If the case-sensitivity flag is not a boolean.
            UnknownColumnError: If a path key names an undeclared column.
            DuplicatePathError: If one column is bound to two different expressions.
            ExpressionSyntaxError: If the builder rejects an expression.
        """
        props = BaseProperties.wrap(source)
        case_sensitive = props.as_bool(PATH_CASE_SENSITIVE_KEY, DEFAULT_PATH_CASE_SENSITIVE)
        bound = props.resolve_column_keys(
            PATH_EXTRACTOR_OPTION, column_names, conflict_error=DuplicatePathError
        )
        rules = tuple(
            PathRule(column_name=c, expression=bound[c][1], case_sensitive=case_sensitive)
            for c in column_names
            if c in bound
        )

        builder = builder or JmesPathExtractorBuilder()
        try:
            extractor = builder.build(rules, case_sensitive)
        except ExpressionSyntaxError as exc:
            column = exc.column
            key = bound[column][0] if column in bound else None
            raise ExpressionSyntaxError(
                f"column {column!r} ({key}): {exc}",
                key=key,
                value=exc.value,
                column=column,
            ) from exc

        if rules:
            log.debug(
                "path_rules_built",
                case_sensitive=case_sensitive,
                columns=[r.column_name for r in rules],
            )
        return cls(case_sensitive, rules, extractor)

    @property
    def directive(self) -> ColumnDirective[str | None]:
        """Expression per column (None for columns without a rule)."""
        return ColumnDirective(None, {r.column_name: r.expression for r in self.rules})

    def path_extractor(self) -> Extractor:
        return self.extractor

    def get_case_sensitivity(self) -> bool:
        return self.case_sensitive

    def path_rules(self) -> tuple[PathRule, ...]:
        return self.rules
