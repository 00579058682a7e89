"""
Pydantic model binding a path expression to a table column.

A PathRule says where, inside a nested input document, the value of one column lives.
Rules are built once by PathExtractionConfig and handed to an ExtractorBuilder.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = ["PathRule"]


class PathRule(BaseModel):
    """
    Path expression bound to a single output column.

    Attributes:
        column_name (str): Declared column receiving the matched value.
        expression (str): Path expression in the extraction engine's grammar.
        case_sensitive (bool): Whether field names must match exactly.

    Raises:
        pydantic.ValidationError: If the column name or expression is blank. The expression
            is stripped; the column name is kept as declared.

    Examples:
        >>> from ionserde.path.rules import PathRule
        >>> PathRule(column_name="id", expression="meta.id", case_sensitive=True).expression
        'meta.id'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    column_name: str
    expression: str
    case_sensitive: bool = True

    @field_validator("column_name")
    @classmethod
    def _column_not_blank(cls, v: str) -> str:
        # Kept verbatim: it is the key the matched value is returned under.
        if not v.strip():
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("expression")
    @classmethod
    def _expression_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must be a non-empty string")
        return v
