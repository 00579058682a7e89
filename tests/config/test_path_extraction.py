import pytest

from ionserde.config import PathExtractionConfig
from ionserde.core.errors import DuplicatePathError, ExpressionSyntaxError, UnknownColumnError
from ionserde.path import JmesPathExtractor


def test_no_paths(columns, builder) -> None:
    cfg = PathExtractionConfig.from_source({}, columns, builder)
    assert cfg.path_rules() == ()
    assert cfg.get_case_sensitivity() is True
    assert builder.calls == [((), True)]
    assert cfg.path_extractor() is not None


def test_rules_follow_schema_order(columns, builder) -> None:
    cfg = PathExtractionConfig.from_source(
        {"ion.payload.path_extractor": "body", "ion.ID.path_extractor": " meta.id "},
        columns,
        builder,
    )
    assert [(r.column_name, r.expression) for r in cfg.path_rules()] == [
        ("id", "meta.id"),
        ("payload", "body"),
    ]
    assert cfg.directive.for_column("id") == "meta.id"
    assert cfg.directive.for_column("other") is None
    assert len(builder.calls) == 1


def test_case_sensitivity_is_threaded(columns, builder) -> None:
    cfg = PathExtractionConfig.from_source(
        {"ion.path_extractor.case_sensitive": "false", "ion.id.path_extractor": "Meta.Id"},
        columns,
        builder,
    )
    assert cfg.get_case_sensitivity() is False
    rules, case_sensitive = builder.calls[0]
    assert case_sensitive is False
    assert all(r.case_sensitive is False for r in rules)
    assert cfg.path_extractor().case_sensitive is False


def test_case_sensitivity_key_is_not_a_column(columns, builder) -> None:
    # "ion.path_extractor.case_sensitive" does not end with ".path_extractor"
    cfg = PathExtractionConfig.from_source(
        {"ion.path_extractor.case_sensitive": "true"}, columns, builder
    )
    assert cfg.path_rules() == ()


def test_unknown_column(columns, builder) -> None:
    with pytest.raises(UnknownColumnError) as info:
        PathExtractionConfig.from_source({"ion.missing_col.path_extractor": "a"}, columns, builder)
    assert info.value.column == "missing_col"
    assert builder.calls == []


def test_duplicate_paths(columns, builder) -> None:
    with pytest.raises(DuplicatePathError) as info:
        PathExtractionConfig.from_source(
            {"ion.id.path_extractor": "a", "ion.ID.path_extractor": "b"}, columns, builder
        )
    assert info.value.column == "id"


def test_default_builder_extracts(columns) -> None:
    cfg = PathExtractionConfig.from_source(
        {"ion.id.path_extractor": "meta.id", "ion.payload.path_extractor": "body"}, columns
    )
    extractor = cfg.path_extractor()
    assert isinstance(extractor, JmesPathExtractor)
    assert extractor.match({"meta": {"id": 1}, "body": {"kind": "x"}}) == {
        "id": 1,
        "payload": {"kind": "x"},
    }


def test_malformed_expression_names_key(columns) -> None:
    with pytest.raises(ExpressionSyntaxError) as info:
        PathExtractionConfig.from_source({"ion.Id.path_extractor": "meta..id"}, columns)
    err = info.value
    assert err.column == "id"
    assert err.key == "ion.Id.path_extractor"
    assert err.value == "meta..id"
