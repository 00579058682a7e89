import pytest

from ionserde.config import FailOnOverflowConfig
from ionserde.core.errors import ConflictingOverrideError, InvalidConfigValueError, UnknownColumnError


def test_default_is_true(columns: list[str]) -> None:
    cfg = FailOnOverflowConfig.from_source({}, columns)
    assert cfg.fail_on_overflow_for("id") is True
    assert cfg.fail_on_overflow_for("payload") is True
    assert cfg.directive.overrides == {}


def test_column_override_with_compiled_default(columns: list[str]) -> None:
    cfg = FailOnOverflowConfig.from_source({"ion.id.fail_on_overflow": "false"}, columns)
    assert cfg.fail_on_overflow_for("id") is False
    assert cfg.fail_on_overflow_for("payload") is True
    assert cfg.directive.has_override("id")


def test_global_default_and_override(columns: list[str]) -> None:
    cfg = FailOnOverflowConfig.from_source(
        {"ion.fail_on_overflow": "false", "ion.payload.fail_on_overflow": "true"}, columns
    )
    assert cfg.fail_on_overflow_for("id") is False
    assert cfg.fail_on_overflow_for("payload") is True


def test_invalid_override_names_column(columns: list[str]) -> None:
    with pytest.raises(InvalidConfigValueError) as info:
        FailOnOverflowConfig.from_source({"ion.id.fail_on_overflow": "maybe"}, columns)
    assert info.value.column == "id"


def test_invalid_global_default(columns: list[str]) -> None:
    with pytest.raises(InvalidConfigValueError) as info:
        FailOnOverflowConfig.from_source({"ion.fail_on_overflow": "2"}, columns)
    assert info.value.key == "ion.fail_on_overflow"


def test_unknown_column(columns: list[str]) -> None:
    with pytest.raises(UnknownColumnError, match="ghost"):
        FailOnOverflowConfig.from_source({"ion.ghost.fail_on_overflow": "false"}, columns)


def test_conflicting_overrides(columns: list[str]) -> None:
    with pytest.raises(ConflictingOverrideError) as info:
        FailOnOverflowConfig.from_source(
            {"ion.id.fail_on_overflow": "false", "ion.Id.fail_on_overflow": "true"}, columns
        )
    assert info.value.column == "id"
