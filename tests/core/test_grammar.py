import pytest

from ionserde.core.grammar import (
    CONTAINER_VALUE_TYPES,
    SCALAR_VALUE_TYPES,
    Encoding,
    SerializeNullStrategy,
    ValueType,
    encoding_from_value,
    ensure_all_enum_values_lower_snake,
    serialize_null_from_value,
    value_type_from_value,
)


def test_all_enum_values_are_lower_snake() -> None:
    ensure_all_enum_values_lower_snake([Encoding, SerializeNullStrategy, ValueType])


@pytest.mark.parametrize("raw", ["binary", "BINARY", " Binary "])
def test_encoding_from_value_ignores_case_and_whitespace(raw: str) -> None:
    assert encoding_from_value(raw) is Encoding.BINARY


def test_serialize_null_aliases() -> None:
    assert serialize_null_from_value("UNTYPED_NULL") is SerializeNullStrategy.UNTYPED
    assert serialize_null_from_value("typed_null") is SerializeNullStrategy.TYPED
    assert serialize_null_from_value("omit") is SerializeNullStrategy.OMIT


def test_value_type_aliases_and_rejection() -> None:
    assert value_type_from_value("Boolean") is ValueType.BOOL
    assert value_type_from_value("integer") is ValueType.INT
    with pytest.raises(ValueError, match="ValueType must be one of"):
        value_type_from_value("varchar")


def test_scalar_and_container_types_partition_value_types() -> None:
    assert SCALAR_VALUE_TYPES.isdisjoint(CONTAINER_VALUE_TYPES)
    assert SCALAR_VALUE_TYPES | CONTAINER_VALUE_TYPES == set(ValueType)
    assert CONTAINER_VALUE_TYPES == {ValueType.LIST, ValueType.SEXP, ValueType.STRUCT}
