import pytest
from structlog.testing import capture_logs

from ionserde.config import BaseProperties, EnvSource, MappingSource
from ionserde.core.errors import (
    ConflictingOverrideError,
    DuplicatePathError,
    InvalidConfigValueError,
    MissingConfigError,
    UnknownColumnError,
    UnknownConfigKeyError,
)
from ionserde.core.grammar import Encoding


def test_wraps_plain_mappings_and_reuses_instances() -> None:
    props = BaseProperties({"ion.encoding": "text"})
    assert isinstance(props.source, MappingSource)
    assert BaseProperties.wrap(props) is props
    assert BaseProperties.wrap(None).get_optional("ion.encoding") is None


def test_blank_values_count_as_absent() -> None:
    props = BaseProperties({"a": "  ", "b": " x "})
    assert props.get_optional("a") is None
    assert props.get_optional("b") == "x"
    with pytest.raises(MissingConfigError) as info:
        props.get_required("a")
    assert info.value.key == "a"
    assert props.get_required("b") == "x"


@pytest.mark.parametrize("raw", ["true", "TRUE", " yes ", "1", "on"])
def test_parse_bool_truthy(raw: str) -> None:
    assert BaseProperties.parse_bool("k", raw) is True


@pytest.mark.parametrize("raw", ["false", "False", "no", "0", "off"])
def test_parse_bool_falsy(raw: str) -> None:
    assert BaseProperties.parse_bool("k", raw) is False


def test_parse_bool_rejects_other_text() -> None:
    with pytest.raises(InvalidConfigValueError) as info:
        BaseProperties.parse_bool("ion.fail_on_overflow", "sometimes", column="id")
    err = info.value
    assert (err.key, err.value, err.column) == ("ion.fail_on_overflow", "sometimes", "id")
    assert "boolean" in err.expected


def test_typed_accessors_apply_defaults() -> None:
    props = BaseProperties(
        {"i": "-15", "bad_i": "1.5", "e": "Text", "lst": " a, ,b ,c,"}
    )
    assert props.as_int("i", 0) == -15
    assert props.as_int("absent", 7) == 7
    with pytest.raises(InvalidConfigValueError, match="integer"):
        props.as_int("bad_i", 0)
    assert props.as_enum("e", Encoding, Encoding.BINARY) is Encoding.TEXT
    assert props.as_enum("absent", Encoding, Encoding.BINARY) is Encoding.BINARY
    assert props.as_bool("absent", True) is True
    assert props.as_string_list("lst") == ("a", "b", "c")
    assert props.as_string_list("absent", ["x"]) == ("x",)


def test_parse_enum_reports_allowed_values() -> None:
    with pytest.raises(InvalidConfigValueError) as info:
        BaseProperties.parse_enum("ion.encoding", "utf8", Encoding)
    assert info.value.expected == "one of ['binary', 'text']"


def test_column_key_shapes() -> None:
    assert BaseProperties.column_key("id", "serialize_as") == "ion.id.serialize_as"
    assert BaseProperties.split_column_key("ion.id.serialize_as", "serialize_as") == "id"
    assert BaseProperties.split_column_key("ion.a.b.serialize_as", "serialize_as") == "a.b"
    assert BaseProperties.split_column_key("ion..serialize_as", "serialize_as") is None
    assert BaseProperties.split_column_key("ion.serialize_as", "serialize_as") is None
    assert BaseProperties.split_column_key("other.id.serialize_as", "serialize_as") is None


def test_column_scoped_skips_blank_values() -> None:
    props = BaseProperties(
        {"ion.id.serialize_as": "string", "ion.x.serialize_as": " ", "ion.encoding": "text"}
    )
    assert props.column_scoped("serialize_as") == [("id", "ion.id.serialize_as", "string")]


def test_resolve_column_keys_matches_case_insensitively() -> None:
    props = BaseProperties({"ion.ID.fail_on_overflow": "false"})
    assert props.resolve_column_keys("fail_on_overflow", ["id"]) == {
        "id": ("ion.ID.fail_on_overflow", "false")
    }


def test_resolve_column_keys_environment_names_fold_case() -> None:
    props = BaseProperties(EnvSource(environ={"IONSERDE_USERID__FAIL_ON_OVERFLOW": "false"}))
    resolved = props.resolve_column_keys("fail_on_overflow", ["UserId"])
    assert list(resolved) == ["UserId"]


def test_resolve_column_keys_rejects_unknown_columns() -> None:
    props = BaseProperties({"ion.nope.fail_on_overflow": "false"})
    with pytest.raises(UnknownColumnError) as info:
        props.resolve_column_keys("fail_on_overflow", ["id"])
    assert info.value.column == "nope"
    assert info.value.key == "ion.nope.fail_on_overflow"


def test_resolve_column_keys_conflicts() -> None:
    same = BaseProperties({"ion.id.serialize_as": "string", "ion.ID.serialize_as": "string"})
    assert list(same.resolve_column_keys("serialize_as", ["id"])) == ["id"]

    differ = BaseProperties({"ion.id.path_extractor": "a", "ion.ID.path_extractor": "b"})
    with pytest.raises(ConflictingOverrideError) as info:
        differ.resolve_column_keys("path_extractor", ["id"])
    assert not isinstance(info.value, DuplicatePathError)
    assert info.value.keys == ("ion.id.path_extractor", "ion.ID.path_extractor")
    assert info.value.values == ("a", "b")

    with pytest.raises(DuplicatePathError):
        differ.resolve_column_keys("path_extractor", ["id"], conflict_error=DuplicatePathError)


def test_unrecognized_keys() -> None:
    props = BaseProperties(
        {
            "ion.encoding": "text",
            "ion.id.serialize_as": "string",
            "ion.encodng": "text",
            "ion.id.serialise_as": "string",
            "hive.other": "x",
        }
    )
    assert props.unrecognized_keys() == ["ion.encodng", "ion.id.serialise_as"]


def test_check_unrecognized_keys_warns_by_default() -> None:
    props = BaseProperties({"ion.encodng": "text"})
    with capture_logs() as logs:
        props.check_unrecognized_keys()
    assert [(e["event"], e["log_level"], e["key"]) for e in logs] == [
        ("unrecognized_config_key", "warning", "ion.encodng")
    ]


def test_check_unrecognized_keys_strict_raises() -> None:
    props = BaseProperties({"ion.encodng": "text"})
    with pytest.raises(UnknownConfigKeyError) as info:
        props.check_unrecognized_keys(strict=True)
    assert info.value.key == "ion.encodng"
    assert info.value.value == "text"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("0", 0), ("+7", 7), (" -12 ", -12), ("2147483647", 2**31 - 1), ("-2147483648", -(2**31))],
)
def test_parse_int_accepts_signed_32_bit_integers(raw: str, expected: int) -> None:
    assert BaseProperties.parse_int("k", raw) == expected


@pytest.mark.parametrize(
    "raw", ["1_0", "2147483648", "-2147483649", "0x10", "1e3", "٣", "+", "- 1"]
)
def test_parse_int_rejects_other_forms(raw: str) -> None:
    with pytest.raises(InvalidConfigValueError) as info:
        BaseProperties.parse_int("ion.timestamp.serialization_offset", raw)
    assert info.value.value == raw
