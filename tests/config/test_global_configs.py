import dataclasses

import pytest

from ionserde.config import EncodingConfig, SerializeNullConfig, TimestampOffsetConfig
from ionserde.core.errors import InvalidConfigValueError
from ionserde.core.grammar import Encoding, SerializeNullStrategy


def test_defaults_when_keys_absent() -> None:
    assert EncodingConfig.from_source({}).get_encoding() is Encoding.BINARY
    assert SerializeNullConfig.from_source(None).get_serialize_null() is SerializeNullStrategy.OMIT
    assert TimestampOffsetConfig.from_source({}).get_timestamp_offset_in_minutes() == 0


@pytest.mark.parametrize(
    ("raw", "expected"), [("text", Encoding.TEXT), (" BINARY ", Encoding.BINARY)]
)
def test_encoding_values(raw: str, expected: Encoding) -> None:
    assert EncodingConfig.from_source({"ion.encoding": raw}).get_encoding() is expected


def test_encoding_rejects_unknown() -> None:
    with pytest.raises(InvalidConfigValueError) as info:
        EncodingConfig.from_source({"ion.encoding": "json"})
    assert info.value.key == "ion.encoding"
    assert info.value.value == "json"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("omit", SerializeNullStrategy.OMIT),
        ("UNTYPED", SerializeNullStrategy.UNTYPED),
        ("typed", SerializeNullStrategy.TYPED),
        ("typed_null", SerializeNullStrategy.TYPED),
        ("untyped_null", SerializeNullStrategy.UNTYPED),
    ],
)
def test_serialize_null_values(raw: str, expected: SerializeNullStrategy) -> None:
    cfg = SerializeNullConfig.from_source({"ion.serialize_null": raw})
    assert cfg.get_serialize_null() is expected


def test_serialize_null_rejects_unknown() -> None:
    with pytest.raises(InvalidConfigValueError, match="ion.serialize_null"):
        SerializeNullConfig.from_source({"ion.serialize_null": "skip"})


@pytest.mark.parametrize(("raw", "expected"), [("0", 0), ("-480", -480), ("+330", 330), ("100000", 100000)])
def test_timestamp_offset_accepts_any_integer(raw: str, expected: int) -> None:
    cfg = TimestampOffsetConfig.from_source({"ion.timestamp.serialization_offset": raw})
    assert cfg.get_timestamp_offset_in_minutes() == expected


@pytest.mark.parametrize("raw", ["1.5", "abc", "60m", "1_0", "99999999999"])
def test_timestamp_offset_rejects_non_integers(raw: str) -> None:
    with pytest.raises(InvalidConfigValueError) as info:
        TimestampOffsetConfig.from_source({"ion.timestamp.serialization_offset": raw})
    assert info.value.expected == "an integer"


def test_global_configs_are_frozen() -> None:
    cfg = EncodingConfig.from_source({})
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.encoding = Encoding.TEXT  # type: ignore[misc]
