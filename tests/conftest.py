from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import polars as pl
import pytest

from ionserde.core.log import configure_logging
from ionserde.path import PathRule


def pytest_configure(config: pytest.Config) -> None:
    configure_logging("WARNING")


class FakeExtractor:
    def __init__(self, rules: tuple[PathRule, ...], case_sensitive: bool) -> None:
        self.rules = rules
        self.case_sensitive = case_sensitive

    def match(self, document: Mapping[str, Any]) -> dict[str, Any]:
        return {r.column_name: document.get(r.expression) for r in self.rules}


class RecordingBuilder:
    """ExtractorBuilder double that records every build call."""

    def __init__(self) -> None:
        self.calls: list[tuple[tuple[PathRule, ...], bool]] = []

    def build(self, rules: Sequence[PathRule], case_sensitive: bool) -> FakeExtractor:
        self.calls.append((tuple(rules), case_sensitive))
        return FakeExtractor(tuple(rules), case_sensitive)


@pytest.fixture
def builder() -> RecordingBuilder:
    return RecordingBuilder()


@pytest.fixture
def columns() -> list[str]:
    return ["id", "payload"]


@pytest.fixture
def column_types() -> list[Any]:
    return [pl.Int64, pl.Struct({"kind": pl.String, "score": pl.Float64})]
