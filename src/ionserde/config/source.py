"""
Raw configuration sources for SerDe properties.

A source is an opaque key -> string lookup. SerDe property components only call
``get(key, default=None)`` and ``keys()``; how the keys are obtained is up to the adapter.

Adapters
- MappingSource — a plain mapping (table properties, a dict of job options).
- EnvSource — environment variables, e.g. ``IONSERDE_ENCODING`` <-> ``ion.encoding``.
- TomlSource — ``ionserde.toml`` or ``[tool.ionserde]`` in ``pyproject.toml``.
- ChainedSource — first source holding a key wins.

``load_source`` applies the precedence environment > TOML, mirroring the usual
env > file > defaults layering (defaults live in the config components).
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ionserde.core.constants import COLUMN_OPTIONS, GLOBAL_KEYS, KEY_NAMESPACE
from ionserde.core.errors import ConfigError

__all__ = [
    "RawConfigSource",
    "MappingSource",
    "EnvSource",
    "TomlSource",
    "ChainedSource",
    "as_source",
    "load_source",
]

ENV_PREFIX = "IONSERDE_"


@runtime_checkable
class RawConfigSource(Protocol):
    """Key -> string lookup consumed by SerDe property components."""

    def get(self, key: str, default: str | None = None) -> str | None: ...

    def keys(self) -> Iterable[str]: ...


def _to_str(value: Any) -> str:
    # TOML/JSON booleans become "true"/"false" rather than "True"/"False".
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class MappingSource:
    """
    Source backed by an in-memory mapping.

    Values are converted to strings at construction; the source does not observe later
    changes to the mapping.

    Examples:
        >>> MappingSource({"ion.fail_on_overflow": False}).get("ion.fail_on_overflow")
        'false'
    """

    def __init__(self, mapping: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {
            str(k): _to_str(v) for k, v in (mapping or {}).items() if v is not None
        }

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key, default)

    def keys(self) -> Iterator[str]:
        return iter(self._data.keys())

    def __repr__(self) -> str:
        return f"MappingSource({self._data!r})"


class EnvSource:
    """
    Source backed by environment variables.

    Key mapping: strip ``ion.``, replace ``.`` with ``__``, upper-case, add the prefix.
    ``ion.timestamp.serialization_offset`` <-> ``IONSERDE_TIMESTAMP__SERIALIZATION_OFFSET``
    and ``ion.id.fail_on_overflow`` <-> ``IONSERDE_ID__FAIL_ON_OVERFLOW``.

    Notes:
        Environment names are upper-case, so column names come back lower-cased; column
        matching is case-insensitive.
    """

    def __init__(self, prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None) -> None:
        self.prefix = prefix
        self._environ = os.environ if environ is None else environ

    def env_name(self, key: str) -> str:
        bare = key[len(KEY_NAMESPACE) :] if key.startswith(KEY_NAMESPACE) else key
        return self.prefix + bare.replace(".", "__").upper()

    def get(self, key: str, default: str | None = None) -> str | None:
        v = self._environ.get(self.env_name(key))
        # Empty variables count as unset.
        return v if v else default

    def key_name(self, env_name: str) -> str:
        """
        Map an environment variable name (prefix included) back to its key.

        Global keys and the known column options are matched first, so the column part
        is everything between the prefix and the final ``__<OPTION>`` and may itself
        contain underscores (``IONSERDE_A__B__FAIL_ON_OVERFLOW`` <-> ``ion.a__b.fail_on_overflow``).
        """
        bare = env_name[len(self.prefix) :]
        for key in GLOBAL_KEYS:
            if self.env_name(key) == env_name:
                return key
        for option in COLUMN_OPTIONS:
            suffix = "__" + option.upper()
            if bare.endswith(suffix) and len(bare) > len(suffix):
                return f"{KEY_NAMESPACE}{bare[: -len(suffix)].lower()}.{option}"
        return KEY_NAMESPACE + bare.lower().replace("__", ".")

    def keys(self) -> Iterator[str]:
        for name, v in self._environ.items():
            if name.startswith(self.prefix) and v and len(name) > len(self.prefix):
                yield self.key_name(name)


def _flatten(table: Mapping[str, Any], parents: tuple[str, ...] = ()) -> Iterator[tuple[str, Any]]:
    for k, v in table.items():
        path = (*parents, str(k))
        if isinstance(v, Mapping):
            yield from _flatten(v, path)
        else:
            yield ".".join(path), v


class TomlSource(MappingSource):
    """
    Source backed by a TOML document.

    Nested tables are flattened into dotted keys under the ``ion.`` namespace, so

        [ion]
        encoding = "text"
        [ion.id]
        serialize_as = "string"

    yields ``ion.encoding`` and ``ion.id.serialize_as``. Top-level keys without the
    namespace (``encoding = "text"``) are placed under it.
    """

    def __init__(self, table: Mapping[str, Any] | None = None, path: Path | None = None) -> None:
        flat: dict[str, Any] = {}
        for key, value in _flatten(table or {}):
            if not key.startswith(KEY_NAMESPACE):
                key = KEY_NAMESPACE + key
            flat[key] = value
        super().__init__(flat)
        self.path = path

    @classmethod
    def from_path(cls, path: str | os.PathLike[str] | None = None) -> TomlSource:
        """
        Build a TomlSource from a TOML file.

        Search order when `path` is None:
            1) ./ionserde.toml (top-level keys or an [ion] table)
            2) ./pyproject.toml under [tool.ionserde]

        Returns an empty source if no candidate file exists.

        Raises:
            ConfigError: If a candidate file is not valid TOML.
        """
        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "ionserde.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"malformed TOML in {p}: {exc}") from exc
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("ionserde", {}) if isinstance(tool, dict) else {}
            else:
                cfg = data
            if cfg:
                return cls(cfg, path=p)
        return cls({})


class ChainedSource:
    """Source consulting several sources in order; the first one holding a key wins."""

    def __init__(self, *sources: RawConfigSource) -> None:
        self.sources = tuple(sources)

    def get(self, key: str, default: str | None = None) -> str | None:
        for src in self.sources:
            v = src.get(key)
            if v is not None:
                return v
        return default

    def keys(self) -> Iterator[str]:
        seen: set[str] = set()
        for src in self.sources:
            for k in src.keys():
                if k not in seen:
                    seen.add(k)
                    yield k


def as_source(obj: RawConfigSource | Mapping[str, Any] | None) -> RawConfigSource:
    """Wrap plain mappings (and None) in a MappingSource; pass sources through."""
    if obj is None or isinstance(obj, Mapping):
        return MappingSource(obj)
    if isinstance(obj, RawConfigSource):
        return obj
    raise TypeError(f"unsupported configuration source {type(obj).__name__}")


def load_source(
    path: str | os.PathLike[str] | None = None, env_prefix: str = ENV_PREFIX
) -> ChainedSource:
    """
    Build the default source applying precedence: environment > TOML.

    Args:
        path: Optional explicit TOML path. If None, search defaults (ionserde.toml, pyproject.toml).
        env_prefix: Prefix of recognized environment variables.
    """
    return ChainedSource(EnvSource(env_prefix), TomlSource.from_path(path))
