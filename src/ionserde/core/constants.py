"""
ionserde core key names and compiled-in defaults.

Defines the configuration key namespace, the option names recognized under it, and the
defaults applied when a key is absent. This module is zero-IO and uses only the Python
standard library.

Notes:
    - Global keys have the shape ``ion.<option>``.
    - Column-scoped keys have the shape ``ion.<column>.<option>``.
    - Changes to defaults should be made here; config components only consume them.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "KEY_NAMESPACE",
    "ENCODING_KEY",
    "SERIALIZE_NULL_KEY",
    "TIMESTAMP_OFFSET_KEY",
    "FAIL_ON_OVERFLOW_KEY",
    "PATH_CASE_SENSITIVE_KEY",
    "FAIL_ON_OVERFLOW_OPTION",
    "SERIALIZE_AS_OPTION",
    "PATH_EXTRACTOR_OPTION",
    "GLOBAL_KEYS",
    "COLUMN_OPTIONS",
    "DEFAULT_ENCODING",
    "DEFAULT_SERIALIZE_NULL",
    "DEFAULT_TIMESTAMP_OFFSET_MINUTES",
    "DEFAULT_FAIL_ON_OVERFLOW",
    "DEFAULT_PATH_CASE_SENSITIVE",
]

# Every recognized key starts with this namespace.
KEY_NAMESPACE: Final[str] = "ion."

# Global keys
ENCODING_KEY: Final[str] = "ion.encoding"
SERIALIZE_NULL_KEY: Final[str] = "ion.serialize_null"
TIMESTAMP_OFFSET_KEY: Final[str] = "ion.timestamp.serialization_offset"
FAIL_ON_OVERFLOW_KEY: Final[str] = "ion.fail_on_overflow"
PATH_CASE_SENSITIVE_KEY: Final[str] = "ion.path_extractor.case_sensitive"

# Column-scoped options (ion.<column>.<option>)
FAIL_ON_OVERFLOW_OPTION: Final[str] = "fail_on_overflow"
SERIALIZE_AS_OPTION: Final[str] = "serialize_as"
PATH_EXTRACTOR_OPTION: Final[str] = "path_extractor"

GLOBAL_KEYS: Final[frozenset[str]] = frozenset(
    {
        ENCODING_KEY,
        SERIALIZE_NULL_KEY,
        TIMESTAMP_OFFSET_KEY,
        FAIL_ON_OVERFLOW_KEY,
        PATH_CASE_SENSITIVE_KEY,
    }
)

COLUMN_OPTIONS: Final[frozenset[str]] = frozenset(
    {FAIL_ON_OVERFLOW_OPTION, SERIALIZE_AS_OPTION, PATH_EXTRACTOR_OPTION}
)

# Defaults (enum defaults are stored by value to keep this module free of grammar imports).
DEFAULT_ENCODING: Final[str] = "binary"
DEFAULT_SERIALIZE_NULL: Final[str] = "omit"
DEFAULT_TIMESTAMP_OFFSET_MINUTES: Final[int] = 0
DEFAULT_FAIL_ON_OVERFLOW: Final[bool] = True
DEFAULT_PATH_CASE_SENSITIVE: Final[bool] = True
