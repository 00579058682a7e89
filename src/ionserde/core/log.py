"""
Structured logging setup for ionserde.

Modules obtain loggers through ``get_logger(__name__)`` and emit key-value events
(``log.debug("serde_properties_resolved", columns=3)``). Host applications call
``configure_logging`` once to route structlog events through the stdlib logging tree;
until then structlog's defaults apply.

Notes:
    - Only configuration components log; zero-IO helpers (grammar, types) never do.
    - Events are lower_snake names with structured context, never formatted strings.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any, Final

import structlog
from structlog.stdlib import BoundLogger

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "configure_logging",
    "get_logger",
]

DEFAULT_LOG_LEVEL: Final[int] = logging.WARNING

_KEY_ORDER: Final[Sequence[str]] = ("timestamp", "level", "logger", "event")


def _coerce_log_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    mapped = logging.getLevelNamesMapping().get(level.upper())
    if mapped is None:
        raise ValueError(f"Unsupported log level: {level}")
    return mapped


def configure_logging(level: int | str = DEFAULT_LOG_LEVEL) -> None:
    """
    Route structlog events through stdlib logging with a key-value renderer.

    Args:
        level (int | str): Minimum level, as a number or a name such as "DEBUG".

    Raises:
        ValueError: If ``level`` is an unknown level name.
    """
    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.KeyValueRenderer(key_order=_KEY_ORDER, drop_missing=True),
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logging.basicConfig(handlers=[handler], level=_coerce_log_level(level), force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "ionserde") -> Any:
    """Return a lazily bound structlog logger for ``name``."""
    return structlog.get_logger(name)
