"""Logging for the ``finance_copilot`` package.

Library modules only ever call ``get_logger("finance_copilot.<module>")``; the
package logger stays silent (a ``NullHandler``) until an entry point calls
:func:`configure_logging`. The CLI does that once, before any command runs,
and sends records to stderr so stdout carries only report text.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "finance_copilot"
LEVEL_ENV_VAR = "FINANCE_COPILOT_LOG_LEVEL"
DEFAULT_LEVEL = logging.WARNING
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def resolve_level(level: int | str | None = None) -> int:
    """Turn ``level`` (or ``$FINANCE_COPILOT_LOG_LEVEL``) into a numeric level.

    Accepts ints, numeric strings and case-insensitive level names. Anything
    unrecognised resolves to ``WARNING``.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or DEFAULT_LEVEL
    if isinstance(level, int):
        return level
    text = level.strip().upper()
    if text.isdigit():
        return int(text)
    return logging.getLevelNamesMapping().get(text, DEFAULT_LEVEL)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach one stream handler to the package logger; later calls are no-ops.

    Parameters
    ----------
    level:
        Numeric level or level name. ``None`` defers to
        ``FINANCE_COPILOT_LOG_LEVEL``, then ``WARNING``.
    fmt:
        Record format; ``DEFAULT_FORMAT`` when omitted.
    stream:
        Destination; ``sys.stderr`` when omitted.
    """

    global _handler
    if _handler is not None:
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in [h for h in logger.handlers if isinstance(h, logging.NullHandler)]:
        logger.removeHandler(existing)

    numeric = resolve_level(level)
    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    _handler.setLevel(numeric)

    logger.addHandler(_handler)
    logger.setLevel(numeric)
    logger.propagate = False


def reset_logging() -> None:
    """Detach the handler installed by :func:`configure_logging`, if any."""

    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging", "resolve_level"]
