"""Process-wide debug toggle."""

from __future__ import annotations

import logging
from typing import Any

GREEN = "\033[0;32m"
RESET = "\033[0m"

logger = logging.getLogger("hostfacts.debug")

_debug = False


def set_debug(mode: Any) -> None:
    """Turn debugging on or off.

    Booleans are taken as-is, numbers are on when positive, strings are on
    unless they read "off". Anything else turns debugging off.
    """
    global _debug
    if isinstance(mode, bool):
        _debug = mode
    elif isinstance(mode, int | float):
        _debug = mode > 0
    elif isinstance(mode, str):
        _debug = mode.strip().lower() != "off"
    else:
        _debug = False


def is_debugging() -> bool:
    return _debug


def debug(message: str | None) -> None:
    """Print ``message`` in green when debugging is on."""
    if message is None or not _debug:
        return
    logger.debug(message)
    print(f"{GREEN}{message}{RESET}")
