"""Fact name normalization."""

from __future__ import annotations

from enum import Enum
from typing import Any


def normalize_name(name: Any) -> str:
    """Return the canonical lower-cased form of a fact name."""
    if isinstance(name, Enum):
        name = name.value if isinstance(name.value, str) else name.name
    return str(name).strip().lower()
