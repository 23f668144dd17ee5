"""Exceptions raised by the fact registry."""

from __future__ import annotations


class FactError(Exception):
    """Base class for hostfacts errors."""


class UnknownFactError(FactError, AttributeError):
    """Raised when an accessor asks for a fact that was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find fact '{name}'")
        self.name = name


class SettingsError(FactError, ValueError):
    """Raised for unusable configuration input."""
