"""Package version."""

from __future__ import annotations

HOSTFACTS_VERSION = "0.4.0"


def version() -> str:
    """Return the hostfacts version string."""
    return HOSTFACTS_VERSION
