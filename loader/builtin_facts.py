"""Facts every hostfacts process knows about."""

from __future__ import annotations

import platform
import sys
from importlib import metadata

from core.version import HOSTFACTS_VERSION
from facts.fact_registry import FactRegistry

BUILTIN_ORIGIN = "builtin"
COMPANION_DISTRIBUTION = "ansible-core"


def companion_version() -> str | None:
    """Installed ansible-core version, or None when it is absent."""
    try:
        return metadata.version(COMPANION_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return None


def python_site_dir() -> str | None:
    for entry in sys.path:
        if entry.rstrip("/\\").endswith("site-packages"):
            return entry
    return None


def register_builtin_facts(registry: FactRegistry) -> list[str]:
    """Register built-in facts and return their names."""
    builtins = {
        "hostfactsversion": lambda: HOSTFACTS_VERSION,
        "pythonversion": platform.python_version,
        "pythonsitedir": python_site_dir,
        "ansibleversion": companion_version,
    }
    for name, body in builtins.items():
        registry.add(name, body=body, origin=BUILTIN_ORIGIN)
    return list(builtins)
