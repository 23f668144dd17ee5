"""Discovery of fact-definition directories and files."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path


def discover_fact_dirs(
    search_dirs: Iterable[str],
    subdir: str,
    environ: Mapping[str, str],
    lib_env_var: str,
) -> list[Path]:
    """Return candidate directories in load order.

    Every entry of ``search_dirs`` holding a ``subdir`` directory comes first,
    followed by the colon-separated entries of ``environ[lib_env_var]``.
    """
    found: list[Path] = []
    for entry in search_dirs:
        if not entry:
            continue
        candidate = Path(entry) / subdir
        if candidate.is_dir():
            found.append(candidate)
    extra = environ.get(lib_env_var, "")
    for entry in extra.split(":"):
        if entry:
            found.append(Path(entry))
    return found


def list_fact_files(directory: Path, pattern: str = "*.py") -> list[Path]:
    """Non-recursive, name-sorted listing of fact files in ``directory``."""
    if not directory.is_dir():
        return []
    return sorted(path for path in directory.glob(pattern) if path.is_file())
