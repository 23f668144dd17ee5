"""Populates a FactRegistry from built-ins, fact files and the environment."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable, Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from core.debug import debug
from core.settings import FactSettings
from facts.fact_registry import FactRegistry
from loader.builtin_facts import BUILTIN_ORIGIN, register_builtin_facts
from loader.environment import register_environment_facts
from loader.fact_files import execute_fact_file
from loader.search_path import discover_fact_dirs, list_fact_files

logger = logging.getLogger("hostfacts.loader")


class LoadFailure(BaseModel):
    """A fact file that raised while executing."""

    path: Path
    error: str


class LoadReport(BaseModel):
    """Outcome of one loader run."""

    builtin_facts: list[str] = Field(default_factory=list)
    directories: list[Path] = Field(default_factory=list)
    loaded_files: list[Path] = Field(default_factory=list)
    failures: list[LoadFailure] = Field(default_factory=list)
    environment_facts: dict[str, str] = Field(default_factory=dict)


class FactLoader:
    """Loads facts in a fixed order: built-ins, search-path files, environment.

    Running it again first drops every resolution the previous run added, so
    repeated loads never stack duplicate mechanisms on a fact.
    """

    def __init__(
        self,
        registry: FactRegistry,
        settings: FactSettings | None = None,
        *,
        search_dirs: Iterable[str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or FactSettings()
        self._search_dirs = search_dirs
        self._environ = environ
        self._origins: set[str] = set()

    def load(self) -> LoadReport:
        environ = dict(os.environ if self._environ is None else self._environ)
        search_dirs = list(sys.path if self._search_dirs is None else self._search_dirs)

        self.registry.discard_origin(self._origins)
        self._origins = {BUILTIN_ORIGIN}

        report = LoadReport()
        report.builtin_facts = register_builtin_facts(self.registry)

        report.directories = discover_fact_dirs(
            search_dirs,
            self.settings.search_subdir,
            environ,
            self.settings.lib_env_var,
        )
        for directory in report.directories:
            for path in list_fact_files(directory, self.settings.file_glob):
                self._origins.add(str(path))
                debug(f"Loading fact file {path}")
                try:
                    execute_fact_file(path, self.registry)
                except Exception as exc:
                    error = f"{type(exc).__name__}: {exc}"
                    logger.warning("Could not load %s: %s", path, error)
                    report.failures.append(LoadFailure(path=path, error=error))
                else:
                    report.loaded_files.append(path)

        report.environment_facts = register_environment_facts(
            self.registry, environ, self.settings.env_prefix
        )
        self._origins.update(f"env:{var}" for var in report.environment_facts)
        debug(
            f"Loaded {len(report.loaded_files)} fact files, "
            f"{len(report.failures)} failed, "
            f"{len(report.environment_facts)} environment facts"
        )
        return report
