"""Resolution mechanisms attached to a fact."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger("hostfacts.resolution")

DEFAULT_COMMAND_TIMEOUT = 10.0

ResolutionCode = Callable[[], Any] | str


def run_command(command: str, timeout: float = DEFAULT_COMMAND_TIMEOUT) -> str | None:
    """Run a command without a shell and return its stripped stdout, or None."""
    args = shlex.split(command)
    if not args:
        return None
    try:
        proc = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.warning("Command '%s' failed: %s", command, exc)
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout.strip() or None


@dataclass
class Resolution:
    """One way of computing a fact value.

    ``code`` is either a zero-argument callable or a command string. Both
    ``None`` and the empty string count as "no value".
    """

    code: ResolutionCode
    options: dict[str, Any] = field(default_factory=dict)
    origin: str | None = None

    def value(self) -> Any:
        try:
            if isinstance(self.code, str):
                timeout = float(self.options.get("timeout", DEFAULT_COMMAND_TIMEOUT))
                result = run_command(self.code, timeout=timeout)
            else:
                result = self.code()
        except Exception as exc:
            logger.warning("Resolution from %s raised: %s", self.origin or "caller", exc)
            return None
        if result is None or result == "":
            return None
        return result
