"""Subprocess-backed command runner."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from fnpack.app.ports import CommandResult, CommandRunnerPort

logger = logging.getLogger(__name__)


class SubprocessCommandRunner(CommandRunnerPort):
    """Run external tools with captured text output."""

    def __init__(self, env: dict[str, str] | None = None) -> None:
        self._env = env

    def run(self, command: list[str], cwd: Path) -> CommandResult:
        logger.debug("Running %s in %s", " ".join(command), cwd)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                env=self._env,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            # Missing executable: report it like the shell would.
            return CommandResult(
                command=tuple(command),
                returncode=127,
                stdout="",
                stderr=str(exc),
            )

        return CommandResult(
            command=tuple(command),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
