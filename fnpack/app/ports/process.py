"""Command runner port for external tool invocations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished command."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunnerPort(Protocol):
    """Port interface for running external commands.

    Implementations capture output and never raise on a non-zero exit; the
    caller decides what a failure means.
    """

    def run(self, command: list[str], cwd: Path) -> CommandResult:
        """Run ``command`` in ``cwd`` and return its captured result."""
        ...
