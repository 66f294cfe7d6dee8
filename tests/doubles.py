"""Test doubles and builders shared across the suite."""

from pathlib import Path
from typing import Any

from fnpack.app.ports import CommandResult


class RecordingLogger:
    """LoggerPort double that keeps every message by level."""

    def __init__(self) -> None:
        self.verbose_messages: list[str] = []
        self.notices: list[str] = []
        self.errors: list[str] = []

    def verbose(self, message: str) -> None:
        self.verbose_messages.append(message)

    def notice(self, message: str) -> None:
        self.notices.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class FakeCommandRunner:
    """CommandRunnerPort double returning scripted results in order."""

    def __init__(self, *results: CommandResult) -> None:
        self._results = list(results)
        self.calls: list[tuple[list[str], Path]] = []

    def run(self, command: list[str], cwd: Path) -> CommandResult:
        self.calls.append((list(command), Path(cwd)))
        if self._results:
            return self._results.pop(0)
        return CommandResult(command=tuple(command), returncode=0, stdout="", stderr="")


def command_result(returncode: int = 0, stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(command=("tool",), returncode=returncode, stdout=stdout, stderr=stderr)


def make_service_definition(
    *,
    functions: tuple[str, ...] = ("f1", "f2"),
    individually: bool = False,
    provider: str = "aws",
    name: str = "svc",
) -> dict[str, Any]:
    return {
        "service": name,
        "provider": {"name": provider, "runtime": "nodejs18.x"},
        "package": {"individually": individually},
        "functions": {fn: {"handler": f"src/{fn}.handler"} for fn in functions},
    }


def write_unit(root: Path, files: dict[str, str]) -> Path:
    """Create a compiled unit directory holding ``files``."""
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root

