"""Shared plumbing for packager variants."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any, ClassVar

from fnpack.app.adapters.process import SubprocessCommandRunner
from fnpack.app.ports import CommandResult, CommandRunnerPort, PackagerPort
from fnpack.errors import PackagerOperationError


class BasePackager(PackagerPort):
    """Common command execution and output handling for packagers.

    Subclasses declare the capability constants and implement the
    tool-specific operations on top of ``_execute`` and ``_parse_json``.
    """

    packager_id: ClassVar[str]
    executable: ClassVar[str]
    lockfile_name: ClassVar[str]
    copy_package_section_names: ClassVar[tuple[str, ...]] = ()
    must_copy_modules: ClassVar[bool] = False

    # Prefixes of stderr lines that do not make a dependency listing fail.
    ignored_list_errors: ClassVar[tuple[str, ...]] = ()

    def __init__(self, runner: CommandRunnerPort | None = None) -> None:
        self._runner = runner or SubprocessCommandRunner()

    @classmethod
    def command_name(cls) -> str:
        """Return the executable name for the current platform."""
        return f"{cls.executable}.cmd" if os.name == "nt" else cls.executable

    def _execute(self, operation: str, args: list[str], cwd: Path) -> CommandResult:
        """Run the tool and raise ``PackagerOperationError`` on a non-zero exit."""
        result = self._runner.run([self.command_name(), *args], Path(cwd))
        if not result.ok:
            raise PackagerOperationError(
                operation,
                Path(cwd),
                f"{' '.join(result.command)} exited with code {result.returncode}",
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return result

    def _list_output(self, operation: str, args: list[str], cwd: Path) -> str:
        """Run a listing command, tolerating failures made only of ignored errors."""
        result = self._runner.run([self.command_name(), *args], Path(cwd))
        if result.ok:
            return result.stdout

        if result.stdout.strip() and not self._has_critical_errors(result.stderr):
            return result.stdout

        raise PackagerOperationError(
            operation,
            Path(cwd),
            f"{' '.join(result.command)} exited with code {result.returncode}",
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def _has_critical_errors(self, stderr: str) -> bool:
        for line in _error_lines(stderr.splitlines()):
            if not any(line.startswith(prefix) for prefix in self.ignored_list_errors):
                return True
        return False

    def _parse_json(self, operation: str, cwd: Path, payload: str) -> Any:
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            raise PackagerOperationError(
                operation,
                Path(cwd),
                f"malformed JSON output: {exc}",
                stdout=payload,
            ) from exc

    def _parse_version(self, cwd: Path, stdout: str) -> dict[str, Any]:
        version = stdout.strip()
        major_text = version.split(".", 1)[0]
        if not major_text.isdigit():
            raise PackagerOperationError(
                "get_packager_version",
                Path(cwd),
                f"unrecognised version output {version!r}",
                stdout=stdout,
            )
        return {"version": version, "major": int(major_text)}

    def run_scripts(self, cwd: Path, script_names: list[str]) -> None:
        for script_name in script_names:
            self._execute("run_scripts", ["run", script_name], cwd)


def _error_lines(lines: Iterable[str]) -> Iterable[str]:
    """Yield non-blank stderr lines up to the start of any JSON payload."""
    for line in lines:
        if line.strip() == "{":
            return
        if line.strip():
            yield line.strip()


def rebase_file_reference(path_to_package_root: str, reference: str) -> str:
    """Prefix a relative ``file:`` reference with ``path_to_package_root``.

    Absolute references and non-file versions are returned unchanged.
    """
    if not reference.startswith("file:"):
        return reference
    target = reference[len("file:") :]
    if len(target) < 2 or "/" in target[:2]:
        return reference
    return f"file:{path_to_package_root}/{target}".replace("\\", "/")
