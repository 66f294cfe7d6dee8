"""Packager port: the capability set every dependency-management backend provides."""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Protocol


class PackagerPort(Protocol):
    """Port interface for a dependency-management tool (npm, yarn, ...).

    Every operation is independently failable and raises
    ``PackagerOperationError`` on a non-zero exit or malformed output.
    """

    packager_id: ClassVar[str]
    lockfile_name: ClassVar[str]
    copy_package_section_names: ClassVar[tuple[str, ...]]
    must_copy_modules: ClassVar[bool]

    def get_packager_version(self, cwd: Path) -> dict[str, Any]:
        """Return ``{"version": str, "major": int, ...}`` for the installed tool."""
        ...

    def get_prod_dependencies(self, cwd: Path, depth: int = 1) -> dict[str, Any]:
        """Return the production dependency tree as ``{"dependencies": {...}}``."""
        ...

    def rebase_lockfile(self, path_to_package_root: str, lockfile: Any) -> Any:
        """Rewrite relative ``file:`` references so they resolve from a new root."""
        ...

    def install(self, cwd: Path) -> None:
        """Install dependencies in ``cwd``."""
        ...

    def prune(self, cwd: Path) -> None:
        """Remove extraneous dependencies in ``cwd``."""
        ...

    def run_scripts(self, cwd: Path, script_names: list[str]) -> None:
        """Run each package script in order."""
        ...
