"""npm packager."""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar

from fnpack.packagers.base import BasePackager, rebase_file_reference


class NpmPackager(BasePackager):
    """Dependency management through the npm CLI."""

    packager_id: ClassVar[str] = "npm"
    executable: ClassVar[str] = "npm"
    lockfile_name: ClassVar[str] = "package-lock.json"
    copy_package_section_names: ClassVar[tuple[str, ...]] = ()
    must_copy_modules: ClassVar[bool] = True

    ignored_list_errors: ClassVar[tuple[str, ...]] = (
        "npm ERR! extraneous",
        "npm ERR! missing",
        "npm ERR! peer dep missing",
        "npm ERR! invalid",
        "npm WARN",
    )

    def get_packager_version(self, cwd: Path) -> dict[str, Any]:
        result = self._execute("get_packager_version", ["-v"], cwd)
        return self._parse_version(cwd, result.stdout)

    def get_prod_dependencies(self, cwd: Path, depth: int = 1) -> dict[str, Any]:
        stdout = self._list_output(
            "get_prod_dependencies",
            ["ls", "-prod", "-json", f"-depth={depth or 1}"],
            cwd,
        )
        return self._parse_json("get_prod_dependencies", cwd, stdout)

    def rebase_lockfile(self, path_to_package_root: str, lockfile: dict[str, Any]) -> dict[str, Any]:
        """Rebase ``file:`` versions throughout a package-lock tree, in place."""
        version = lockfile.get("version")
        if isinstance(version, str):
            lockfile["version"] = rebase_file_reference(path_to_package_root, version)

        for locked in (lockfile.get("dependencies") or {}).values():
            if isinstance(locked, dict):
                self.rebase_lockfile(path_to_package_root, locked)

        return lockfile

    def install(self, cwd: Path) -> None:
        self._execute("install", ["install"], cwd)

    def prune(self, cwd: Path) -> None:
        self._execute("prune", ["prune"], cwd)
