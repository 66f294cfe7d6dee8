"""Yarn (classic) packager."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, ClassVar

from fnpack.packagers.base import BasePackager

# name@file:./relative or name@../relative inside yarn.lock entries
_FILE_VERSION_RE = re.compile(r"""[^"/]@(?:file:)?((?:\./|\.\./).*?)[":,]""", re.MULTILINE)


class YarnPackager(BasePackager):
    """Dependency management through the yarn CLI."""

    packager_id: ClassVar[str] = "yarn"
    executable: ClassVar[str] = "yarn"
    lockfile_name: ClassVar[str] = "yarn.lock"
    copy_package_section_names: ClassVar[tuple[str, ...]] = ("resolutions",)
    must_copy_modules: ClassVar[bool] = False

    ignored_list_errors: ClassVar[tuple[str, ...]] = ("warning", '{"type":"warning"')

    def get_packager_version(self, cwd: Path) -> dict[str, Any]:
        result = self._execute("get_packager_version", ["-v"], cwd)
        return self._parse_version(cwd, result.stdout)

    def get_prod_dependencies(self, cwd: Path, depth: int = 1) -> dict[str, Any]:
        stdout = self._list_output(
            "get_prod_dependencies",
            ["list", f"--depth={depth or 1}", "--json", "--production"],
            cwd,
        )
        trees: list[dict[str, Any]] = []
        for line in stdout.splitlines():
            if not line.strip():
                continue
            event = self._parse_json("get_prod_dependencies", cwd, line)
            # --json emits one event per line; only the tree event carries data.
            if isinstance(event, dict) and event.get("type") == "tree":
                trees = (event.get("data") or {}).get("trees") or []
        return {"problems": [], "dependencies": _convert_trees(trees)}

    def rebase_lockfile(self, path_to_package_root: str, lockfile: str) -> str:
        """Rebase relative ``file:`` references in yarn.lock text."""
        pieces: list[str] = []
        cursor = 0
        for match in _FILE_VERSION_RE.finditer(lockfile):
            pieces.append(lockfile[cursor : match.start(1)])
            pieces.append(f"{path_to_package_root}/{match.group(1)}".replace("\\", "/"))
            cursor = match.end(1)
        pieces.append(lockfile[cursor:])
        return "".join(pieces)

    def install(self, cwd: Path) -> None:
        self._execute("install", ["install", "--frozen-lockfile", "--non-interactive"], cwd)

    def prune(self, cwd: Path) -> None:
        # yarn has no prune; a frozen install removes extraneous modules.
        self._execute("prune", ["install", "--frozen-lockfile", "--non-interactive"], cwd)


def _convert_trees(trees: list[dict[str, Any]]) -> dict[str, Any]:
    """Convert ``yarn list`` trees into npm-style ``{name: {version, dependencies}}``."""
    converted: dict[str, Any] = {}
    for tree in trees:
        full_name = str(tree.get("name", ""))
        name, _, version = full_name.rpartition("@")
        if not name:
            # Unversioned entry such as "left-pad" or "@scope/pkg"
            name, version = full_name, ""
        converted[name] = {
            "version": version,
            "dependencies": _convert_trees(tree.get("children") or []),
        }
    return converted
