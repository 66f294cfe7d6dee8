"""Filesystem-backed storage port implementation."""

from __future__ import annotations

import shutil
from pathlib import Path

from fnpack.app.ports import StoragePort


class FileSystemStorageAdapter(StoragePort):
    """Adapter that performs direct filesystem operations."""

    def copy_file(self, src: Path, dst: Path) -> None:
        destination = Path(dst)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(Path(src), destination)
