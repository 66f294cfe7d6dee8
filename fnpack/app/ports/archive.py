"""Ports for building packaging artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ArchivePort(Protocol):
    """Port interface for turning a compile output directory into one archive."""

    def build_archive(self, root_dir: Path, file_set: list[str], archive_path: Path) -> Path:
        """Archive ``file_set`` (relative to ``root_dir``) into ``archive_path``.

        The returned path is complete and closed; a failed build leaves no file
        at ``archive_path``.
        """
        ...
