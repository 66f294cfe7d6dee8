"""Storage port interface for artifact file operations."""

from pathlib import Path
from typing import Protocol


class StoragePort(Protocol):
    """Port interface for storage operations used during distribution.

    Side effects: Writes files (offline).
    """

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy ``src`` to ``dst`` byte for byte, creating parent directories.

        Args:
            src: Source path
            dst: Destination path
        """
        ...
