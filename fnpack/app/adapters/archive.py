"""Zip archive adapter for packaging units."""

from __future__ import annotations

import os
import stat
import uuid
import zlib
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile, ZipInfo

from fnpack.app.ports import ArchivePort, LoggerPort
from fnpack.errors import ArchiveWriteError

# Fixed entry timestamp so identical inputs produce identical archives.
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)

DEFAULT_COMPRESSION_LEVEL = 4


class ZipArchiveBuilder(ArchivePort):
    """Stream a directory's file set into a deterministic deflate zip.

    The archive is written to a temporary sibling and renamed onto the
    target only after the zip is closed, so callers never see a partial file
    at ``archive_path``.
    """

    def __init__(
        self,
        logger: LoggerPort,
        *,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL,
    ) -> None:
        self._logger = logger
        self._compression_level = compression_level

    def build_archive(self, root_dir: Path, file_set: list[str], archive_path: Path) -> Path:
        root = Path(root_dir)
        target = Path(archive_path)
        target.parent.mkdir(parents=True, exist_ok=True)

        temp_path = target.with_name(f".{target.name}.{uuid.uuid4().hex}.tmp")
        total = len(file_set)
        processed = 0

        try:
            with ZipFile(
                temp_path,
                "w",
                compression=ZIP_DEFLATED,
                compresslevel=self._compression_level,
            ) as archive:
                for relative in file_set:
                    self._write_entry(archive, root / relative, relative)
                    processed += 1
                    if processed >= total:
                        self._logger.verbose(f"{processed}/{total} files processed")
            os.replace(temp_path, target)
        except (OSError, ValueError, zlib.error) as exc:
            temp_path.unlink(missing_ok=True)
            raise ArchiveWriteError(target, str(exc)) from exc

        return target

    def _write_entry(self, archive: ZipFile, source: Path, arcname: str) -> None:
        """Copy ``source`` into ``archive`` under ``arcname`` with stable metadata."""
        mode = stat.S_IMODE(source.stat().st_mode)

        info = ZipInfo(arcname, date_time=ZIP_EPOCH)
        info.compress_type = ZIP_DEFLATED
        info.external_attr = (stat.S_IFREG | mode) << 16
        info.create_system = 3  # unix, so external_attr permissions are honoured

        archive.writestr(info, source.read_bytes(), compresslevel=self._compression_level)
