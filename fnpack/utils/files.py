"""File enumeration and exclusion filtering for compile output directories."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import TYPE_CHECKING

from fnpack.errors import InvalidConfigurationError, NoFilesToPackageError

if TYPE_CHECKING:  # pragma: no cover
    from fnpack.app.ports import LoggerPort


def enumerate_files(root_dir: Path) -> list[str]:
    """Return every regular file under ``root_dir`` as a sorted POSIX relative path.

    Hidden entries are included and symbolic links are followed, so a
    directory reachable through several links is listed under each alias.
    A link back into one of its own ancestors is not descended again.
    """
    root = Path(root_dir)
    if not root.is_dir():
        return []

    files: list[str] = []
    _collect_files(root, root, frozenset(), files)
    return sorted(files)


def _collect_files(
    root: Path,
    directory: Path,
    ancestors: frozenset[tuple[int, int]],
    files: list[str],
) -> None:
    info = os.stat(directory)
    key = (info.st_dev, info.st_ino)
    if key in ancestors:
        return
    ancestors = ancestors | {key}

    with os.scandir(directory) as entries:
        for entry in entries:
            path = Path(entry.path)
            if entry.is_dir():
                _collect_files(root, path, ancestors, files)
            elif entry.is_file():
                files.append(path.relative_to(root).as_posix())
            # Dangling symlinks and special files are skipped.


def compile_exclude_pattern(exclude_pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile an exclusion regex, reporting bad syntax as a configuration error."""
    if isinstance(exclude_pattern, re.Pattern):
        return exclude_pattern
    try:
        return re.compile(exclude_pattern)
    except re.error as exc:
        raise InvalidConfigurationError("exclude_regex", exclude_pattern, str(exc)) from exc


def apply_exclusions(
    root_dir: Path,
    files: list[str],
    exclude_pattern: str | re.Pattern[str],
) -> int:
    """Drop paths matching ``exclude_pattern`` from ``files`` and delete them on disk.

    ``files`` is mutated in place. Returns the number of excluded entries.
    Files already removed (by an earlier pass or a concurrent cleanup) are
    not an error.
    """
    pattern = compile_exclude_pattern(exclude_pattern)
    root = Path(root_dir)

    kept: list[str] = []
    excluded = 0
    for relative in files:
        if pattern.search(relative):
            excluded += 1
            (root / relative).unlink(missing_ok=True)
        else:
            kept.append(relative)

    files[:] = kept
    return excluded


def list_files(
    root_dir: Path,
    exclude_pattern: str | re.Pattern[str] | None = None,
    *,
    logger: LoggerPort | None = None,
) -> list[str]:
    """List the files to archive under ``root_dir``.

    Args:
        root_dir: Compile output directory for one packaging unit
        exclude_pattern: Optional regular expression searched against each
            relative path; matching files are removed from the set and from disk
        logger: Logger capability used for the exclusion count

    Returns:
        Sorted POSIX paths relative to ``root_dir``

    Raises:
        NoFilesToPackageError: If nothing is left to archive
        InvalidConfigurationError: If ``exclude_pattern`` is not a valid regex
    """
    files = enumerate_files(root_dir)

    if exclude_pattern:
        excluded = apply_exclusions(root_dir, files, exclude_pattern)
        if logger is not None:
            logger.verbose(f"Excluded {excluded} file(s) based on excludeRegex")

    if not files:
        raise NoFilesToPackageError(Path(root_dir))

    return files
