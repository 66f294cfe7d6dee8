"""Tests for the zip archive builder."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from fnpack.app.adapters import ZipArchiveBuilder
from fnpack.errors import ArchiveWriteError, NoFilesToPackageError
from fnpack.utils.files import list_files
from tests.doubles import RecordingLogger, write_unit


def test_archive_contains_exactly_the_file_set(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    root = write_unit(temp_dir / "unit", {"a.txt": "alpha", "b/c.txt": "charlie"})
    archive_path = temp_dir / "out" / "nested" / "svc.zip"

    builder = ZipArchiveBuilder(recording_logger)
    result = builder.build_archive(root, list_files(root), archive_path)

    assert result == archive_path
    with zipfile.ZipFile(archive_path) as archive:
        assert sorted(archive.namelist()) == ["a.txt", "b/c.txt"]
        assert archive.read("a.txt") == b"alpha"
        assert archive.read("b/c.txt") == b"charlie"

    extract_dir = temp_dir / "extract"
    with zipfile.ZipFile(archive_path) as archive:
        archive.extractall(extract_dir)
    assert (extract_dir / "a.txt").read_text() == "alpha"
    assert (extract_dir / "b" / "c.txt").read_text() == "charlie"

    assert recording_logger.verbose_messages == ["2/2 files processed"]


def test_archive_is_deterministic(temp_dir: Path, recording_logger: RecordingLogger) -> None:
    root = write_unit(temp_dir / "unit", {"index.js": "module.exports = 1;", "lib/x.js": "x"})
    builder = ZipArchiveBuilder(recording_logger)

    first = builder.build_archive(root, list_files(root), temp_dir / "one.zip")
    (root / "index.js").touch()
    second = builder.build_archive(root, list_files(root), temp_dir / "two.zip")

    assert first.read_bytes() == second.read_bytes()


def test_existing_parent_directory_is_not_an_error(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    root = write_unit(temp_dir / "unit", {"a.txt": "a"})
    archive_path = temp_dir / "out" / "svc.zip"
    archive_path.parent.mkdir(parents=True)

    builder = ZipArchiveBuilder(recording_logger)
    builder.build_archive(root, ["a.txt"], archive_path)
    builder.build_archive(root, ["a.txt"], archive_path)

    assert zipfile.ZipFile(archive_path).namelist() == ["a.txt"]


def test_unreadable_source_leaves_no_artifact(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    root = write_unit(temp_dir / "unit", {"a.txt": "a"})
    archive_path = temp_dir / "out" / "svc.zip"

    builder = ZipArchiveBuilder(recording_logger)
    with pytest.raises(ArchiveWriteError) as excinfo:
        builder.build_archive(root, ["a.txt", "vanished.txt"], archive_path)

    assert excinfo.value.archive_path == archive_path
    assert isinstance(excinfo.value.__cause__, OSError)
    assert not archive_path.exists()
    assert list(archive_path.parent.iterdir()) == []


def test_failed_rebuild_keeps_previous_artifact(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    root = write_unit(temp_dir / "unit", {"a.txt": "a"})
    archive_path = temp_dir / "svc.zip"
    builder = ZipArchiveBuilder(recording_logger)
    builder.build_archive(root, ["a.txt"], archive_path)
    previous = archive_path.read_bytes()

    with pytest.raises(ArchiveWriteError):
        builder.build_archive(root, ["missing.txt"], archive_path)

    assert archive_path.read_bytes() == previous


def test_fully_excluded_unit_creates_no_archive(temp_dir: Path) -> None:
    root = write_unit(temp_dir / "unit", {"a.map": "a"})
    archive_path = temp_dir / "svc.zip"

    with pytest.raises(NoFilesToPackageError):
        files = list_files(root, r"\.map$")
        ZipArchiveBuilder(RecordingLogger()).build_archive(root, files, archive_path)

    assert not archive_path.exists()


def test_compression_level_is_applied_per_entry(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    root = write_unit(temp_dir / "unit", {"bundle.js": "const answer = 42;\n" * 2000})
    stored = ZipArchiveBuilder(recording_logger, compression_level=0).build_archive(
        root, ["bundle.js"], temp_dir / "out" / "level0.zip"
    )
    packed = ZipArchiveBuilder(recording_logger, compression_level=9).build_archive(
        root, ["bundle.js"], temp_dir / "out" / "level9.zip"
    )

    with zipfile.ZipFile(stored) as low, zipfile.ZipFile(packed) as high:
        low_info = low.getinfo("bundle.js")
        high_info = high.getinfo("bundle.js")
        assert low_info.compress_type == high_info.compress_type == zipfile.ZIP_DEFLATED
        assert high_info.compress_size < low_info.compress_size
        assert high.read("bundle.js") == (root / "bundle.js").read_bytes()
