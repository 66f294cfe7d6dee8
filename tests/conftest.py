"""Pytest configuration and fixtures."""

import gc
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from fnpack.config import Settings
from tests.doubles import RecordingLogger


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        gc.collect()
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated fnpack settings scoped to tests."""

    import fnpack.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    project_dir = temp_dir / "project"
    project_dir.mkdir(parents=True, exist_ok=True)

    settings = config_module.Settings(project_dir=project_dir)
    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings
