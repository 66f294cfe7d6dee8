"""Error taxonomy for packaging runs.

Every error is raised to the immediate caller. Nothing here is retried;
the CLI (or any other orchestrator) decides whether to abort the run.
"""

from __future__ import annotations

from pathlib import Path


class FnpackError(RuntimeError):
    """Base class for all fnpack failures."""


class PackagerNotFoundError(FnpackError):
    """Raised when a packager id is not present in the registry."""

    def __init__(self, packager_id: str) -> None:
        self.packager_id = packager_id
        super().__init__(f"Could not find packager '{packager_id}'")


class NoFilesToPackageError(FnpackError):
    """Raised when a compile output directory has nothing left to archive."""

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = Path(root_dir)
        super().__init__(f"Packaging: No files found in {self.root_dir}")


class ArchiveWriteError(FnpackError):
    """Raised when an archive cannot be written completely."""

    def __init__(self, archive_path: Path, reason: str) -> None:
        self.archive_path = Path(archive_path)
        super().__init__(f"Failed to write archive {self.archive_path}: {reason}")


class ArtifactCopyError(FnpackError):
    """Raised when a build-stage artifact cannot be copied to the staging directory."""

    def __init__(self, identity: str, source: Path, destination: Path, reason: str) -> None:
        self.identity = identity
        self.source = Path(source)
        self.destination = Path(destination)
        super().__init__(
            f"Failed to copy artifact '{identity}' from {self.source} "
            f"to {self.destination}: {reason}"
        )


class PackagerOperationError(FnpackError):
    """Raised when a dependency-management command fails or returns garbage."""

    def __init__(
        self,
        operation: str,
        cwd: Path,
        message: str,
        *,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.operation = operation
        self.cwd = Path(cwd)
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"{operation} failed in {self.cwd}: {message}")


class ServiceDefinitionError(FnpackError):
    """Raised when the service definition is missing, malformed, or lacks a function."""


class InvalidConfigurationError(FnpackError):
    """Raised when a configured value cannot be used (bad regex, bad version)."""

    def __init__(self, setting: str, value: object, reason: str) -> None:
        self.setting = setting
        self.value = value
        super().__init__(f"Invalid {setting} {value!r}: {reason}")
