"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fnpack.app import ArtifactDistributor, PackagingService
from fnpack.app.adapters import (
    FileSystemStorageAdapter,
    ServiceDefinitionHost,
    StdlibLoggerAdapter,
    SubprocessCommandRunner,
    ZipArchiveBuilder,
)
from fnpack.app.ports import (
    ArchivePort,
    CommandRunnerPort,
    HostRegistryPort,
    LoggerPort,
    StoragePort,
)
from fnpack.config import Settings, get_settings
from fnpack.packagers import BasePackager, get_packager


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    logger: LoggerPort
    host: HostRegistryPort
    storage_port: StoragePort
    archive_port: ArchivePort
    command_runner: CommandRunnerPort
    distributor: ArtifactDistributor
    packaging_service: PackagingService

    def packager(self) -> BasePackager:
        """Resolve the configured packager (raises ``PackagerNotFoundError``)."""
        return get_packager(
            self.settings.packager,
            logger=self.logger,
            runner=self.command_runner,
        )


def bootstrap_application(
    settings: Settings | None = None,
    *,
    logger: LoggerPort | None = None,
    host: HostRegistryPort | None = None,
    service_definition: dict[str, Any] | None = None,
    command_runner: CommandRunnerPort | None = None,
) -> ApplicationContainer:
    """Create the application container with default adapters.

    The host registry is built from ``service_definition`` when given,
    otherwise it is loaded from the configured service file.
    """
    active_settings = settings or get_settings()
    active_logger = logger or StdlibLoggerAdapter()

    if host is None:
        if service_definition is not None:
            host = ServiceDefinitionHost(
                service_definition, version=active_settings.framework_version
            )
        else:
            host = ServiceDefinitionHost.from_file(
                active_settings.get_service_file(),
                version=active_settings.framework_version,
            )

    storage = FileSystemStorageAdapter()
    archive = ZipArchiveBuilder(
        active_logger,
        compression_level=active_settings.compression_level,
    )
    runner = command_runner or SubprocessCommandRunner()

    build_output_dir = active_settings.get_build_output_dir()
    distributor = ArtifactDistributor(
        host=host,
        storage=storage,
        logger=active_logger,
        project_dir=active_settings.get_project_dir(),
        build_output_dir=build_output_dir,
        staging_dir_name=active_settings.staging_dir_name,
    )
    packaging_service = PackagingService(
        host=host,
        archive_port=archive,
        distributor=distributor,
        logger=active_logger,
        build_output_dir=build_output_dir,
        exclude_regex=active_settings.exclude_regex,
        max_workers=active_settings.max_workers,
        runtime_prefix=active_settings.runtime_prefix,
    )

    return ApplicationContainer(
        settings=active_settings,
        logger=active_logger,
        host=host,
        storage_port=storage,
        archive_port=archive,
        command_runner=runner,
        distributor=distributor,
        packaging_service=packaging_service,
    )
