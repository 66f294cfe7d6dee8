"""Artifact distribution: staging copies and function bindings."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from fnpack.app.artifacts import (
    ArtifactAssignment,
    requires_service_artifact,
    select_assignment_strategy,
)
from fnpack.app.models import PackagingMode, archive_name
from fnpack.app.ports import HostRegistryPort, LoggerPort, StoragePort
from fnpack.errors import ArtifactCopyError


class ArtifactDistributor:
    """Copy build-stage artifacts into the staging directory and bind them.

    Build-stage artifacts live at ``<build_output_dir>/<identity>.zip``.
    Deploy-stage artifacts live at ``<staging_dir_name>/<identity>.zip``
    relative to ``project_dir``; that relative POSIX path is what gets bound.
    """

    def __init__(
        self,
        *,
        host: HostRegistryPort,
        storage: StoragePort,
        logger: LoggerPort,
        project_dir: Path,
        build_output_dir: Path,
        staging_dir_name: str = ".serverless",
        assignment: ArtifactAssignment | None = None,
    ) -> None:
        self.host = host
        self.storage = storage
        self.logger = logger
        self.project_dir = Path(project_dir)
        self.build_output_dir = Path(build_output_dir)
        self.staging_dir_name = staging_dir_name
        self.assignment = assignment or select_assignment_strategy(host.get_version(), logger)

    def build_stage_path(self, identity: str) -> Path:
        return self.build_output_dir / archive_name(identity)

    def deploy_stage_path(self, identity: str) -> str:
        return str(PurePosixPath(self.staging_dir_name) / archive_name(identity))

    def copy_artifact(self, identity: str) -> Path:
        """Copy one build-stage artifact to its staging location."""
        source = self.build_stage_path(identity)
        destination = self.project_dir / self.deploy_stage_path(identity)

        if not source.is_file():
            raise ArtifactCopyError(identity, source, destination, "build-stage artifact not found")
        try:
            self.storage.copy_file(source, destination)
        except OSError as exc:
            raise ArtifactCopyError(identity, source, destination, str(exc)) from exc

        return destination

    def distribute(
        self,
        mode: PackagingMode,
        function_names: list[str],
        service_name: str,
        provider: str,
    ) -> dict[str, str]:
        """Copy artifacts for ``mode`` and bind every function to its artifact.

        Args:
            mode: Individual (one artifact per function) or unified
            function_names: Functions to process in this run
            service_name: Identity of the unified artifact
            provider: Deployment provider id, checked against the service
                artifact policy

        Returns:
            Mapping of function name to deploy-stage artifact path
        """
        individual = mode is PackagingMode.INDIVIDUAL

        identities = list(function_names) if individual else [service_name]
        for identity in identities:
            self.copy_artifact(identity)

        # Assignment only reads paths, so functions whose artifacts came from an
        # earlier full run are bound as well.
        bindings: dict[str, str] = {}
        for function_name in function_names:
            record = self.host.get_function(function_name)
            identity = function_name if individual else service_name
            artifact_path = self.deploy_stage_path(identity)

            self.logger.verbose(
                f"Setting artifact for function '{function_name}' to '{artifact_path}'"
            )
            self.assignment.assign(function_name, record, artifact_path)
            bindings[function_name] = artifact_path

        if not individual and requires_service_artifact(provider):
            self.host.set_service_artifact(self.deploy_stage_path(service_name))

        return bindings
