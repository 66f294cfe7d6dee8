"""Packaging service: zip compiled units and distribute the artifacts."""

from __future__ import annotations

import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from pathlib import Path

from pydantic import BaseModel

from fnpack.app.artifacts import requires_service_artifact
from fnpack.app.distribution import ArtifactDistributor
from fnpack.app.models import CompileResult, PackagingMode, archive_name
from fnpack.app.ports import ArchivePort, HostRegistryPort, LoggerPort
from fnpack.utils.files import compile_exclude_pattern, list_files

SERVICE_OUTPUT_DIR = "service"


class PackagingResult(BaseModel):
    """Outcome of a packaging run."""

    mode: PackagingMode
    service_name: str
    artifacts: list[str]
    bindings: dict[str, str]
    service_artifact: str | None = None


class PackagingService:
    """Orchestrates archive creation and artifact distribution for one service.

    Archive builds are independent per unit and run on a thread pool.
    Distribution starts only after every build has completed.
    """

    def __init__(
        self,
        *,
        host: HostRegistryPort,
        archive_port: ArchivePort,
        distributor: ArtifactDistributor,
        logger: LoggerPort,
        build_output_dir: Path,
        exclude_regex: str | None = None,
        max_workers: int | None = None,
        runtime_prefix: str | None = "nodejs",
    ) -> None:
        self.host = host
        self.archive = archive_port
        self.distributor = distributor
        self.logger = logger
        self.build_output_dir = Path(build_output_dir)
        self.exclude_regex = compile_exclude_pattern(exclude_regex) if exclude_regex else None
        self.max_workers = max_workers
        self.runtime_prefix = runtime_prefix

    def packaging_mode(self) -> PackagingMode:
        return PackagingMode.from_flag(self.host.is_individually_packaged())

    def function_names(self, function: str | None = None) -> list[str]:
        """Functions handled by this run; a single ``function`` narrows it."""
        if function:
            return [function]
        return self.host.list_functions(self.runtime_prefix)

    def artifact_name(self, compile_result: CompileResult, service_name: str) -> str:
        return archive_name(compile_result.function_name or service_name)

    def discover_compile_results(self, function: str | None = None) -> list[CompileResult]:
        """Map the bundler's output layout to compile results.

        Individual mode expects ``<build_output_dir>/<function>``; unified mode
        expects ``<build_output_dir>/service``.
        """
        if self.packaging_mode() is PackagingMode.INDIVIDUAL:
            return [
                CompileResult(output_path=self.build_output_dir / name, function_name=name)
                for name in self.function_names(function)
            ]
        return [CompileResult(output_path=self.build_output_dir / SERVICE_OUTPUT_DIR)]

    def zip_unit(self, compile_result: CompileResult, service_name: str) -> Path:
        """Filter and archive one compiled unit into the build output directory."""
        module_path = Path(compile_result.output_path)
        started = time.perf_counter()

        files = list_files(module_path, self.exclude_regex, logger=self.logger)
        archive_path = self.build_output_dir / self.artifact_name(compile_result, service_name)
        result = self.archive.build_archive(module_path, files, archive_path)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        kind = "service" if compile_result.is_service else "function"
        self.logger.verbose(f"Zip {kind}: {module_path} [{elapsed_ms} ms]")
        return result

    def package_modules(self, compile_results: list[CompileResult]) -> list[Path]:
        """Zip every compiled unit concurrently.

        Returns the archive paths in input order. The first failure is
        re-raised after cancelling units that have not started; archives that
        already completed are left in place.
        """
        self.logger.verbose("Packaging modules")
        service_name = self.host.get_service_name()

        if not compile_results:
            return []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: list[Future[Path]] = [
                executor.submit(self.zip_unit, compile_result, service_name)
                for compile_result in compile_results
            ]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            errors = [future.exception() for future in futures if future in done]
            first_error = next((error for error in errors if error is not None), None)
            if first_error is not None:
                for future in pending:
                    future.cancel()
                raise first_error

        return [future.result() for future in futures]

    def copy_existing_artifacts(self, function: str | None = None) -> dict[str, str]:
        """Copy built artifacts to staging and bind them to functions.

        When ``function`` is given (single-function deploys) only that
        function's artifact is copied and bound.
        """
        self.logger.verbose("Copying existing artifacts")
        return self.distributor.distribute(
            self.packaging_mode(),
            self.function_names(function),
            self.host.get_service_name(),
            self.host.get_provider_name(),
        )

    def package(
        self,
        compile_results: list[CompileResult] | None = None,
        *,
        function: str | None = None,
    ) -> PackagingResult:
        """Zip all units, then distribute; the full packaging run."""
        if compile_results is None:
            compile_results = self.discover_compile_results(function)

        artifacts = self.package_modules(compile_results)
        bindings = self.copy_existing_artifacts(function)

        mode = self.packaging_mode()
        service_name = self.host.get_service_name()
        service_artifact = None
        if mode is PackagingMode.UNIFIED and requires_service_artifact(
            self.host.get_provider_name()
        ):
            service_artifact = self.distributor.deploy_stage_path(service_name)

        return PackagingResult(
            mode=mode,
            service_name=service_name,
            artifacts=[str(path) for path in artifacts],
            bindings=bindings,
            service_artifact=service_artifact,
        )
