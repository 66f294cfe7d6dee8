"""Tests for artifact distribution across packaging modes."""

from __future__ import annotations

from pathlib import Path

import pytest

from fnpack.app import ArtifactDistributor, PackagingMode
from fnpack.app.adapters import FileSystemStorageAdapter, ServiceDefinitionHost
from fnpack.app.artifacts import resolve_artifact_path
from fnpack.errors import ArtifactCopyError
from tests.doubles import RecordingLogger, make_service_definition


def _build_stage(temp_dir: Path, *identities: str) -> Path:
    build_dir = temp_dir / ".webpack"
    build_dir.mkdir(parents=True, exist_ok=True)
    for identity in identities:
        (build_dir / f"{identity}.zip").write_bytes(f"zip:{identity}".encode())
    return build_dir


def _distributor(
    temp_dir: Path,
    host: ServiceDefinitionHost,
    logger: RecordingLogger,
) -> ArtifactDistributor:
    return ArtifactDistributor(
        host=host,
        storage=FileSystemStorageAdapter(),
        logger=logger,
        project_dir=temp_dir,
        build_output_dir=temp_dir / ".webpack",
    )


def test_unified_mode_binds_every_function_to_service_artifact(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    _build_stage(temp_dir, "svc")
    host = ServiceDefinitionHost(make_service_definition(), version="3.38.0")

    bindings = _distributor(temp_dir, host, recording_logger).distribute(
        PackagingMode.UNIFIED, ["f1", "f2"], "svc", "aws"
    )

    assert bindings == {"f1": ".serverless/svc.zip", "f2": ".serverless/svc.zip"}
    assert (temp_dir / ".serverless" / "svc.zip").read_bytes() == b"zip:svc"
    assert host.get_function("f1")["package"] == {"artifact": ".serverless/svc.zip"}
    assert host.get_function("f2")["package"] == {"artifact": ".serverless/svc.zip"}


def test_individual_mode_binds_each_function_to_its_own_artifact(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    build_dir = _build_stage(temp_dir, "f1", "f2")
    host = ServiceDefinitionHost(
        make_service_definition(individually=True), version="3.38.0"
    )

    bindings = _distributor(temp_dir, host, recording_logger).distribute(
        PackagingMode.INDIVIDUAL, ["f1", "f2"], "svc", "aws"
    )

    assert bindings == {"f1": ".serverless/f1.zip", "f2": ".serverless/f2.zip"}
    assert bindings["f1"] != bindings["f2"]
    assert (temp_dir / ".serverless" / "f2.zip").read_bytes() == b"zip:f2"
    # Build-stage copies stay for recompilation reuse.
    assert (build_dir / "f1.zip").exists()
    assert (build_dir / "f2.zip").exists()
    assert recording_logger.verbose_messages == [
        "Setting artifact for function 'f1' to '.serverless/f1.zip'",
        "Setting artifact for function 'f2' to '.serverless/f2.zip'",
    ]


def test_missing_build_stage_artifact_is_fatal(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    _build_stage(temp_dir, "f1")
    host = ServiceDefinitionHost(
        make_service_definition(individually=True), version="3.38.0"
    )

    with pytest.raises(ArtifactCopyError) as excinfo:
        _distributor(temp_dir, host, recording_logger).distribute(
            PackagingMode.INDIVIDUAL, ["f1", "f2"], "svc", "aws"
        )

    assert excinfo.value.identity == "f2"
    assert excinfo.value.source == temp_dir / ".webpack" / "f2.zip"
    assert "package" not in host.get_function("f2")


def test_google_unified_sets_service_artifact(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    _build_stage(temp_dir, "svc")
    host = ServiceDefinitionHost(make_service_definition(provider="google"), version="3.0.0")

    bindings = _distributor(temp_dir, host, recording_logger).distribute(
        PackagingMode.UNIFIED, ["f1", "f2"], "svc", "google"
    )

    service_package = host.to_dict()["package"]
    assert service_package["artifact"] == ".serverless/svc.zip"
    assert service_package["artifact"] == bindings["f1"]
    # Per-function bindings are still written.
    assert resolve_artifact_path(host.get_function("f2")) == ".serverless/svc.zip"


@pytest.mark.parametrize("provider", ["aws", "azure", "Google"])
def test_other_providers_get_no_service_artifact(
    provider: str, temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    _build_stage(temp_dir, "svc")
    host = ServiceDefinitionHost(make_service_definition(provider=provider), version="3.0.0")

    _distributor(temp_dir, host, recording_logger).distribute(
        PackagingMode.UNIFIED, ["f1", "f2"], "svc", provider
    )

    assert "artifact" not in host.to_dict()["package"]


def test_google_individual_gets_no_service_artifact(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    _build_stage(temp_dir, "f1", "f2")
    host = ServiceDefinitionHost(
        make_service_definition(provider="google", individually=True), version="3.0.0"
    )

    _distributor(temp_dir, host, recording_logger).distribute(
        PackagingMode.INDIVIDUAL, ["f1", "f2"], "svc", "google"
    )

    assert "artifact" not in host.to_dict()["package"]


def test_single_function_run_copies_only_that_artifact(
    temp_dir: Path, recording_logger: RecordingLogger
) -> None:
    _build_stage(temp_dir, "f1", "f2")
    host = ServiceDefinitionHost(
        make_service_definition(individually=True), version="3.0.0"
    )

    bindings = _distributor(temp_dir, host, recording_logger).distribute(
        PackagingMode.INDIVIDUAL, ["f2"], "svc", "aws"
    )

    assert bindings == {"f2": ".serverless/f2.zip"}
    assert not (temp_dir / ".serverless" / "f1.zip").exists()
