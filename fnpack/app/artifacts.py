"""Artifact assignment strategies and provider policy.

Function records have carried their artifact in two shapes over time:

* hosts before 1.18.0 read ``artifact`` plus ``package.disable``
* later hosts read a nested ``package.artifact``

The shape is picked once per run from the host version.
"""

from __future__ import annotations

from typing import Any, Protocol

from fnpack.app.ports import LoggerPort
from fnpack.errors import InvalidConfigurationError
from fnpack.utils.versions import version_lt

NESTED_ARTIFACT_MIN_VERSION = "1.18.0"

# Providers that deploy one service-level artifact in unified mode.
SERVICE_ARTIFACT_PROVIDERS: frozenset[str] = frozenset({"google"})


def requires_service_artifact(provider: str) -> bool:
    """Return True if ``provider`` needs ``service.package.artifact`` set."""
    return provider in SERVICE_ARTIFACT_PROVIDERS


class ArtifactAssignment(Protocol):
    """Writes an artifact path into a function record."""

    def assign(self, function_name: str, record: dict[str, Any], artifact_path: str) -> None:
        ...


class LegacyArtifactAssignment:
    """Flat ``artifact`` path with default packaging disabled."""

    def __init__(self, logger: LoggerPort) -> None:
        self._logger = logger

    def assign(self, function_name: str, record: dict[str, Any], artifact_path: str) -> None:
        record["artifact"] = artifact_path
        package = record.get("package")
        record["package"] = {**(package if isinstance(package, dict) else {}), "disable": True}
        self._logger.notice(
            f"{function_name} is packaged by fnpack. Ignore messages from the framework."
        )


class NestedArtifactAssignment:
    """Nested ``package.artifact`` descriptor."""

    def assign(self, function_name: str, record: dict[str, Any], artifact_path: str) -> None:
        record["package"] = {"artifact": artifact_path}


def select_assignment_strategy(host_version: str, logger: LoggerPort) -> ArtifactAssignment:
    """Pick the record shape understood by ``host_version``."""
    try:
        legacy = version_lt(host_version, NESTED_ARTIFACT_MIN_VERSION)
    except ValueError as exc:
        raise InvalidConfigurationError("framework_version", host_version, str(exc)) from exc
    if legacy:
        return LegacyArtifactAssignment(logger)
    return NestedArtifactAssignment()


def resolve_artifact_path(record: dict[str, Any]) -> str | None:
    """Read the artifact path back from either record shape."""
    package = record.get("package")
    if isinstance(package, dict) and package.get("artifact"):
        return str(package["artifact"])
    artifact = record.get("artifact")
    return str(artifact) if artifact else None
