"""Host registry port: the framework's function and service model."""

from typing import Any, Protocol


class HostRegistryPort(Protocol):
    """Port interface for the hosting framework's service model.

    Function records are mutable mappings; the packaging core writes the
    artifact binding into them.

    Side effects: ``set_service_artifact`` and record mutation only.
    """

    def get_function(self, name: str) -> dict[str, Any]:
        """Return the mutable record for function ``name``.

        Raises:
            ServiceDefinitionError: If the function is unknown
        """
        ...

    def list_functions(self, runtime_prefix: str | None = None) -> list[str]:
        """Return function names, optionally limited to a runtime family."""
        ...

    def get_service_name(self) -> str:
        """Return the service name."""
        ...

    def is_individually_packaged(self) -> bool:
        """Return the ``package.individually`` flag."""
        ...

    def get_provider_name(self) -> str:
        """Return the deployment provider id (e.g. ``aws``, ``google``)."""
        ...

    def get_version(self) -> str:
        """Return the host framework version string."""
        ...

    def set_service_artifact(self, artifact_path: str) -> None:
        """Record a service-level artifact (``service.package.artifact``)."""
        ...

    def to_dict(self) -> dict[str, Any]:
        """Return a snapshot of the service definition, including bindings."""
        ...
