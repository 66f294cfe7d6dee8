"""Host registry adapter backed by a serverless service definition."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from fnpack.app.ports import HostRegistryPort
from fnpack.errors import ServiceDefinitionError

logger = logging.getLogger(__name__)

DEFAULT_RUNTIME = "nodejs"
DEFAULT_PROVIDER = "aws"


class ServiceDefinitionHost(HostRegistryPort):
    """In-memory view of a ``serverless.yml`` style service definition.

    Function records are returned by reference, so artifact bindings written
    by the distributor are visible through ``to_dict``.
    """

    def __init__(self, definition: dict[str, Any], *, version: str) -> None:
        if not isinstance(definition, dict):
            raise ServiceDefinitionError("Service definition must be a mapping")

        self._definition = copy.deepcopy(definition)
        self._version = version

        functions = self._definition.get("functions") or {}
        if not isinstance(functions, dict):
            raise ServiceDefinitionError("'functions' must be a mapping of name to record")
        # Bare `name:` entries parse as None; give them a record to write into.
        self._definition["functions"] = {
            name: (record if record is not None else {}) for name, record in functions.items()
        }

        if not self.get_service_name():
            raise ServiceDefinitionError("Service definition has no service name")

    @classmethod
    def from_file(cls, path: Path, *, version: str) -> ServiceDefinitionHost:
        """Load a YAML (or JSON) service definition from ``path``."""
        source = Path(path)
        if not source.is_file():
            raise ServiceDefinitionError(f"Service definition not found: {source}")

        try:
            definition = yaml.safe_load(source.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ServiceDefinitionError(f"Invalid service definition {source}: {exc}") from exc

        logger.debug("Loaded service definition from %s", source)
        return cls(definition or {}, version=version)

    def get_function(self, name: str) -> dict[str, Any]:
        try:
            return self._definition["functions"][name]
        except KeyError as exc:
            raise ServiceDefinitionError(f"Function '{name}' is not defined in the service") from exc

    def list_functions(self, runtime_prefix: str | None = None) -> list[str]:
        names = list(self._definition["functions"])
        if runtime_prefix is None:
            return names

        provider_runtime = self._provider().get("runtime") or DEFAULT_RUNTIME
        return [
            name
            for name in names
            if str(self._definition["functions"][name].get("runtime") or provider_runtime).startswith(
                runtime_prefix
            )
        ]

    def get_service_name(self) -> str:
        service = self._definition.get("service")
        if isinstance(service, dict):
            return str(service.get("name") or "")
        return str(service or "")

    def is_individually_packaged(self) -> bool:
        package = self._definition.get("package") or {}
        return bool(package.get("individually", False))

    def get_provider_name(self) -> str:
        return str(self._provider().get("name") or DEFAULT_PROVIDER)

    def get_version(self) -> str:
        return self._version

    def set_service_artifact(self, artifact_path: str) -> None:
        package = self._definition.get("package")
        if not isinstance(package, dict):
            package = {}
            self._definition["package"] = package
        package["artifact"] = artifact_path

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the (possibly mutated) service definition."""
        return copy.deepcopy(self._definition)

    def _provider(self) -> dict[str, Any]:
        provider = self._definition.get("provider") or {}
        if isinstance(provider, str):
            return {"name": provider}
        return provider
