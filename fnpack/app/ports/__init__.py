"""Port interfaces for the fnpack application layer.

These protocol interfaces define contracts for adapters.
Packaging logic depends on these ports, never on concrete implementations.
"""

__all__ = [
    "ArchivePort",
    "CommandResult",
    "CommandRunnerPort",
    "HostRegistryPort",
    "LoggerPort",
    "PackagerPort",
    "StoragePort",
]

from fnpack.app.ports.archive import ArchivePort
from fnpack.app.ports.host import HostRegistryPort
from fnpack.app.ports.logger import LoggerPort
from fnpack.app.ports.packager import PackagerPort
from fnpack.app.ports.process import CommandResult, CommandRunnerPort
from fnpack.app.ports.storage import StoragePort
