"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .archive import ZipArchiveBuilder
from .loggers import ConsoleLoggerAdapter, StdlibLoggerAdapter
from .process import SubprocessCommandRunner
from .service_host import ServiceDefinitionHost
from .storage import FileSystemStorageAdapter

__all__ = [
    "ConsoleLoggerAdapter",
    "FileSystemStorageAdapter",
    "ServiceDefinitionHost",
    "StdlibLoggerAdapter",
    "SubprocessCommandRunner",
    "ZipArchiveBuilder",
]
