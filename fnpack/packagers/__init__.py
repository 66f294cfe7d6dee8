"""Registry and factory for supported packagers.

Every packager implements ``PackagerPort``. Adding a tool means adding a
variant module and one entry in ``REGISTERED_PACKAGERS``; lookup code does
not change.
"""

from __future__ import annotations

from fnpack.app.ports import CommandRunnerPort, LoggerPort
from fnpack.errors import PackagerNotFoundError
from fnpack.packagers.base import BasePackager
from fnpack.packagers.npm import NpmPackager
from fnpack.packagers.yarn import YarnPackager

REGISTERED_PACKAGERS: dict[str, type[BasePackager]] = {
    NpmPackager.packager_id: NpmPackager,
    YarnPackager.packager_id: YarnPackager,
}


def get_packager(
    packager_id: str,
    *,
    logger: LoggerPort,
    runner: CommandRunnerPort | None = None,
) -> BasePackager:
    """Resolve ``packager_id`` to a packager instance.

    Lookup is exact and case-sensitive. An unknown id is reported through
    ``logger`` and raised as ``PackagerNotFoundError``; the caller decides
    whether that ends the run.
    """
    packager_cls = REGISTERED_PACKAGERS.get(packager_id)
    if packager_cls is None:
        logger.error(f'Could not find packager "{packager_id}"')
        raise PackagerNotFoundError(packager_id)
    return packager_cls(runner)


__all__ = [
    "REGISTERED_PACKAGERS",
    "BasePackager",
    "NpmPackager",
    "YarnPackager",
    "get_packager",
]
