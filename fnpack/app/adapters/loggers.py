"""Logger adapters bridging ``LoggerPort`` to concrete output mechanisms."""

from __future__ import annotations

import logging
from collections.abc import Callable

from fnpack.app.ports import LoggerPort


class StdlibLoggerAdapter(LoggerPort):
    """Route packaging logs through the ``logging`` module.

    ``verbose`` maps to DEBUG, ``notice`` to INFO and ``error`` to ERROR.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("fnpack")

    def verbose(self, message: str) -> None:
        self._logger.debug(message)

    def notice(self, message: str) -> None:
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


class ConsoleLoggerAdapter(LoggerPort):
    """Legacy CLI logging: plain lines through an echo callable.

    Verbose lines are dropped unless ``verbose`` is enabled; errors carry an
    ``ERROR:`` prefix.
    """

    def __init__(self, echo: Callable[[str], None], *, verbose: bool = False) -> None:
        self._echo = echo
        self._verbose = verbose

    def verbose(self, message: str) -> None:
        if self._verbose:
            self._echo(message)

    def notice(self, message: str) -> None:
        self._echo(message)

    def error(self, message: str) -> None:
        self._echo(f"ERROR: {message}")
