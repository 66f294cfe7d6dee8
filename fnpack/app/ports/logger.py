"""Logger port shared by every packaging component."""

from typing import Protocol


class LoggerPort(Protocol):
    """Port interface for run logging.

    Core code writes against this capability only. Adapters decide whether
    output goes to the ``logging`` module or to a console echo.
    """

    def verbose(self, message: str) -> None:
        """Emit a message that is only interesting with verbose output on."""
        ...

    def notice(self, message: str) -> None:
        """Emit an informational message the user should always see."""
        ...

    def error(self, message: str) -> None:
        """Emit an error message."""
        ...
