"""Exception types for macroloop."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from macroloop.core.types import DispatchStatus


class MacroError(Exception):
    """Base exception for macroloop."""


class ScriptOpenError(MacroError):
    """Raised when a macro file cannot be opened for reading."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Cannot open macro file {path}")
        self.path = path


class FatalDispatchError(MacroError):
    """Base exception for executor statuses that halt the session."""

    label = "Command failed"

    def __init__(self, command: str, status: DispatchStatus) -> None:
        super().__init__(f"{self.label}: {command}")
        self.command = command
        self.status = status


class CommandNotFoundError(FatalDispatchError):
    """Raised when the executor does not know the command."""

    label = "Command not found"


class IllegalApplicationStateError(FatalDispatchError):
    """Raised when the command is not allowed in the executor's current state."""

    label = "Illegal application state"


class IllegalParameterError(FatalDispatchError):
    """Raised when the executor rejects one of the command's parameters."""

    label = "Illegal parameter"

    @property
    def parameter_index(self) -> int:
        return self.status.parameter_index or 0


class CommandFailedError(MacroError):
    """Raised when a command failed but the macro can keep running."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"{command}: {reason}")
        self.command = command
        self.reason = reason


class ExecutorError(MacroError):
    """Raised by executors when they fail without producing a status code."""
