"""Forward logical commands to an executor and classify the outcome."""

from __future__ import annotations

from typing import Protocol

from loguru import logger
from rich.console import Console

from macroloop.core.types import DispatchStatus, StatusKind, classify_status
from macroloop.errors import CommandFailedError, ExecutorError


class CommandExecutor(Protocol):
    """Contract for whatever actually interprets macro commands."""

    verbose_level: int

    def apply(self, command: str) -> int: ...


class CommandDispatcher:
    """Submit commands and turn non-success codes into typed errors."""

    def __init__(self, executor: CommandExecutor, console: Console | None = None) -> None:
        self._executor = executor
        self._console = console or Console(stderr=True)

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    def dispatch(self, command: str) -> DispatchStatus:
        """Run one command.

        Raises:
            FatalDispatchError: the executor returned any non-success code.
            CommandFailedError: the executor broke without returning a code.
        """

        try:
            code = self._executor.apply(command)
        except ExecutorError as exc:
            logger.error("executor failed on <{}>: {}", command, exc)
            raise CommandFailedError(command, str(exc)) from exc

        status = classify_status(code)
        if status.succeeded:
            logger.debug("command ok: {}", command)
            return status

        error = status.error_for(command)
        logger.error("{}", error)
        if status.kind is StatusKind.ILLEGAL_PARAMETER:
            self._console.print(f"({status.parameter_index}) <{command}>", markup=False, highlight=False)
        raise error
