"""Batch session driving a macro file through the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from loguru import logger
from rich.console import Console

from ..core.assembler import COMMENT_PREFIX, EXIT_COMMAND, LineAssembler, open_script
from ..core.dispatcher import CommandDispatcher, CommandExecutor
from ..errors import CommandFailedError, FatalDispatchError, ScriptOpenError

DEFAULT_ECHO_VERBOSE_LEVEL = 2


@dataclass(frozen=True)
class SessionResult:
    """Outcome of one pass over a macro file."""

    previous: Any
    commands: int = 0
    warnings: int = 0
    error: FatalDispatchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchSession:
    """Execute the commands of one macro file, then hand control back.

    The file is opened at construction. When it cannot be opened the session
    is inert: ``run`` returns straight away with the previous session.
    """

    def __init__(
        self,
        path: str | Path,
        previous: Any = None,
        *,
        executor: CommandExecutor,
        console: Console | None = None,
        echo_verbose_level: int = DEFAULT_ECHO_VERBOSE_LEVEL,
        strict: bool = True,
    ) -> None:
        self.path = Path(path)
        self.previous = previous
        self._executor = executor
        self._console = console or Console()
        self._dispatcher = CommandDispatcher(executor, console=console)
        self._echo_verbose_level = echo_verbose_level
        self._stream: TextIO | None = None
        self._assembler: LineAssembler | None = None
        self._log = logger.bind(script=str(self.path))

        try:
            self._stream = open_script(self.path)
        except OSError as exc:
            error = ScriptOpenError(self.path)
            if strict:
                raise error from exc
            self._log.error("{}: {}", error, exc)
            return
        self._assembler = LineAssembler(self._stream)

    @property
    def opened(self) -> bool:
        return self._stream is not None and not self._stream.closed

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()

    def __enter__(self) -> BatchSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        self.close()

    def read_command(self) -> str:
        if self._assembler is None:
            return EXIT_COMMAND
        return self._assembler.read_command()

    def run(self) -> SessionResult:
        """Dispatch every logical command until ``exit`` or a fatal status."""

        if not self.opened:
            return SessionResult(previous=self.previous)

        commands = 0
        warnings = 0
        while True:
            command = self.read_command()
            if command == EXIT_COMMAND:
                break
            if not command:
                continue

            if command.startswith(COMMENT_PREFIX):
                if self._executor.verbose_level == self._echo_verbose_level:
                    self._console.print(command, markup=False, highlight=False)
                continue

            try:
                self._dispatcher.dispatch(command)
            except CommandFailedError:
                warnings += 1
                self._log.warning("A problem occurred with the previous command. Keep reading the macro.")
                continue
            except FatalDispatchError as exc:
                line = self._assembler.line_number if self._assembler else 0
                self._log.error("macro halted at line {}", line)
                return SessionResult(previous=self.previous, commands=commands, warnings=warnings, error=exc)
            commands += 1

        return SessionResult(previous=self.previous, commands=commands, warnings=warnings)

    def pause(self, prompt: str) -> SessionResult:
        """Run as a nested pause session named ``prompt``."""

        self._log.info("Pause session <{}> start.", prompt)
        result = self.run()
        self._log.info("Pause session <{}> Terminate.", prompt)
        return result
