"""Command line interface for macroloop."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

import typer
from rich.console import Console

from macroloop.config import get_settings
from macroloop.core.assembler import EXIT_COMMAND, LineAssembler, open_script
from macroloop.core.dispatcher import CommandExecutor
from macroloop.errors import ScriptOpenError
from macroloop.executors import EchoExecutor, ShellExecutor
from macroloop.logging_utils import configure_logging
from macroloop.runtime.session import BatchSession

EXIT_FATAL_DISPATCH = 1
EXIT_SCRIPT_UNREADABLE = 2

app = typer.Typer(name="macroloop", help="Run macro scripts against a command executor.", add_completion=False)


class ExecutorChoice(str, Enum):
    echo = "echo"
    shell = "shell"


def _build_executor(kind: Literal["echo", "shell"], verbose_level: int, shell_cwd: Path | None) -> CommandExecutor:
    if kind == "shell":
        return ShellExecutor(cwd=shell_cwd, verbose_level=verbose_level)
    return EchoExecutor(verbose_level=verbose_level)


@app.command()
def run(
    script: Path = typer.Argument(..., help="Macro file to execute"),  # noqa: B008
    executor: ExecutorChoice | None = typer.Option(None, "--executor", "-e", help="Executor to run commands with"),
    verbose: int | None = typer.Option(None, "--verbose", "-v", help="Executor verbose level"),
    pause: str | None = typer.Option(None, "--pause", help="Run as a named pause session"),
    lenient: bool = typer.Option(False, "--lenient", help="Treat an unreadable script as empty"),
) -> None:
    """Execute every command of a macro file."""

    overrides: dict[str, object] = {}
    if executor is not None:
        overrides["executor"] = executor.value
    if verbose is not None:
        overrides["verbose_level"] = verbose
    settings = get_settings(**overrides)
    configure_logging(settings.log_level, profile=settings.log_profile)

    command_executor = _build_executor(settings.executor, settings.verbose_level, settings.shell_cwd)
    try:
        session = BatchSession(
            script,
            executor=command_executor,
            echo_verbose_level=settings.echo_verbose_level,
            strict=not lenient,
        )
    except ScriptOpenError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(EXIT_SCRIPT_UNREADABLE) from exc

    with session:
        result = session.pause(pause) if pause else session.run()

    if result.error is not None:
        typer.echo(str(result.error), err=True)
        raise typer.Exit(EXIT_FATAL_DISPATCH)


@app.command()
def commands(
    script: Path = typer.Argument(..., help="Macro file to read"),  # noqa: B008
) -> None:
    """Print the logical commands of a macro file without running them."""

    console = Console()
    try:
        stream = open_script(script)
    except OSError as exc:
        typer.echo(str(ScriptOpenError(script)), err=True)
        raise typer.Exit(EXIT_SCRIPT_UNREADABLE) from exc

    with stream:
        assembler = LineAssembler(stream)
        while (command := assembler.read_command()) != EXIT_COMMAND:
            console.print(command, markup=False, highlight=False)
