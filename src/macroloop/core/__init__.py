"""Core module for macroloop."""

from .assembler import EXIT_COMMAND, LineAssembler
from .dispatcher import CommandDispatcher, CommandExecutor
from .tokenizer import tokenize
from .types import DispatchStatus, StatusCode, StatusKind, classify_status

__all__ = [
    "EXIT_COMMAND",
    "CommandDispatcher",
    "CommandExecutor",
    "DispatchStatus",
    "LineAssembler",
    "StatusCode",
    "StatusKind",
    "classify_status",
    "tokenize",
]
