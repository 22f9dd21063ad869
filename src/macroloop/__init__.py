"""macroloop - run macro scripts one logical command at a time."""

from .core import CommandDispatcher, DispatchStatus, LineAssembler, tokenize
from .runtime import BatchSession, SessionResult

__version__ = "0.1.0"

__all__ = ["BatchSession", "CommandDispatcher", "DispatchStatus", "LineAssembler", "SessionResult", "tokenize"]
