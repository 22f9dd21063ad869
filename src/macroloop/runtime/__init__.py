"""Runtime package for macroloop."""

from .session import BatchSession, SessionResult

__all__ = ["BatchSession", "SessionResult"]
