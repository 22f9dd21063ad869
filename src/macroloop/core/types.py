"""Dispatch status codes and their classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from macroloop.errors import (
    CommandNotFoundError,
    FatalDispatchError,
    IllegalApplicationStateError,
    IllegalParameterError,
)


class StatusCode(IntEnum):
    """Well-known codes returned by command executors."""

    SUCCEEDED = 0
    NOT_FOUND = 100
    ILLEGAL_APPLICATION_STATE = 200
    PARAMETER_OUT_OF_RANGE = 300
    PARAMETER_UNREADABLE = 400
    PARAMETER_OUT_OF_CANDIDATES = 500
    ALIAS_NOT_FOUND = 600


class StatusKind(str, Enum):
    SUCCEEDED = "succeeded"
    NOT_FOUND = "not_found"
    ILLEGAL_STATE = "illegal_state"
    ILLEGAL_PARAMETER = "illegal_parameter"


@dataclass(frozen=True)
class DispatchStatus:
    """Classified outcome of one executor call."""

    code: int
    kind: StatusKind
    parameter_index: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.kind is StatusKind.SUCCEEDED

    def error_for(self, command: str) -> FatalDispatchError:
        """Build the fatal error matching this status."""

        if self.kind is StatusKind.SUCCEEDED:
            raise ValueError("a succeeded status has no error")
        if self.kind is StatusKind.NOT_FOUND:
            return CommandNotFoundError(command, self)
        if self.kind is StatusKind.ILLEGAL_STATE:
            return IllegalApplicationStateError(command, self)
        return IllegalParameterError(command, self)


def classify_status(code: int) -> DispatchStatus:
    """Map any integer status code to exactly one status kind."""

    if code == StatusCode.SUCCEEDED:
        return DispatchStatus(code, StatusKind.SUCCEEDED)
    if code == StatusCode.NOT_FOUND:
        return DispatchStatus(code, StatusKind.NOT_FOUND)
    if code == StatusCode.ILLEGAL_APPLICATION_STATE:
        return DispatchStatus(code, StatusKind.ILLEGAL_STATE)
    return DispatchStatus(code, StatusKind.ILLEGAL_PARAMETER, parameter_index=code % 100)
