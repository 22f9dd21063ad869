from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any

import pytest
from loguru import logger
from rich.console import Console

from macroloop.core.types import StatusCode


@dataclass
class FakeExecutor:
    codes: dict[str, int] = field(default_factory=dict)
    verbose_level: int = 0
    applied: list[str] = field(default_factory=list)

    def apply(self, command: str) -> int:
        self.applied.append(command)
        return self.codes.get(command, StatusCode.SUCCEEDED)


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def console_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_buffer: io.StringIO) -> Console:
    return Console(file=console_buffer, width=200)


@pytest.fixture
def log_records() -> Any:
    records: list[dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)
