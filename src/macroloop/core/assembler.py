"""Fold physical macro lines into logical commands."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from loguru import logger

from macroloop.core.tokenizer import tokenize

EXIT_COMMAND = "exit"
COMMENT_PREFIX = "#"
CONTINUATION_PREFIXES = ("\\", "_")
SCRIPT_ENCODING = "utf-8-sig"


class LineAssembler:
    """Read logical commands from a sequential text stream.

    A token starting with ``\\`` or ``_`` continues the command on the next
    physical line. Lines starting with ``#`` come back verbatim so the
    caller can echo them. Once the stream is exhausted with nothing pending
    the assembler returns ``"exit"``.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.line_number = 0

    def read_command(self) -> str:
        parts: list[str] = []
        continued = False
        at_eof = False

        while not at_eof:
            raw = self._stream.readline()
            # A final line without a newline is still processed.
            at_eof = not raw.endswith("\n")
            if raw:
                self.line_number += 1

            line = _normalize(raw)
            if not continued and not line:
                continue

            if line.startswith(COMMENT_PREFIX):
                if parts:
                    logger.debug("line {}: comment drops pending continuation", self.line_number)
                return line

            continued = self._collect_tokens(line, parts)
            if continued:
                continue
            if parts:
                break

        command = " ".join(parts).strip()
        if at_eof and not command:
            return EXIT_COMMAND
        return command

    def _collect_tokens(self, line: str, parts: list[str]) -> bool:
        """Append the line's command tokens to ``parts``; return whether it continues."""

        tokens = tokenize(line)
        for index, token in enumerate(tokens):
            if token.startswith(COMMENT_PREFIX):
                return False
            if token.startswith(CONTINUATION_PREFIXES):
                if index != len(tokens) - 1:
                    logger.warning(
                        "line {}: Unexpected character after line continuation character.",
                        self.line_number,
                    )
                return True
            parts.append(token)
        return False


def _normalize(raw: str) -> str:
    line = raw.rstrip("\n").replace("\t", " ")
    return line.strip().rstrip("\r")


def open_script(path: Path) -> TextIO:
    """Open a macro file for reading; undecodable bytes become U+FFFD."""

    return path.open(encoding=SCRIPT_ENCODING, errors="replace")
