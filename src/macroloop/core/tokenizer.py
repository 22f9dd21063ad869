"""Quote-aware splitting of one macro line."""

from __future__ import annotations

DELIMITER = " "
QUOTES = ('"', "'")


def _skip_delimiters(line: str, index: int) -> int:
    while index < len(line) and line[index] == DELIMITER:
        index += 1
    return index


def tokenize(line: str) -> list[str]:
    """Split a line on spaces, keeping quoted runs as single tokens.

    A token opening with ``"`` or ``'`` runs up to and including the next
    matching quote, or to the end of the line when the quote is never
    closed. Quote characters stay in the token. Tabs are not delimiters;
    callers convert them to spaces first.
    """

    tokens: list[str] = []
    start = _skip_delimiters(line, 0)
    while start < len(line):
        head = line[start]
        if head in QUOTES:
            close = line.find(head, start + 1)
            end = len(line) if close < 0 else close + 1
        else:
            end = line.find(DELIMITER, start)
            if end < 0:
                end = len(line)
        tokens.append(line[start:end])
        start = _skip_delimiters(line, end)
    return tokens
