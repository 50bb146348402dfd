"""Document and cursor primitives shared by the typing engine.

A document is an ordered sequence of text lines. Rows are 1-based and
columns are 0-based, the same way the host editor addresses its cursor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

Document = List[str]


@dataclass(frozen=True)
class Position:
    line: int = 1
    column: int = 0


def is_document(value: object) -> bool:
    """Return True if *value* is an ordered sequence of strings."""
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        return False
    return all(isinstance(item, str) for item in value)


def as_document(value: object) -> Optional[Document]:
    """Copy *value* into a new list of lines, or None if it is not a document."""
    if value is None:
        return []
    if not is_document(value):
        return None
    return list(value)


def clamp(value: int, low: int, high: int) -> int:
    if value < low:
        return low
    if value > high:
        return high
    return value


def line_at(lines: Sequence[str], line: int) -> str:
    """Return the text at 1-based *line*, or "" when it is out of range."""
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return ""


def leading_whitespace(text: str) -> str:
    return text[: len(text) - len(text.lstrip())]


def clamp_position(lines: Sequence[str], position: Position) -> Position:
    """Clamp *position* into the bounds of *lines*."""
    line = clamp(position.line, 1, max(len(lines), 1))
    column = clamp(position.column, 0, len(line_at(lines, line)))
    return Position(line, column)


def as_position(value: object) -> Position:
    """Accept a Position or a ``(line, column)`` pair; anything else is (1, 0)."""
    if isinstance(value, Position):
        return value
    if isinstance(value, (list, tuple)) and len(value) == 2:
        line, column = value
        if isinstance(line, int) and isinstance(column, int):
            return Position(line, column)
    return Position()
