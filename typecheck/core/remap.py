from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from typecheck.core.aligner import align
from typecheck.core.lines import Document, Position, as_document, as_position, clamp, line_at

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemapResult:
    lines: Document
    cursor: Position
    preserved_count: int
    total_lines: int


class _Remapper:
    """Walks the hunk list, copying typed lines across unchanged spans."""

    def __init__(self, old_typed: Sequence[str], new_total: int, cursor: Position) -> None:
        self.old_typed = old_typed
        self.lines: Document = [""] * new_total
        self.cursor = cursor
        self.new_cursor: Optional[Position] = None
        self.old_index = 1
        self.new_index = 1
        self.preserved = 0

    def copy_unchanged(self, count: int) -> None:
        for offset in range(max(count, 0)):
            old_line = self.old_index + offset
            new_line = self.new_index + offset
            text = line_at(self.old_typed, old_line)
            self.lines[new_line - 1] = text
            self.preserved += 1
            if self.cursor.line == old_line:
                self.new_cursor = Position(new_line, clamp(self.cursor.column, 0, len(text)))
        self.old_index += max(count, 0)
        self.new_index += max(count, 0)


def remap_progress(
    old_target: Sequence[str],
    new_target: Sequence[str],
    old_typed: Optional[Sequence[str]] = None,
    old_cursor: object = None,
) -> Optional[RemapResult]:
    """Carry a typed transcript over to an edited version of its target.

    Lines in unchanged regions are copied verbatim; lines inside a
    changed region start blank. A cursor on a changed line moves to the
    start of the replacement block. Returns None when the documents are
    malformed or cannot be diffed.
    """
    old_doc = as_document(old_target) if old_target is not None else None
    new_doc = as_document(new_target) if new_target is not None else None
    typed_doc = as_document(old_typed)
    if old_doc is None or new_doc is None or typed_doc is None:
        return None

    hunks = align(old_doc, new_doc)
    if hunks is None:
        logger.warning("Cannot remap progress: line diff unavailable")
        return None

    total = len(new_doc)
    cursor = as_position(old_cursor)
    state = _Remapper(typed_doc, total, cursor)

    for hunk in hunks:
        unchanged = min(
            max(hunk.old_start - state.old_index, 0),
            max(hunk.new_start - state.new_index, 0),
        )
        state.copy_unchanged(unchanged)

        if hunk.old_count > 0 and hunk.consumes_old(cursor.line):
            state.new_cursor = Position(clamp(hunk.new_start, 1, max(total, 1)), 0)

        state.old_index = hunk.old_start + hunk.old_count
        state.new_index = hunk.new_start + hunk.new_count

    state.copy_unchanged(min(len(old_doc) - state.old_index + 1, total - state.new_index + 1))

    new_cursor = state.new_cursor or Position(clamp(cursor.line, 1, max(total, 1)), 0)
    new_cursor = Position(
        new_cursor.line,
        clamp(new_cursor.column, 0, len(line_at(state.lines, new_cursor.line))),
    )
    return RemapResult(
        lines=state.lines,
        cursor=new_cursor,
        preserved_count=state.preserved,
        total_lines=total,
    )
