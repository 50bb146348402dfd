"""Line-level diff between two versions of a target document."""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from typecheck.core.lines import is_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Hunk:
    """Old lines ``[old_start, old_start + old_count)`` became the new block.

    Starts are 1-based. A zero count marks a pure insertion or deletion
    sitting just before that start index.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int

    @property
    def old_end(self) -> int:
        return self.old_start + self.old_count - 1

    @property
    def new_end(self) -> int:
        return self.new_start + self.new_count - 1

    def consumes_old(self, line: int) -> bool:
        return self.old_start <= line <= self.old_end


def align(old_lines: Sequence[str], new_lines: Sequence[str]) -> Optional[List[Hunk]]:
    """Return the ordered hunks turning *old_lines* into *new_lines*.

    Returns None when the diff cannot be computed.
    """
    if not is_document(old_lines) or not is_document(new_lines):
        return None
    try:
        matcher = difflib.SequenceMatcher(None, list(old_lines), list(new_lines), autojunk=False)
        opcodes = matcher.get_opcodes()
    except (TypeError, ValueError) as e:
        logger.warning("Line diff unavailable: %s", e)
        return None

    return [
        Hunk(old_start=i1 + 1, old_count=i2 - i1, new_start=j1 + 1, new_count=j2 - j1)
        for tag, i1, i2, j1, j2 in opcodes
        if tag != "equal"
    ]
