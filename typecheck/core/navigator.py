from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence

from typecheck.core.classifier import is_separator_line
from typecheck.core.lines import Position, clamp, is_document, leading_whitespace


@dataclass(frozen=True)
class Navigation:
    """Where the cursor goes next.

    ``autofill`` maps each skipped separator line to the text the caller
    should write into the typed document for it.
    """

    position: Position
    autofill: Dict[int, str] = field(default_factory=dict)


def next_position(
    target_lines: Sequence[str],
    current_line: int,
    direction: int,
    auto_skip: bool = True,
) -> Navigation:
    """Find the next line to type in *direction*, skipping separators.

    The column lands after the target line's indentation. Running off
    either end saturates at the last line (forward) or at (1, 0). A
    *current_line* that is not an integer counts as before the first line.
    """
    if not is_document(target_lines) or not target_lines:
        return Navigation(Position(1, 0))

    if isinstance(current_line, bool) or not isinstance(current_line, int):
        current_line = 0
    step = -1 if isinstance(direction, (int, float)) and direction < 0 else 1
    total = len(target_lines)
    autofill: Dict[int, str] = {}
    candidate = clamp(current_line, 0, total + 1) + step

    while 1 <= candidate <= total:
        text = target_lines[candidate - 1]
        if auto_skip and is_separator_line(text):
            autofill[candidate] = text
            candidate += step
            continue
        return Navigation(Position(candidate, len(leading_whitespace(text))), autofill)

    if step > 0:
        return Navigation(Position(total, len(target_lines[-1])), autofill)
    return Navigation(Position(1, 0), autofill)
