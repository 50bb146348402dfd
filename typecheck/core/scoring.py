from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from typecheck.core.lines import line_at

SPACE_PLACEHOLDER = "_"


class SpanKind(str, Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    EXTRA = "extra"
    PENDING = "pending"


@dataclass(frozen=True)
class RenderSpan:
    """A run of characters sharing one display category."""

    text: str
    kind: SpanKind
    start: int


@dataclass(frozen=True)
class LineScore:
    correct_chars: int = 0
    typed_chars: int = 0
    spans: Tuple[RenderSpan, ...] = ()


@dataclass(frozen=True)
class DocumentScore:
    total_correct: int = 0
    total_typed: int = 0


def _display(char: str, kind: SpanKind) -> str:
    if char == " " and kind in (SpanKind.MISMATCH, SpanKind.EXTRA):
        return SPACE_PLACEHOLDER
    return char


def score_line(target: str, typed: str) -> LineScore:
    """Compare *typed* against *target* position by position.

    Characters typed past the end of the target are extra; they count as
    typed but never as correct. The untyped remainder of the target is
    returned as a trailing ``PENDING`` span.
    """
    target = target if isinstance(target, str) else ""
    typed = typed if isinstance(typed, str) else ""

    correct = 0
    spans: List[RenderSpan] = []
    run: List[str] = []
    run_kind = None
    run_start = 0

    for i, char in enumerate(typed):
        if i >= len(target):
            kind = SpanKind.EXTRA
        elif char == target[i]:
            kind = SpanKind.MATCH
            correct += 1
        else:
            kind = SpanKind.MISMATCH
        if kind is not run_kind:
            if run:
                spans.append(RenderSpan("".join(run), run_kind, run_start))
            run, run_kind, run_start = [], kind, i
        run.append(_display(char, kind))
    if run:
        spans.append(RenderSpan("".join(run), run_kind, run_start))

    if len(target) > len(typed):
        spans.append(RenderSpan(target[len(typed):], SpanKind.PENDING, len(typed)))

    return LineScore(correct_chars=correct, typed_chars=len(typed), spans=tuple(spans))


def score_document(target_lines: Sequence[str], typed_lines: Sequence[str]) -> DocumentScore:
    """Sum line scores over every row present on either side."""
    target_lines = target_lines or []
    typed_lines = typed_lines or []
    total_correct = 0
    total_typed = 0
    for row in range(1, max(len(target_lines), len(typed_lines)) + 1):
        score = score_line(line_at(target_lines, row), line_at(typed_lines, row))
        total_correct += score.correct_chars
        total_typed += score.typed_chars
    return DocumentScore(total_correct=total_correct, total_typed=total_typed)


@dataclass
class ScoreBoard:
    """Live per-row scores, refreshed whenever a typed line changes."""

    _rows: Dict[int, LineScore] = field(default_factory=dict)

    def update(self, row: int, target: str, typed: str) -> LineScore:
        score = score_line(target, typed)
        self._rows[row] = score
        return score

    def get(self, row: int) -> LineScore:
        return self._rows.get(row, LineScore())

    def reset(self) -> None:
        self._rows.clear()

    def rebuild(self, target_lines: Sequence[str], typed_lines: Sequence[str]) -> None:
        self.reset()
        for row in range(1, len(typed_lines) + 1):
            self.update(row, line_at(target_lines, row), typed_lines[row - 1])

    def totals(self) -> DocumentScore:
        return DocumentScore(
            total_correct=sum(score.correct_chars for score in self._rows.values()),
            total_typed=sum(score.typed_chars for score in self._rows.values()),
        )
