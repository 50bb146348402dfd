from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence, Tuple

from typecheck.core.config import TypeCheckConfig
from typecheck.core.history import SessionRecord
from typecheck.core.lines import Position, clamp, leading_whitespace, line_at
from typecheck.core.navigator import next_position
from typecheck.core.progress import ProgressSnapshot
from typecheck.core.remap import remap_progress
from typecheck.core.scoring import DocumentScore, LineScore, ScoreBoard
from typecheck.core.stats import (
    SessionStats,
    Stats,
    commit,
    compute_stats,
    elapsed_ms,
    format_title,
    is_paused,
    non_negative,
    record_activity,
    tick,
)

logger = logging.getLogger(__name__)


class TypingSession:
    """The one active re-typing session over a target document.

    Owns the typed transcript, the live per-line scores and the
    pause-aware clock. Timestamps passed in are monotonic milliseconds.
    """

    def __init__(
        self,
        target: Sequence[str],
        typed: Optional[Sequence[str]] = None,
        cursor: Optional[Position] = None,
        elapsed_seconds: float = 0.0,
        config: Optional[TypeCheckConfig] = None,
    ) -> None:
        self._target: List[str] = list(target)
        self._config = config or TypeCheckConfig()
        lines = list(typed or [])
        lines += [""] * (len(self._target) - len(lines))
        self._typed: List[str] = lines or [""]
        self._board = ScoreBoard()
        self._board.rebuild(self._target, self._typed)
        self._start_elapsed = float(non_negative(elapsed_seconds))
        self._stats = SessionStats(accumulated_ms=int(self._start_elapsed * 1000))
        self._cursor = Position()
        self.move_cursor(cursor or Position())

    @classmethod
    def resume(
        cls,
        target: Sequence[str],
        snapshot: Optional[ProgressSnapshot],
        config: Optional[TypeCheckConfig] = None,
    ) -> "TypingSession":
        """Restore a saved snapshot onto *target*, which may have been edited since.

        Falls back to a blank transcript when the saved lines cannot be
        carried over. Active time is always kept.
        """
        if snapshot is None:
            return cls(target, config=config)

        lines: Optional[List[str]] = None
        cursor = snapshot.cursor
        if snapshot.target is not None and len(snapshot.target) == len(snapshot.lines):
            remapped = remap_progress(snapshot.target, target, snapshot.lines, snapshot.cursor)
            if remapped is not None:
                lines, cursor = remapped.lines, remapped.cursor
                logger.info(
                    "Restored %d of %d lines after target change",
                    remapped.preserved_count,
                    remapped.total_lines,
                )
        if lines is None and len(snapshot.lines) == len(target):
            lines = snapshot.lines
        if lines is None:
            logger.warning("Saved progress does not match the target; starting a blank session")
            cursor = Position()

        return cls(target, typed=lines, cursor=cursor, elapsed_seconds=snapshot.elapsed, config=config)

    @property
    def target(self) -> List[str]:
        return list(self._target)

    @property
    def typed(self) -> List[str]:
        return list(self._typed)

    @property
    def cursor(self) -> Position:
        return self._cursor

    @property
    def config(self) -> TypeCheckConfig:
        return self._config

    @property
    def session_stats(self) -> SessionStats:
        return self._stats

    @property
    def paused(self) -> bool:
        return is_paused(self._stats)

    def line_score(self, line: int) -> LineScore:
        return self._board.get(line)

    def totals(self) -> DocumentScore:
        return self._board.totals()

    def edit_line(self, line: int, text: str, now: int) -> LineScore:
        """Replace the typed text of *line* after a user edit."""
        self._stats = record_activity(self._stats, now)
        return self._set_line(line, text)

    def tick(self, now: int) -> bool:
        """Run the idle check; returns True if the clock is paused afterwards."""
        self._stats = tick(self._stats, now, self._config.idle_threshold_ms)
        return self.paused

    def elapsed_seconds(self, now: int) -> float:
        return elapsed_ms(self._stats, now) / 1000

    def stats(self, now: int) -> Stats:
        totals = self.totals()
        return compute_stats(totals.total_correct, totals.total_typed, self.elapsed_seconds(now))

    def title(self, now: int) -> str:
        return format_title(self._stats, self.stats(now))

    def progress(self) -> Tuple[int, int, int]:
        """Return (cursor line, total lines, percent through the file)."""
        total = max(len(self._target), 1)
        current = clamp(self._cursor.line, 1, total)
        return current, total, (current * 100) // total

    def move_cursor(self, position: Position) -> Position:
        line = clamp(position.line, 1, len(self._typed))
        column = clamp(position.column, 0, len(self._typed[line - 1]))
        self._cursor = Position(line, column)
        return self._cursor

    def advance(self, direction: int) -> Position:
        """Move to the next line to type, filling in skipped separator lines."""
        navigation = next_position(
            self._target,
            self._cursor.line,
            direction,
            auto_skip=self._config.auto_skip_separators,
        )
        for line, text in navigation.autofill.items():
            self._set_line(line, text)
        line = navigation.position.line
        if self._config.auto_indent and line_at(self._typed, line) == "":
            self._set_line(line, leading_whitespace(line_at(self._target, line)))
        self._cursor = Position(line, clamp(navigation.position.column, 0, len(line_at(self._typed, line))))
        return self._cursor

    def clear_line(self, line: int) -> Position:
        """Reset a typed line, keeping the target's indentation when auto-indent is on."""
        indent = ""
        if self._config.auto_indent:
            indent = leading_whitespace(line_at(self._target, line))
        self._set_line(line, indent)
        return self.move_cursor(Position(line, len(indent)))

    def snapshot(self, now: int) -> ProgressSnapshot:
        """Commit the running burst and capture what a save needs."""
        self._stats = commit(self._stats, now)
        return ProgressSnapshot(
            lines=self.typed,
            cursor=self._cursor,
            elapsed=self._stats.accumulated_ms / 1000,
            target=self.target,
        )

    def record(self, file: str, now: int, ts: Optional[float] = None) -> SessionRecord:
        totals = self.totals()
        elapsed = self.elapsed_seconds(now)
        result = compute_stats(totals.total_correct, totals.total_typed, elapsed)
        return SessionRecord(
            ts=ts if ts is not None else time.time(),
            file=file,
            wpm=result.wpm,
            accuracy=result.accuracy,
            correct=totals.total_correct,
            typed=totals.total_typed,
            elapsed=elapsed,
            session_elapsed=max(elapsed - self._start_elapsed, 0.0),
        )

    def _set_line(self, line: int, text: str) -> LineScore:
        if line < 1:
            return LineScore()
        if line > len(self._typed):
            self._typed += [""] * (line - len(self._typed))
        self._typed[line - 1] = text
        return self._board.update(line, line_at(self._target, line), text)
