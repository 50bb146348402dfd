from __future__ import annotations

import math
from dataclasses import dataclass, replace
from fractions import Fraction
from numbers import Real
from typing import Optional

CHARS_PER_WORD = 5
MIN_ELAPSED_SECONDS = 1
IDLE_THRESHOLD_MS = 2000


@dataclass(frozen=True)
class Stats:
    wpm: int
    accuracy: int


@dataclass(frozen=True)
class SessionStats:
    """Pause-aware activity clock for one typing session.

    ``active_start`` is None while paused. Timestamps are monotonic
    milliseconds supplied by the caller.
    """

    accumulated_ms: int = 0
    active_start: Optional[int] = None
    last_activity: Optional[int] = None


def non_negative(value: object) -> Real:
    """Finite non-negative number, or 0 for anything else."""
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        return 0
    return max(value, 0)


def compute_stats(total_correct: int, total_typed: int, elapsed_seconds: float) -> Stats:
    """Words per minute from correct characters, plus truncated accuracy.

    Elapsed time is clamped to one second so an instant save never
    divides by zero. Accuracy is 100 when nothing has been typed.
    """
    correct = int(non_negative(total_correct))
    typed = int(non_negative(total_typed))
    seconds = Fraction(max(non_negative(elapsed_seconds), MIN_ELAPSED_SECONDS))

    wpm = math.floor(Fraction(correct, CHARS_PER_WORD) / (seconds / 60))
    accuracy = 100 if typed == 0 else (correct * 100) // typed
    return Stats(wpm=wpm, accuracy=accuracy)


def is_paused(stats: SessionStats) -> bool:
    return stats.active_start is None


def elapsed_ms(stats: SessionStats, now: int) -> int:
    total = stats.accumulated_ms
    if stats.active_start is not None:
        total += now - stats.active_start
    return max(total, 0)


def record_activity(stats: SessionStats, now: int) -> SessionStats:
    """Mark a character edit at *now*, resuming the clock if paused."""
    start = now if stats.active_start is None else stats.active_start
    return replace(stats, active_start=start, last_activity=now)


def tick(stats: SessionStats, now: int, idle_threshold_ms: int = IDLE_THRESHOLD_MS) -> SessionStats:
    """Pause the clock once no activity was seen for *idle_threshold_ms*.

    The finished burst ends at the last activity, so idle time is never
    counted. Calling it again while paused changes nothing.
    """
    if stats.active_start is None or stats.last_activity is None:
        return stats
    if now - stats.last_activity <= idle_threshold_ms:
        return stats
    burst = max(stats.last_activity - stats.active_start, 0)
    return replace(stats, accumulated_ms=stats.accumulated_ms + burst, active_start=None)


def commit(stats: SessionStats, now: int) -> SessionStats:
    """Fold the running burst into ``accumulated_ms`` before a save."""
    if stats.active_start is None:
        return stats
    burst = max(now - stats.active_start, 0)
    return replace(stats, accumulated_ms=stats.accumulated_ms + burst, active_start=now)


def status_label(stats: SessionStats) -> str:
    return "PAUSED" if is_paused(stats) else "WPM"


def format_title(stats: SessionStats, result: Stats) -> str:
    return f" TypeCheck ({status_label(stats)}: {result.wpm} | Acc: {result.accuracy}%) "
