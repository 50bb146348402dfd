"""Session history and the figures shown on the statistics page."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from typecheck.core.stats import CHARS_PER_WORD

TREND_LEVELS = " .:-=+*#%@"
TREND_WINDOW = 20


@dataclass
class SessionRecord:
    """One finished session. ``elapsed`` is the file's cumulative active time."""

    ts: float
    file: str
    wpm: int
    accuracy: int
    correct: int
    typed: int
    elapsed: float
    session_elapsed: Optional[float] = None

    @classmethod
    def from_json(cls, value: dict) -> Optional["SessionRecord"]:
        """Build a record from saved JSON, or None if any field is missing or mistyped."""
        names = {f.name for f in fields(cls)}
        required = names - {"session_elapsed"}
        if not required <= value.keys() <= names:
            return None
        if not isinstance(value["file"], str):
            return None
        if not all(_is_count(value[key]) for key in ("wpm", "accuracy", "correct", "typed")):
            return None
        if not _is_seconds(value["elapsed"]) or not _is_timestamp(value["ts"]):
            return None
        session_elapsed = value.get("session_elapsed")
        if session_elapsed is not None and not _is_seconds(session_elapsed):
            return None
        return cls(**value)


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_seconds(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def _is_timestamp(value: object) -> bool:
    if not _is_seconds(value):
        return False
    try:
        date_key(value)
    except (OverflowError, OSError, ValueError):
        return False
    return True


@dataclass
class FileProgress:
    name: str
    cursor_line: int
    total_lines: int
    wpm: int
    accuracy: int
    correct: int
    typed: int
    elapsed: float

    @property
    def percent(self) -> int:
        return (self.cursor_line * 100) // max(self.total_lines, 1)

    @property
    def complete(self) -> bool:
        return self.cursor_line >= self.total_lines


@dataclass
class StatsSummary:
    total_sessions: int
    total_elapsed: float
    active_today: float
    daily_goal_minutes: int
    average_wpm: Optional[int]
    best_wpm: Optional[int]
    average_accuracy: Optional[int]
    best_accuracy: Optional[int]
    wpm_trend: str
    achievements: Dict[str, bool] = field(default_factory=dict)

    @property
    def daily_goal_percent(self) -> int:
        if self.daily_goal_minutes <= 0:
            return 0
        return max(int(self.active_today * 100 // (self.daily_goal_minutes * 60)), 0)


class SessionHistory:
    """Bounded, append-only list of finished sessions."""

    def __init__(self, records: Optional[List[SessionRecord]] = None, limit: int = 200) -> None:
        self._records: List[SessionRecord] = list(records or [])
        self._limit = limit
        self._trim()

    @property
    def records(self) -> List[SessionRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def record(self, entry: SessionRecord) -> None:
        self._records.append(entry)
        self._trim()

    def recent_wpm(self, count: int = TREND_WINDOW) -> List[int]:
        return [entry.wpm for entry in self._records[-count:]]

    def daily_active_seconds(self, day: str) -> float:
        """Active seconds of all sessions that ended on *day* (``YYYY-MM-DD``)."""
        total = 0.0
        last_total_by_file: Dict[str, float] = {}
        for entry in self._records:
            session_elapsed = session_elapsed_for(entry, last_total_by_file)
            if date_key(entry.ts) == day and session_elapsed > 0:
                total += session_elapsed
            last_total_by_file[entry.file] = entry.elapsed
        return total

    def _trim(self) -> None:
        if self._limit and len(self._records) > self._limit:
            del self._records[: len(self._records) - self._limit]


def date_key(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d")


def session_elapsed_for(entry: SessionRecord, last_total_by_file: Dict[str, float]) -> float:
    """Active seconds spent in *entry* alone.

    Older records only carry the cumulative ``elapsed``; for those the
    delta against the previous record of the same file is used.
    """
    if entry.session_elapsed is not None:
        return entry.session_elapsed
    previous = last_total_by_file.get(entry.file)
    if previous is not None and entry.elapsed - previous >= 0:
        return entry.elapsed - previous
    return entry.elapsed


def format_duration(seconds: float) -> str:
    total = int(max(seconds or 0, 0))
    return f"{total // 60}m {total % 60}s"


def wpm_trend(values: Sequence[int]) -> str:
    """Sparkline of *values* scaled between their own min and max."""
    if not values:
        return "n/a"
    low, high = min(values), max(values)
    span = high - low
    out = []
    for value in values:
        idx = 0
        if span > 0:
            idx = int((value - low) / span * (len(TREND_LEVELS) - 1))
        out.append(TREND_LEVELS[idx])
    return "".join(out)


def progress_bar(percent: int, width: int = 12) -> str:
    percent = max(0, min(percent, 100))
    filled = percent * width // 100
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def build_summary(
    history: SessionHistory,
    files: Sequence[FileProgress],
    daily_goal_minutes: int,
    today: str,
) -> StatsSummary:
    total_elapsed = sum(item.elapsed for item in files)
    total_correct = sum(item.correct for item in files)
    total_typed = sum(item.typed for item in files)
    best_wpm = max((item.wpm for item in files), default=0)
    best_accuracy = max((item.accuracy for item in files), default=0)

    average_wpm = None
    if total_elapsed > 0 and total_correct > 0:
        average_wpm = int((total_correct / CHARS_PER_WORD) // (total_elapsed / 60))
    average_accuracy = None
    if total_typed > 0:
        average_accuracy = total_correct * 100 // total_typed

    achievements = {
        "First session saved": bool(files),
        "Complete a file": any(item.complete for item in files),
        "Accuracy 90%+": best_accuracy >= 90,
        "Accuracy 100%": best_accuracy >= 100,
        "WPM 60+": best_wpm >= 60,
        "WPM 80+": best_wpm >= 80,
        "WPM 100+": best_wpm >= 100,
    }

    return StatsSummary(
        total_sessions=len(history),
        total_elapsed=total_elapsed,
        active_today=history.daily_active_seconds(today),
        daily_goal_minutes=max(daily_goal_minutes, 0),
        average_wpm=average_wpm,
        best_wpm=best_wpm or None,
        average_accuracy=average_accuracy,
        best_accuracy=best_accuracy or None,
        wpm_trend=wpm_trend(history.recent_wpm()),
        achievements=achievements,
    )
