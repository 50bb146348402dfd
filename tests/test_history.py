"""Tests for typecheck.core.history – session history and summaries."""

from __future__ import annotations

from datetime import datetime

import pytest

from typecheck.core.history import (
    FileProgress,
    SessionHistory,
    SessionRecord,
    build_summary,
    date_key,
    format_duration,
    progress_bar,
    session_elapsed_for,
    wpm_trend,
)


def _ts(day: int, hour: int = 12) -> float:
    return datetime(2026, 3, day, hour).timestamp()


def _record(ts: float, file: str = "a.py", wpm: int = 40, elapsed: float = 60.0, session_elapsed=None):
    return SessionRecord(
        ts=ts, file=file, wpm=wpm, accuracy=90, correct=100, typed=110,
        elapsed=elapsed, session_elapsed=session_elapsed,
    )


# ===========================================================================
# SessionHistory
# ===========================================================================

class TestSessionHistory:
    def test_record_and_limit(self):
        h = SessionHistory(limit=3)
        for i in range(5):
            h.record(_record(ts=float(i)))
        assert len(h) == 3
        assert [r.ts for r in h.records] == [2.0, 3.0, 4.0]

    def test_initial_records_trimmed(self):
        h = SessionHistory([_record(float(i)) for i in range(4)], limit=2)
        assert len(h) == 2

    def test_records_returns_copy(self):
        h = SessionHistory()
        h.records.append(_record(1.0))
        assert len(h) == 0

    def test_recent_wpm(self):
        h = SessionHistory([_record(float(i), wpm=i) for i in range(30)])
        assert h.recent_wpm() == list(range(10, 30))
        assert h.recent_wpm(3) == [27, 28, 29]

    def test_daily_active_seconds_uses_session_elapsed(self):
        h = SessionHistory([
            _record(_ts(1), elapsed=100.0, session_elapsed=100.0),
            _record(_ts(2), elapsed=160.0, session_elapsed=60.0),
            _record(_ts(2, 18), elapsed=190.0, session_elapsed=30.0),
        ])
        assert h.daily_active_seconds(date_key(_ts(2))) == pytest.approx(90.0)

    def test_daily_active_seconds_from_cumulative_elapsed(self):
        h = SessionHistory([
            _record(_ts(1), elapsed=100.0),
            _record(_ts(2), elapsed=160.0),
            _record(_ts(2), file="b.py", elapsed=20.0),
        ])
        assert h.daily_active_seconds(date_key(_ts(2))) == pytest.approx(80.0)


class TestSessionRecordFromJson:
    def test_round_trip_of_saved_fields(self):
        entry = _record(_ts(3), session_elapsed=12.5)
        assert SessionRecord.from_json(dict(entry.__dict__)) == entry

    def test_session_elapsed_optional(self):
        value = dict(_record(_ts(3)).__dict__)
        del value["session_elapsed"]
        assert SessionRecord.from_json(value) == _record(_ts(3))

    @pytest.mark.parametrize(
        "changes",
        [{"ts": "x"}, {"ts": float("inf")}, {"elapsed": -1.0}, {"correct": 1.5}, {"file": None}, {"extra": 1}],
    )
    def test_rejects_bad_fields(self, changes):
        assert SessionRecord.from_json({**_record(_ts(3)).__dict__, **changes}) is None


class TestSessionElapsedFor:
    def test_explicit_value_wins(self):
        assert session_elapsed_for(_record(0, elapsed=50, session_elapsed=5), {"a.py": 10}) == 5

    def test_delta_against_previous(self):
        assert session_elapsed_for(_record(0, elapsed=50), {"a.py": 10}) == 40

    def test_negative_delta_falls_back(self):
        assert session_elapsed_for(_record(0, elapsed=50), {"a.py": 80}) == 50


# ===========================================================================
# formatting helpers
# ===========================================================================

class TestFormatting:
    @pytest.mark.parametrize("seconds, expected", [(0, "0m 0s"), (59.9, "0m 59s"), (125, "2m 5s"), (-3, "0m 0s")])
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_wpm_trend_empty(self):
        assert wpm_trend([]) == "n/a"

    def test_wpm_trend_flat(self):
        assert wpm_trend([30, 30, 30]) == "   "

    def test_wpm_trend_range(self):
        assert wpm_trend([10, 55, 100]) == " =@"

    @pytest.mark.parametrize(
        "pct, expected",
        [(0, "[------------]"), (50, "[######------]"), (100, "[############]"), (150, "[############]"), (-5, "[------------]")],
    )
    def test_progress_bar(self, pct, expected):
        assert progress_bar(pct) == expected


# ===========================================================================
# build_summary
# ===========================================================================

class TestBuildSummary:
    @pytest.fixture()
    def files(self):
        return [
            FileProgress(name="a.py", cursor_line=10, total_lines=10, wpm=62, accuracy=91,
                         correct=300, typed=330, elapsed=60.0),
            FileProgress(name="b.py", cursor_line=2, total_lines=8, wpm=30, accuracy=80,
                         correct=100, typed=125, elapsed=60.0),
        ]

    def test_totals(self, files):
        h = SessionHistory([_record(_ts(5), wpm=30, session_elapsed=600.0)])
        summary = build_summary(h, files, daily_goal_minutes=30, today=date_key(_ts(5)))
        assert summary.total_sessions == 1
        assert summary.total_elapsed == 120.0
        assert summary.average_wpm == 40
        assert summary.best_wpm == 62
        assert summary.average_accuracy == 87
        assert summary.best_accuracy == 91
        assert summary.active_today == 600.0
        assert summary.daily_goal_percent == 33
        assert summary.wpm_trend == " "

    def test_achievements(self, files):
        summary = build_summary(SessionHistory(), files, 30, "2026-03-05")
        assert summary.achievements["First session saved"]
        assert summary.achievements["Complete a file"]
        assert summary.achievements["Accuracy 90%+"]
        assert not summary.achievements["Accuracy 100%"]
        assert summary.achievements["WPM 60+"]
        assert not summary.achievements["WPM 80+"]

    def test_nothing_saved(self):
        summary = build_summary(SessionHistory(), [], 0, "2026-03-05")
        assert summary.average_wpm is None
        assert summary.best_wpm is None
        assert summary.average_accuracy is None
        assert summary.daily_goal_percent == 0
        assert not any(summary.achievements.values())


class TestFileProgress:
    def test_percent_and_complete(self):
        item = FileProgress("a", cursor_line=3, total_lines=4, wpm=0, accuracy=100, correct=0, typed=0, elapsed=0)
        assert item.percent == 75
        assert not item.complete
