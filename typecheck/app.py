"""Entry point printing saved TypeCheck progress and session statistics."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from typecheck.core.config import TypeCheckConfig, load_config
from typecheck.core.history import (
    FileProgress,
    build_summary,
    format_duration,
    progress_bar,
)
from typecheck.core.lines import clamp
from typecheck.core.progress import ProgressStore
from typecheck.core.scoring import score_document
from typecheck.core.stats import compute_stats


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def file_progress(store: ProgressStore) -> List[FileProgress]:
    items = []
    for name in store.files():
        snapshot = store.get(name)
        target = snapshot.target if snapshot.target is not None else snapshot.lines
        total = max(len(target), 1)
        scores = score_document(target, snapshot.lines)
        result = compute_stats(scores.total_correct, scores.total_typed, snapshot.elapsed)
        items.append(
            FileProgress(
                name=name,
                cursor_line=clamp(snapshot.cursor.line, 1, total),
                total_lines=total,
                wpm=result.wpm,
                accuracy=result.accuracy,
                correct=scores.total_correct,
                typed=scores.total_typed,
                elapsed=snapshot.elapsed,
            )
        )
    return items


def format_report(store: ProgressStore, config: TypeCheckConfig, today: Optional[str] = None) -> List[str]:
    files = file_progress(store)
    if not files:
        return ["TypeCheck: no saved sessions."]

    summary = build_summary(
        store.history,
        files,
        config.daily_goal_minutes,
        today or date.today().isoformat(),
    )

    def show(value: Optional[int], suffix: str = "") -> str:
        return "n/a" if value is None else f"{value}{suffix}"

    if summary.daily_goal_minutes > 0:
        goal = (
            f"Active today: {format_duration(summary.active_today)} "
            f"({summary.daily_goal_percent}% of {summary.daily_goal_minutes}m) "
            f"{progress_bar(summary.daily_goal_percent)}"
        )
    else:
        goal = f"Active today: {format_duration(summary.active_today)} (goal off)"

    lines = [
        f"Total sessions: {summary.total_sessions}",
        f"Active time (all): {format_duration(summary.total_elapsed)}",
        goal,
        f"Average WPM: {show(summary.average_wpm)}",
        f"Best WPM: {show(summary.best_wpm)}",
        f"Average accuracy: {show(summary.average_accuracy, '%')}",
        f"Best accuracy: {show(summary.best_accuracy, '%')}",
        f"WPM trend (last {len(store.history.recent_wpm())}): {summary.wpm_trend}",
        "",
    ]
    for item in files:
        lines.append(
            f"{item.name}  {item.cursor_line}/{item.total_lines} ({item.percent}%) "
            f"{progress_bar(item.percent)}  WPM {item.wpm}  Acc {item.accuracy}%"
        )
    lines.append("")
    for label, done in summary.achievements.items():
        lines.append(f"[{'x' if done else ' '}] {label}")
    return lines


def run(argv: Optional[List[str]] = None) -> None:
    """Load config and saved progress, then print the statistics report."""
    parser = argparse.ArgumentParser(description="Show saved TypeCheck progress and session statistics")
    parser.add_argument("--config", type=Path, default=None, help="YAML options file (default ~/.typecheck/config.yaml)")
    parser.add_argument("--progress", type=Path, default=None, help="Progress file (default ~/.typecheck/progress.json)")
    args = parser.parse_args(argv)

    configure_logging()
    try:
        config = load_config(args.config)
    except ValueError as e:
        logging.error("Invalid configuration: %s", e)
        sys.exit(2)

    store = ProgressStore(args.progress, history_size=config.history_size)
    for line in format_report(store, config):
        print(line)


if __name__ == "__main__":
    run()
