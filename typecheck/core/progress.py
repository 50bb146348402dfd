from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from typecheck.core.history import SessionHistory, SessionRecord
from typecheck.core.lines import Position, as_position, is_document

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_PATH = Path.home() / ".typecheck" / "progress.json"


@dataclass
class ProgressSnapshot:
    """Saved state of one file: typed lines, cursor, active seconds and the target they match."""

    lines: List[str] = field(default_factory=list)
    cursor: Position = field(default_factory=Position)
    elapsed: float = 0.0
    target: Optional[List[str]] = None

    def to_json(self) -> dict:
        return {
            "lines": list(self.lines),
            "cursor": [self.cursor.line, self.cursor.column],
            "elapsed": self.elapsed,
            "target": list(self.target) if self.target is not None else None,
        }

    @classmethod
    def from_json(cls, value: dict) -> Optional["ProgressSnapshot"]:
        lines = value.get("lines")
        if not is_document(lines):
            return None
        target = value.get("target")
        try:
            elapsed = max(float(value.get("elapsed", 0.0)), 0.0)
        except (TypeError, ValueError):
            elapsed = 0.0
        if not math.isfinite(elapsed):
            elapsed = 0.0
        return cls(
            lines=list(lines),
            cursor=as_position(value.get("cursor")),
            elapsed=elapsed,
            target=list(target) if is_document(target) else None,
        )


class ProgressStore:
    """Stores per-file typing progress and session history.

    File: ~/.typecheck/progress.json unless another path is given. A
    corrupt or unreadable file is logged and treated as empty.
    """

    def __init__(self, file_path: Optional[Path] = None, history_size: int = 200) -> None:
        self._file_path = file_path or DEFAULT_PROGRESS_PATH
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._history_size = history_size
        self._snapshots, self._history = self._load()

    @property
    def history(self) -> SessionHistory:
        return self._history

    def files(self) -> List[str]:
        return sorted(self._snapshots)

    def get(self, name: str) -> Optional[ProgressSnapshot]:
        return self._snapshots.get(name)

    def put(self, name: str, snapshot: ProgressSnapshot) -> None:
        self._snapshots[name] = snapshot
        self._save()

    def record_session(self, entry: SessionRecord) -> None:
        self._history.record(entry)
        self._save()

    def reset_file(self, name: str) -> None:
        """Forget the saved progress of a single file."""
        self._snapshots.pop(name, None)
        self._save()

    def reset(self) -> None:
        self._snapshots = {}
        self._history = SessionHistory(limit=self._history_size)
        self._save()

    def _load(self) -> Tuple[Dict[str, ProgressSnapshot], SessionHistory]:
        snapshots: Dict[str, ProgressSnapshot] = {}
        history = SessionHistory(limit=self._history_size)
        if not self._file_path.exists():
            return snapshots, history
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return snapshots, history
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed progress file %s", self._file_path)
            return snapshots, history

        files = payload.get("files")
        for name, value in (files if isinstance(files, dict) else {}).items():
            snapshot = ProgressSnapshot.from_json(value) if isinstance(value, dict) else None
            if snapshot is None:
                logger.warning("Skipping malformed progress entry for %s", name)
                continue
            snapshots[name] = snapshot

        records = []
        history_payload = payload.get("history")
        for value in history_payload if isinstance(history_payload, list) else []:
            entry = SessionRecord.from_json(value) if isinstance(value, dict) else None
            if entry is None:
                logger.warning("Skipping malformed history entry: %r", value)
                continue
            records.append(entry)
        return snapshots, SessionHistory(records, limit=self._history_size)

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "files": {name: snapshot.to_json() for name, snapshot in self._snapshots.items()},
            "history": [asdict(entry) for entry in self._history.records],
        }
        try:
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save progress to %s: %s", self._file_path, e)
