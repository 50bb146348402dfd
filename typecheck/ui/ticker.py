"""Qt timer that drives the idle check of the active typing session."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QElapsedTimer, QObject, QTimer, Signal

from typecheck.core.session import TypingSession


class PauseTicker(QObject):
    """Polls the session and reports pause/resume.

    The poll interval defaults to the session config's ``tick_interval_ms``.
    The pause logic lives in ``TypingSession.tick``; this object only
    schedules it and publishes the resulting title.
    """

    paused_changed = Signal(bool)
    title_changed = Signal(str)

    def __init__(
        self,
        session: TypingSession,
        interval_ms: Optional[int] = None,
        clock: Optional[Callable[[], int]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._session = session
        self._elapsed = QElapsedTimer()
        self._elapsed.start()
        self._clock = clock or self._elapsed.elapsed
        self._paused = session.paused
        self._timer = QTimer(self)
        self._timer.setInterval(session.config.tick_interval_ms if interval_ms is None else interval_ms)
        self._timer.timeout.connect(self.poll)

    def now(self) -> int:
        """Monotonic milliseconds, the time base handed to the session."""
        return int(self._clock())

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def interval(self) -> int:
        return self._timer.interval()

    def poll(self) -> None:
        now = self.now()
        paused = self._session.tick(now)
        if paused != self._paused:
            self._paused = paused
            self.paused_changed.emit(paused)
        self.title_changed.emit(self._session.title(now))
