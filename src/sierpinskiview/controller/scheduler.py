"""
Redraw Scheduler
================
Coalesces redraw requests so at most one frame is pending per canvas.

A new request cancels the pending one and schedules the next paint in its
place. There is a single pending slot, not a queue, so a burst of pan/zoom
events yields one frame drawn with the latest view.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class RedrawScheduler(QObject):
    """
    Single-slot redraw coalescer backed by a single-shot QTimer.

    Args:
        callback: Runs one frame; called on the GUI thread.
        interval_ms: Delay before the pending redraw runs (0 = next event-loop turn).
        parent: Owning QObject; the timer dies with it.
    """
    def __init__(self, callback: Callable[[], None], interval_ms: int = 0, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._callback = callback
        self._superseded = 0

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._run)

    def request(self) -> None:
        """Schedule a redraw, replacing any that is still pending."""
        if self._timer.isActive():
            self._timer.stop()
            self._superseded += 1
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()

    def is_pending(self) -> bool:
        return self._timer.isActive()

    def flush(self) -> bool:
        """Run the pending redraw immediately. Returns False if none was pending."""
        if not self._timer.isActive():
            return False
        self._timer.stop()
        self._run()
        return True

    @property
    def superseded(self) -> int:
        """Number of requests replaced before they ran."""
        return self._superseded

    def _run(self) -> None:
        self._callback()
