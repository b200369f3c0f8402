"""One-shot deferred callbacks on the Qt event loop."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from PyQt6.QtCore import QTimer


class Scheduler(Protocol):
    def after(self, delay: float, callback: Callable[[], None]) -> None: ...


class QtScheduler:
    """Runs callbacks on the thread that owns the Qt event loop.

    Usage:
        scheduler = QtScheduler()
        scheduler.after(0.5, lambda: print("later"))
    """

    def after(self, delay: float, callback: Callable[[], None]) -> None:
        QTimer.singleShot(max(0, round(delay * 1000)), callback)
