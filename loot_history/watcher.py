"""Polling tail of the loot feed file (WoW chat log or addon dump).

WoW buffers its log writes, so a line can land in two halves; the watcher
holds back an unterminated tail until its newline arrives.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.5  # seconds


class FeedWatcher:
    """Reports every complete new line appended to a file.

    Usage:
        watcher = FeedWatcher(Path("WoWChatLog.txt"), relay.line_received.emit)
        watcher.start()
        # ... later ...
        watcher.stop()

    on_new_line runs on the watcher thread.
    """

    def __init__(
        self,
        file_path: Path,
        on_new_line: Callable[[str], None],
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self._file_path = file_path.resolve()
        self._on_new_line = on_new_line
        self._poll_interval = poll_interval
        self._position: int = 0
        self._pending = b""
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def file_path(self) -> Path:
        return self._file_path

    def start(self, from_end: bool = True) -> None:
        """Start polling. With from_end, lines already in the file are skipped."""
        if from_end:
            self._seek_to_end()
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._poll_loop, name="feed-watcher", daemon=True)
        self._thread.start()
        logger.info("Watching (poll) %s", self._file_path)

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None
        logger.info("Stopped watching %s", self._file_path.name)

    def _seek_to_end(self) -> None:
        try:
            self._position = self._file_path.stat().st_size
        except FileNotFoundError:
            self._position = 0
        self._pending = b""

    def _poll_loop(self) -> None:
        while not self._stop_event.is_set():
            self.poll()
            self._stop_event.wait(self._poll_interval)

    def poll(self) -> int:
        """Read what was appended since the last poll. Returns lines delivered."""
        try:
            size = self._file_path.stat().st_size
        except FileNotFoundError:
            return 0

        # Log rotated or truncated at login
        if size < self._position:
            logger.info("Feed truncated or recreated, resetting position")
            self._position = 0
            self._pending = b""

        if size == self._position:
            return 0

        try:
            with open(self._file_path, "rb") as f:
                f.seek(self._position)
                data = f.read()
                self._position = f.tell()
        except OSError as e:
            logger.warning("Cannot read feed: %s", e)
            return 0

        chunks = (self._pending + data).split(b"\n")
        self._pending = chunks.pop()

        delivered = 0
        for chunk in chunks:
            stripped = chunk.decode("utf-8", errors="replace").strip()
            if stripped:
                self._on_new_line(stripped)
                delivered += 1
        return delivered
