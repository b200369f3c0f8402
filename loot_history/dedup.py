"""Short-window suppression of repeated loot notifications.

The client can announce one pickup twice (a "receives loot" line and a
"receives item" line). Both describe the same (player, item), so the second
one inside DEDUP_WINDOW is dropped. Keys older than DEDUP_CLEANUP_AGE are
swept on every observation.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

DEDUP_WINDOW = 2.0  # seconds
DEDUP_CLEANUP_AGE = 5.0  # seconds, must stay above DEDUP_WINDOW


class DedupCache:
    """(actor, item) -> last seen timestamp (monotonic seconds)."""

    def __init__(
        self,
        window: float = DEDUP_WINDOW,
        cleanup_age: float = DEDUP_CLEANUP_AGE,
    ) -> None:
        if cleanup_age < window:
            raise ValueError("cleanup_age must not be shorter than window")
        self._window = window
        self._cleanup_age = cleanup_age
        self._recent: dict[str, float] = {}

    @staticmethod
    def make_key(actor: str, item_token: str) -> str:
        return (actor or "") + item_token

    def cleanup(self, now: float) -> int:
        """Drop every key older than the cleanup horizon. Returns count removed."""
        stale = [key for key, ts in self._recent.items() if now - ts > self._cleanup_age]
        for key in stale:
            del self._recent[key]
        return len(stale)

    def should_suppress(self, actor: str, item_token: str, now: float) -> bool:
        """Return True if this (actor, item) was seen inside the window.

        A non-suppressed observation is recorded with timestamp `now`.
        A suppressed one leaves the stored timestamp untouched.
        """
        self.cleanup(now)
        key = self.make_key(actor, item_token)
        last_seen = self._recent.get(key)
        if last_seen is not None and now - last_seen < self._window:
            logger.debug("Duplicate loot %r, %.2fs after last", key, now - last_seen)
            return True
        self._recent[key] = now
        return False

    def clear(self) -> None:
        self._recent.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._recent

    def __len__(self) -> int:
        return len(self._recent)
