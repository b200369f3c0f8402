"""In-memory loot history: the recorder entries are delivered to."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from loot_history.catalog import ItemQuality, parse_item_link
from loot_history.entry import LootEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 500


def format_entry(entry: LootEntry) -> str:
    """One-line text rendering of an entry."""
    link = parse_item_link(entry.item_link)
    name = f"[{link.name}]" if link else entry.item_link
    if entry.quantity > 1:
        name = f"{name} x{entry.quantity}"
    if entry.quality is None:
        quality = "?"
    else:
        try:
            quality = ItemQuality(entry.quality).name.lower()
        except ValueError:
            quality = str(entry.quality)
    winner = entry.winner
    if entry.winner_class:
        winner = f"{winner} ({entry.winner_class})"
    return f"{name} [{quality}] -> {winner}"


class LootHistory:
    """Newest-last list of loot entries, bounded to max_entries.

    Listeners registered with subscribe() are called with the history on
    every change (add, refresh, show).
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self._entries: deque[LootEntry] = deque(maxlen=max_entries)
        self._listeners: list[Callable[[LootHistory], None]] = []
        self.visible = False

    def subscribe(self, listener: Callable[[LootHistory], None]) -> None:
        self._listeners.append(listener)

    def add_entry(self, entry: LootEntry) -> None:
        self._entries.append(entry)
        logger.debug("History entry added: %s", format_entry(entry))
        self._notify()

    def show(self) -> None:
        if not self.visible:
            logger.info("Loot history shown (%d entries)", len(self._entries))
        self.visible = True
        self._notify()

    def hide(self) -> None:
        self.visible = False

    def refresh(self) -> None:
        self._notify()

    def entries(self) -> list[LootEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._notify()

    def __len__(self) -> int:
        return len(self._entries)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)
