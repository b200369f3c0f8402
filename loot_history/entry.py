"""Loot history entries: policy checks, construction, delivery and quality backfill."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from loot_history.config import AppConfig
from loot_history.scheduler import Scheduler

logger = logging.getLogger(__name__)

QUALITY_RETRY_DELAY = 0.5  # seconds
DEFAULT_MIN_QUALITY = 2  # uncommon


class ItemMetadata(Protocol):
    def icon_for(self, item_token: str) -> str | None: ...

    def quality_for(self, item_token: str) -> int | None: ...


@dataclass
class LootEntry:
    """One row of loot history.

    Direct loot has no roll. quality may arrive later (see EntryBuilder).
    """

    item_link: str
    winner: str
    timestamp: float
    item_texture: str | None = None
    quality: int | None = None
    winner_class: str | None = None
    quantity: int = 1
    roll_type: str | None = None
    roll: int | None = None
    is_complete: bool = True
    is_direct_loot: bool = True


def _call_optional(target: Any, method: str, *args: object) -> None:
    """Call target.method(*args) if the recorder provides it."""
    if target is None:
        return
    func = getattr(target, method, None)
    if callable(func):
        func(*args)


class EntryBuilder:
    """Turns accepted pickups into LootEntry rows for the history recorder.

    config and recorder may be None (not initialized yet); the builder then
    does nothing, or skips the missing recorder calls.
    """

    def __init__(
        self,
        catalog: ItemMetadata,
        scheduler: Scheduler,
        recorder: Any = None,
        config: AppConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.catalog = catalog
        self.scheduler = scheduler
        self.recorder = recorder
        self.config = config
        self._clock = clock

    def build(
        self,
        actor_name: str,
        actor_class: str | None,
        item_token: str,
        quantity: int = 1,
    ) -> LootEntry | None:
        """Build and deliver an entry. Returns it, or None if filtered out."""
        config = self.config
        if config is None:
            return None
        if not config.track_direct_loot:
            return None

        icon = self.catalog.icon_for(item_token)
        quality = self.catalog.quality_for(item_token)

        # Quality filter applies to direct loot only; rolled items are always tracked
        min_quality = config.min_quality if config.min_quality is not None else DEFAULT_MIN_QUALITY
        if quality is not None and quality < min_quality:
            logger.debug("Below min quality (%d < %d): %s", quality, min_quality, item_token[:60])
            return None

        entry = LootEntry(
            item_link=item_token,
            item_texture=icon,
            quality=quality,
            winner=actor_name,
            winner_class=actor_class,
            quantity=quantity,
            timestamp=self._clock(),
        )

        # Item not cached yet: ask once more shortly
        if quality is None:
            self._schedule_quality_retry(entry)

        _call_optional(self.recorder, "add_entry", entry)
        logger.info("Loot: %s x%d -> %s", item_token[:60], quantity, actor_name)

        if config.auto_show:
            _call_optional(self.recorder, "show")

        return entry

    def _schedule_quality_retry(self, entry: LootEntry) -> None:
        def retry() -> None:
            quality = self.catalog.quality_for(entry.item_link)
            if quality is None:
                logger.debug("Quality still unknown: %s", entry.item_link[:60])
                return
            entry.quality = quality
            _call_optional(self.recorder, "refresh")

        self.scheduler.after(QUALITY_RETRY_DELAY, retry)
