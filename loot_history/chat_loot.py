"""Tracks directly looted items by parsing CHAT_MSG_LOOT messages.

Flow: loot message -> classifier -> actor resolver -> dedup check
-> entry builder -> history recorder.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping

from loot_history.dedup import DedupCache
from loot_history.entry import EntryBuilder, LootEntry
from loot_history.events import CHAT_MSG_LOOT, EventBus
from loot_history.identity import LocalIdentity, SourceIdentity, resolve_actor
from loot_history.parser import classify_message
from loot_history.patterns import PatternSet, compile_patterns

logger = logging.getLogger(__name__)


class LootHistoryChat:
    """Owns the compiled loot patterns and the dedup cache for one session.

    Usage:
        chat = LootHistoryChat(templates, builder, local_identity, roster)
        chat.initialize(bus)
        # ... CHAT_MSG_LOOT events flow in ...
        chat.shutdown()
    """

    def __init__(
        self,
        templates: Mapping[str, str | None],
        builder: EntryBuilder,
        local_identity: LocalIdentity,
        roster: SourceIdentity | None = None,
        dedup: DedupCache | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._patterns: PatternSet = compile_patterns(templates)
        self._builder = builder
        self._local_identity = local_identity
        self._roster = roster
        self._dedup = dedup if dedup is not None else DedupCache()
        self._clock = clock
        self._bus: EventBus | None = None

    @property
    def patterns(self) -> PatternSet:
        return self._patterns

    @property
    def dedup(self) -> DedupCache:
        return self._dedup

    def initialize(self, bus: EventBus) -> None:
        """Subscribe to CHAT_MSG_LOOT."""
        if self._bus is not None:
            self._bus.unregister_event(CHAT_MSG_LOOT, self._on_chat_msg_loot)
        self._bus = bus
        bus.register_event(CHAT_MSG_LOOT, self._on_chat_msg_loot)
        logger.info("LootHistoryChat initialized (%d patterns)", len(self._patterns))

    def shutdown(self) -> None:
        """Unsubscribe and forget recent pickups. Pending quality retries still run."""
        if self._bus is not None:
            self._bus.unregister_event(CHAT_MSG_LOOT, self._on_chat_msg_loot)
            self._bus = None
        self._dedup.clear()
        logger.info("LootHistoryChat shut down")

    def _on_chat_msg_loot(self, message: str, guid: str | None = None) -> None:
        self.process_message(message, guid)

    def process_message(self, message: str, source_id: str | None = None) -> LootEntry | None:
        """Handle one loot message. Returns the delivered entry, if any."""
        if self._builder.config is None:
            return None

        match = classify_message(message, self._patterns, source_id)
        if match is None:
            return None

        actor_name, actor_class = resolve_actor(match, self._local_identity, self._roster)

        if self._dedup.should_suppress(actor_name or "", match.item_token, self._clock()):
            return None

        return self._builder.build(actor_name, actor_class, match.item_token, match.quantity)
