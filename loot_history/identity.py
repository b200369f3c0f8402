"""Who looted: local player identity and the GUID -> class roster."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Protocol

from loot_history.parser import ObservedMatch

logger = logging.getLogger(__name__)

DEFAULT_ROSTER_SIZE = 200


class LocalIdentity(Protocol):
    def current_actor_name(self) -> str: ...

    def current_actor_archetype(self) -> str: ...


class SourceIdentity(Protocol):
    def archetype_for_source(self, source_id: str | None) -> str | None: ...


class StaticLocalIdentity:
    """Local player identity taken from settings."""

    def __init__(self, name: str, archetype: str = "") -> None:
        self._name = name
        self._archetype = archetype

    def current_actor_name(self) -> str:
        return self._name

    def current_actor_archetype(self) -> str:
        return self._archetype


class GuidRoster:
    """Player GUID -> class token, learned from PLAYER_INFO events.

    Bounded LRU: the least recently seen GUID is dropped first.
    """

    def __init__(self, max_size: int = DEFAULT_ROSTER_SIZE) -> None:
        self._max_size = max_size
        self._classes: OrderedDict[str, str] = OrderedDict()

    def remember(self, guid: str, archetype: str) -> None:
        if not guid or not archetype:
            return
        if guid in self._classes:
            self._classes.move_to_end(guid)
        elif len(self._classes) >= self._max_size:
            self._classes.popitem(last=False)
        self._classes[guid] = archetype

    def archetype_for_source(self, source_id: str | None) -> str | None:
        if not source_id:
            return None
        archetype = self._classes.get(source_id)
        if archetype is not None:
            self._classes.move_to_end(source_id)
        return archetype

    def clear(self) -> None:
        self._classes.clear()

    def __len__(self) -> int:
        return len(self._classes)


def resolve_actor(
    match: ObservedMatch,
    local: LocalIdentity,
    roster: SourceIdentity | None,
) -> tuple[str, str | None]:
    """Resolve (actor_name, actor_class) for a classified loot message.

    An unknown GUID leaves the class unset; that only costs the class colour.
    """
    if match.is_self:
        return local.current_actor_name(), local.current_actor_archetype()

    archetype = None
    if roster is not None and match.source_id:
        archetype = roster.archetype_for_source(match.source_id)
        if archetype is None:
            logger.debug("No class for %s (%s)", match.actor, match.source_id)
    return match.actor or "", archetype
