"""Named event subscriptions and decoding of feed lines into events."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

logger = logging.getLogger(__name__)

CHAT_MSG_LOOT = "CHAT_MSG_LOOT"
GET_ITEM_INFO_RECEIVED = "GET_ITEM_INFO_RECEIVED"
PLAYER_INFO = "PLAYER_INFO"

Handler = Callable[..., None]


class EventBus:
    """Minimal event registry, driven from a single thread.

    Usage:
        bus = EventBus()
        bus.register_event(CHAT_MSG_LOOT, on_loot)
        bus.dispatch(CHAT_MSG_LOOT, "You receive loot: [Ore]x5.", None)
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def register_event(self, event: str, handler: Handler) -> None:
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)

    def unregister_event(self, event: str, handler: Handler | None = None) -> None:
        """Remove one handler, or every handler of the event if none is given."""
        if handler is None:
            self._handlers.pop(event, None)
            return
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._handlers[event]

    def is_registered(self, event: str) -> bool:
        return bool(self._handlers.get(event))

    def handler_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))

    def dispatch(self, event: str, *args: object) -> None:
        """Call every handler of event. A failing handler does not stop the rest."""
        for handler in list(self._handlers.get(event, ())):
            try:
                handler(*args)
            except Exception:
                logger.exception("Handler for %s failed", event)


# Feed line formats
#
# Addon dump (one event per line, pipe separated, message text last):
#   17|LOOT|Player-1403-0A1B2C3D|Thrall receives loot: |cff...|h[Sword]|h|r.
#   18|ITEM_INFO|19019|5|inv_sword_39
#   19|PLAYER_INFO|Player-1403-0A1B2C3D|SHAMAN
#
# WoW Chat Log (/chatlog), no sender GUID:
#   2/15 21:30:45.123  You receive loot: |cff...|h[Linen Cloth]|h|rx5.
_RE_CHATLOG_LINE = re.compile(
    r"^\d+/\d+\s+\d+:\d+:\d+\.\d+\s+"  # timestamp
    r"(.+)$"  # message text
)


# Player chat in the chat log; only system lines carry loot messages.
# Shapes follow the channel/whisper/say forms WoW writes to WoWChatLog.txt.
_PLAYER_CHAT_PATTERNS = [
    re.compile(r"^\[[^\]]+\]\s+\[?[^\s:\]]+\]?:\s"),  # [Party] Author-Server: text
    re.compile(r"^\|H(?:channel|player):"),  # |Hchannel:PARTY|h[Группа]|h Author: text
    re.compile(r"^(?:To|Кому)\s+\["),  # To [Author-Server]: text
    re.compile(r"^\[[^\]]+\]\s+(?:whispers|шепчет):\s"),  # [Author-Server] whispers: text
    re.compile(r"^(?:You whisper|Вы шепчете)\s"),
    re.compile(r"^\S+\s+(?:says|yells|говорит|кричит):\s"),  # Author says: text
]


def _is_player_chat(text: str) -> bool:
    return any(p.search(text) for p in _PLAYER_CHAT_PATTERNS)


def _parse_addon_line(line: str) -> tuple[str, tuple[object, ...]] | None:
    parts = line.split("|", 2)
    if len(parts) < 3:
        return None

    seq_str, kind, rest = parts
    try:
        int(seq_str)
    except ValueError:
        return None

    if kind == "LOOT":
        guid, sep, message = rest.partition("|")
        if not sep or not message:
            return None
        return CHAT_MSG_LOOT, (message, guid or None)

    if kind == "ITEM_INFO":
        fields = rest.split("|")
        if len(fields) < 2 or not fields[0]:
            return None
        try:
            quality: int | None = int(fields[1])
        except ValueError:
            quality = None
        icon = fields[2] if len(fields) > 2 and fields[2] else None
        return GET_ITEM_INFO_RECEIVED, (fields[0], quality, icon)

    if kind == "PLAYER_INFO":
        guid, sep, archetype = rest.partition("|")
        if not sep or not guid or not archetype:
            return None
        return PLAYER_INFO, (guid, archetype)

    return None


def parse_event_line(line: str) -> tuple[str, tuple[object, ...]] | None:
    """Decode one feed line into (event, args).

    Returns None for empty or unrecognized lines.
    """
    line = line.strip()
    if not line:
        return None

    if line[0].isdigit() and "|" in line.split(" ", 1)[0]:
        return _parse_addon_line(line)

    m = _RE_CHATLOG_LINE.match(line)
    if m:
        text = m.group(1)
        if _is_player_chat(text):
            return None
        return CHAT_MSG_LOOT, (text, None)

    return None
