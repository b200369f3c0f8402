"""Item metadata catalogue: quality and icon per looted item.

Like the client's own item cache it is lazy: an item nobody has described yet
has no metadata, and callers are expected to ask again later.
"""

from __future__ import annotations

import logging
import re
from collections import OrderedDict
from dataclasses import dataclass
from enum import IntEnum

logger = logging.getLogger(__name__)

DEFAULT_MEMORY_SIZE = 1000


class ItemQuality(IntEnum):
    POOR = 0
    COMMON = 1
    UNCOMMON = 2
    RARE = 3
    EPIC = 4
    LEGENDARY = 5
    ARTIFACT = 6
    HEIRLOOM = 7


# Link colour (RRGGBB, lowercase) -> quality
_COLOR_QUALITY: dict[str, ItemQuality] = {
    "9d9d9d": ItemQuality.POOR,
    "ffffff": ItemQuality.COMMON,
    "1eff00": ItemQuality.UNCOMMON,
    "0070dd": ItemQuality.RARE,
    "a335ee": ItemQuality.EPIC,
    "ff8000": ItemQuality.LEGENDARY,
    "e6cc80": ItemQuality.ARTIFACT,
    "00ccff": ItemQuality.HEIRLOOM,
}

# Item hyperlink, old colour format and the newer quality-tag format:
# |cff1eff00|Hitem:2589::::::::60:::::|h[Linen Cloth]|h|r
# |cnIQ4:|Hitem:19019::::::::60:::::|h[Thunderfury]|h|r
_RE_ITEM_LINK = re.compile(
    r"\|c(?:[0-9a-fA-F]{2}([0-9a-fA-F]{6})|nIQ(\d):)"  # colour or quality tag
    r"\|Hitem:(\d+)[^|]*"  # item id + rest of payload
    r"\|h\[([^\]]*)\]\|h\|r"  # [Display Name]
)
# Plain bracketed name, as the chat log writes links once markup is stripped
_RE_BARE_NAME = re.compile(r"^\[([^\]]+)\]$")


@dataclass(frozen=True, slots=True)
class ItemLink:
    """Parts of an item token."""

    name: str
    item_id: str = ""
    color: str = ""
    quality_tag: int | None = None

    @property
    def keys(self) -> tuple[str, ...]:
        """Catalogue keys for this item, most specific first."""
        return tuple(k for k in (self.item_id, self.name) if k)


@dataclass(frozen=True, slots=True)
class ItemInfo:
    quality: int | None
    icon: str | None = None


def parse_item_link(token: str) -> ItemLink | None:
    """Parse an item hyperlink or a bare [Name]. Returns None for anything else."""
    if not token:
        return None
    m = _RE_ITEM_LINK.search(token)
    if m:
        color, tag, item_id, name = m.groups()
        return ItemLink(
            name=name,
            item_id=item_id,
            color=(color or "").lower(),
            quality_tag=int(tag) if tag is not None else None,
        )
    m = _RE_BARE_NAME.match(token.strip())
    if m:
        return ItemLink(name=m.group(1))
    return None


class ItemCatalog:
    """In-memory item metadata, filled as the client reports item info.

    Memory is an LRU OrderedDict keyed by item id or item name.
    Link colours give a quality before the item is described, unless
    infer_from_link is off.
    """

    def __init__(
        self,
        memory_size: int = DEFAULT_MEMORY_SIZE,
        infer_from_link: bool = True,
    ) -> None:
        self._memory_size = memory_size
        self._infer_from_link = infer_from_link
        self._memory: OrderedDict[str, ItemInfo] = OrderedDict()

    def learn(self, item_key: str, quality: int | None, icon: str | None = None) -> None:
        """Store metadata for an item id, item name or full link."""
        link = parse_item_link(item_key)
        keys = link.keys if link else (item_key.strip(),)
        for key in keys:
            if not key:
                continue
            if key in self._memory:
                self._memory.move_to_end(key)
            elif len(self._memory) >= self._memory_size:
                self._memory.popitem(last=False)
            self._memory[key] = ItemInfo(quality=quality, icon=icon)
        logger.debug("Item info learned: %s quality=%s", item_key[:60], quality)

    def _lookup(self, token: str) -> tuple[ItemLink | None, ItemInfo | None]:
        link = parse_item_link(token)
        keys = link.keys if link else (token,)
        for key in keys:
            info = self._memory.get(key)
            if info is not None:
                self._memory.move_to_end(key)
                return link, info
        return link, None

    def quality_for(self, item_token: str) -> int | None:
        """Quality of an item, or None if it is not known yet."""
        link, info = self._lookup(item_token)
        if info is not None and info.quality is not None:
            return info.quality
        if link is None or not self._infer_from_link:
            return None
        if link.quality_tag is not None:
            return link.quality_tag
        quality = _COLOR_QUALITY.get(link.color)
        return int(quality) if quality is not None else None

    def icon_for(self, item_token: str) -> str | None:
        _, info = self._lookup(item_token)
        return info.icon if info is not None else None

    def stats(self) -> dict[str, int]:
        return {
            "memory_entries": len(self._memory),
            "memory_max": self._memory_size,
        }

    def clear(self) -> None:
        self._memory.clear()
