"""Classifier for CHAT_MSG_LOOT messages."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from loot_history.patterns import Audience, CompiledMatcher, PatternSet

logger = logging.getLogger(__name__)

# Loot message examples (enUS client):
# You receive loot: |cff1eff00|Hitem:2589::::::::60:::::|h[Linen Cloth]|h|rx5.
# You receive item: |cff0070dd|Hitem:19019::::::::60:::::|h[Thunderfury]|h|r.
# Thrall receives loot: |cffa335ee|Hitem:18832::::::::60:::::|h[Brutality Blade]|h|r.


@dataclass(frozen=True, slots=True)
class ObservedMatch:
    """A loot message broken into its fields.

    actor is None for self-loot; the caller fills it from the local identity.
    """

    item_token: str
    quantity: int = 1
    actor: str | None = None
    audience: Audience = Audience.SELF
    source_id: str | None = None

    @property
    def is_self(self) -> bool:
        return self.audience is Audience.SELF


def _parse_quantity(raw: str | None) -> int:
    """Parse a captured quantity, falling back to 1."""
    if raw is None:
        return 1
    try:
        quantity = int(raw)
    except ValueError:
        return 1
    return quantity if quantity >= 1 else 1


def _match_self(
    message: str, matchers: tuple[CompiledMatcher, ...]
) -> tuple[str, int] | None:
    """Match self-loot patterns (no player name capture)."""
    for info in matchers:
        m = info.pattern.search(message)
        if not m:
            continue
        if info.has_quantity:
            return m.group(1), _parse_quantity(m.group(2))
        return m.group(1), 1
    return None


def _match_other(
    message: str, matchers: tuple[CompiledMatcher, ...]
) -> tuple[str, str, int] | None:
    """Match other-player patterns (player name capture first)."""
    for info in matchers:
        m = info.pattern.search(message)
        if not m:
            continue
        if info.has_quantity:
            return m.group(1), m.group(2), _parse_quantity(m.group(3))
        return m.group(1), m.group(2), 1
    return None


def classify_message(
    message: str,
    patterns: PatternSet,
    source_id: str | None = None,
) -> ObservedMatch | None:
    """Classify one loot message.

    Self patterns are tried first, in precedence order; other-player patterns
    only when none of them match. The first matching pattern wins.
    Returns None if the message is not an item pickup.
    """
    if not message:
        return None

    hit = _match_self(message, patterns.self_matchers)
    if hit is not None:
        item_token, quantity = hit
        return ObservedMatch(
            item_token=item_token,
            quantity=quantity,
            audience=Audience.SELF,
            source_id=source_id,
        )

    other = _match_other(message, patterns.other_matchers)
    if other is not None:
        actor, item_token, quantity = other
        return ObservedMatch(
            item_token=item_token,
            quantity=quantity,
            actor=actor,
            audience=Audience.OTHER,
            source_id=source_id,
        )

    logger.debug("Not a loot message: %s", message[:120])
    return None
