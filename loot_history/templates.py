"""Localized loot GlobalStrings — the format strings the client uses for CHAT_MSG_LOOT."""

from __future__ import annotations

# Template roles, in match precedence order within each audience:
# multi before single, primary (looted) before pushed (received).
SELF_ROLES: tuple[str, ...] = (
    "LOOT_ITEM_SELF_MULTIPLE",
    "LOOT_ITEM_SELF",
    "LOOT_ITEM_PUSHED_SELF_MULTIPLE",
    "LOOT_ITEM_PUSHED_SELF",
)
OTHER_ROLES: tuple[str, ...] = (
    "LOOT_ITEM_MULTIPLE",
    "LOOT_ITEM",
    "LOOT_ITEM_PUSHED_MULTIPLE",
    "LOOT_ITEM_PUSHED",
)
ALL_ROLES: tuple[str, ...] = SELF_ROLES + OTHER_ROLES

# Roles carrying a %d quantity placeholder
QUANTITY_ROLES = frozenset({
    "LOOT_ITEM_SELF_MULTIPLE",
    "LOOT_ITEM_PUSHED_SELF_MULTIPLE",
    "LOOT_ITEM_MULTIPLE",
    "LOOT_ITEM_PUSHED_MULTIPLE",
})

# GlobalStrings keyed by client locale
_TEMPLATES: dict[str, dict[str, str]] = {
    "enUS": {
        "LOOT_ITEM_SELF_MULTIPLE": "You receive loot: %sx%d.",
        "LOOT_ITEM_SELF": "You receive loot: %s.",
        "LOOT_ITEM_PUSHED_SELF_MULTIPLE": "You receive item: %sx%d.",
        "LOOT_ITEM_PUSHED_SELF": "You receive item: %s.",
        "LOOT_ITEM_MULTIPLE": "%s receives loot: %sx%d.",
        "LOOT_ITEM": "%s receives loot: %s.",
        "LOOT_ITEM_PUSHED_MULTIPLE": "%s receives item: %sx%d.",
        "LOOT_ITEM_PUSHED": "%s receives item: %s.",
    },
    # Classic-era clients ship no multi-quantity pushed variants
    "enUS_classic": {
        "LOOT_ITEM_SELF_MULTIPLE": "You receive loot: %sx%d.",
        "LOOT_ITEM_SELF": "You receive loot: %s.",
        "LOOT_ITEM_PUSHED_SELF": "You receive item: %s.",
        "LOOT_ITEM_MULTIPLE": "%s receives loot: %sx%d.",
        "LOOT_ITEM": "%s receives loot: %s.",
        "LOOT_ITEM_PUSHED": "%s receives item: %s.",
    },
    "ruRU": {
        "LOOT_ITEM_SELF_MULTIPLE": "Ваша добыча: %sx%d.",
        "LOOT_ITEM_SELF": "Ваша добыча: %s.",
        "LOOT_ITEM_PUSHED_SELF_MULTIPLE": "Вы получаете предмет: %sx%d.",
        "LOOT_ITEM_PUSHED_SELF": "Вы получаете предмет: %s.",
        "LOOT_ITEM_MULTIPLE": "%s получает добычу: %sx%d.",
        "LOOT_ITEM": "%s получает добычу: %s.",
        "LOOT_ITEM_PUSHED_MULTIPLE": "%s получает предмет: %sx%d.",
        "LOOT_ITEM_PUSHED": "%s получает предмет: %s.",
    },
    "deDE": {
        "LOOT_ITEM_SELF_MULTIPLE": "Ihr erhaltet Beute: %sx%d.",
        "LOOT_ITEM_SELF": "Ihr erhaltet Beute: %s.",
        "LOOT_ITEM_PUSHED_SELF_MULTIPLE": "Ihr erhaltet einen Gegenstand: %sx%d.",
        "LOOT_ITEM_PUSHED_SELF": "Ihr erhaltet einen Gegenstand: %s.",
        "LOOT_ITEM_MULTIPLE": "%s bekommt Beute: %sx%d.",
        "LOOT_ITEM": "%s bekommt Beute: %s.",
        "LOOT_ITEM_PUSHED_MULTIPLE": "%s erhält einen Gegenstand: %sx%d.",
        "LOOT_ITEM_PUSHED": "%s erhält einen Gegenstand: %s.",
    },
}

DEFAULT_LOCALE = "enUS"

# Client locale options
LOCALES = {
    "enUS": "English",
    "enUS_classic": "English (Classic)",
    "ruRU": "Русский",
    "deDE": "Deutsch",
}


def get_templates(locale: str = DEFAULT_LOCALE) -> dict[str, str | None]:
    """Return every loot role mapped to its template for a locale.

    Roles the locale does not define map to None. Unknown locales fall back
    to enUS.
    """
    strings = _TEMPLATES.get(locale, _TEMPLATES[DEFAULT_LOCALE])
    return {role: strings.get(role) for role in ALL_ROLES}
