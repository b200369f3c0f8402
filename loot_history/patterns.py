"""Compile loot GlobalString templates into regex matchers.

%s -> (.+) for player/item captures, %d -> (\\d+) for quantity.
Every other template character is matched literally.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from loot_history.templates import OTHER_ROLES, QUANTITY_ROLES, SELF_ROLES

logger = logging.getLogger(__name__)

# Placeholders as they look after re.escape()
_TEXT_PLACEHOLDER = re.escape("%s")
_NUMBER_PLACEHOLDER = re.escape("%d")

_TEXT_CAPTURE = r"(.+)"
_NUMBER_CAPTURE = r"(\d+)"


class Audience(Enum):
    SELF = "self"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """A compiled loot template."""

    pattern: re.Pattern[str]
    audience: Audience
    has_quantity: bool
    role: str = ""


@dataclass(frozen=True, slots=True)
class PatternSet:
    """Self and other-player matchers, each in match precedence order."""

    self_matchers: tuple[CompiledMatcher, ...]
    other_matchers: tuple[CompiledMatcher, ...]

    def __len__(self) -> int:
        return len(self.self_matchers) + len(self.other_matchers)


def build_pattern(template: str | None) -> re.Pattern[str] | None:
    """Turn one format string into a regex. Returns None for a missing template."""
    if not template:
        return None
    pattern = re.escape(template)
    pattern = pattern.replace(_TEXT_PLACEHOLDER, _TEXT_CAPTURE)
    pattern = pattern.replace(_NUMBER_PLACEHOLDER, _NUMBER_CAPTURE)
    return re.compile(pattern)


def _compile_roles(
    templates: Mapping[str, str | None],
    roles: tuple[str, ...],
    audience: Audience,
) -> tuple[CompiledMatcher, ...]:
    matchers: list[CompiledMatcher] = []
    for role in roles:
        pattern = build_pattern(templates.get(role))
        if pattern is None:
            logger.debug("No template for %s, skipping", role)
            continue
        matchers.append(CompiledMatcher(
            pattern=pattern,
            audience=audience,
            has_quantity=role in QUANTITY_ROLES,
            role=role,
        ))
    return tuple(matchers)


def compile_patterns(templates: Mapping[str, str | None]) -> PatternSet:
    """Compile a role -> template mapping into a PatternSet.

    Roles absent from the mapping, or mapped to None/empty, are skipped.
    """
    patterns = PatternSet(
        self_matchers=_compile_roles(templates, SELF_ROLES, Audience.SELF),
        other_matchers=_compile_roles(templates, OTHER_ROLES, Audience.OTHER),
    )
    logger.debug(
        "Compiled %d self / %d other loot patterns",
        len(patterns.self_matchers), len(patterns.other_matchers),
    )
    return patterns
