from __future__ import annotations

import logging
from typing import Iterable

from nscfg.core.config.provider import Settings
from nscfg.core.errors import ErrorKind, expansion_error
from nscfg.core.model import Arm, Modifier

logger = logging.getLogger(__name__)

MODIFIER_ACTIVATE = "+"
MODIFIER_DEACTIVATE = "-"
MODIFIER_PANIC = "@"

MODIFIERS: dict[str, Modifier] = {
    MODIFIER_ACTIVATE: Modifier.ACTIVATE,
    MODIFIER_DEACTIVATE: Modifier.DEACTIVATE,
    MODIFIER_PANIC: Modifier.PANIC_ON_RELEASE,
}

# `-` may appear inside a label, so a word starting with it is rejected when
# the expression is built rather than here.
_GLYPH_ONLY = (MODIFIER_ACTIVATE, MODIFIER_PANIC)


def _outside_quotes(text: str) -> str:
    out: list[str] = []
    quoted = False
    escaped = False
    for ch in text:
        if quoted:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                quoted = False
            continue
        if ch == '"':
            quoted = True
            continue
        out.append(ch)
    return "".join(out)


def split_modifier(condition: str) -> tuple[Modifier, str]:
    """Split a leading modifier glyph off an arm condition."""
    text = condition.strip()
    modifier = Modifier.NONE
    if text and text[0] in MODIFIERS:
        modifier = MODIFIERS[text[0]]
        text = text[1:].strip()
        if text and text[0] in MODIFIERS:
            raise expansion_error(ErrorKind.MODIFIER_NOT_FIRST, condition.strip())

    if any(g in _outside_quotes(text) for g in _GLYPH_ONLY):
        raise expansion_error(ErrorKind.MODIFIER_NOT_FIRST, condition.strip())
    if not text:
        raise expansion_error(ErrorKind.EMPTY_ARM)
    return modifier, text


def apply_release_policy(modifier: Modifier, settings: Settings) -> Modifier:
    """Debug builds keep modifiers; release builds reject or drop them."""
    if modifier is Modifier.NONE or settings.debug:
        return modifier
    if settings.release_behaviour == "ignore":
        logger.debug("dropping %s modifier in release build", modifier.value)
        return Modifier.NONE
    raise expansion_error(ErrorKind.MODIFIER_PANIC_RELEASE)


def check_match_modifiers(arms: Iterable[Arm]) -> None:
    activated = 0
    for arm in arms:
        if arm.modifier is Modifier.ACTIVATE:
            activated += 1
            if activated > 1:
                raise expansion_error(ErrorKind.MATCH_MODIFIER_MORE_THAN_ONE_ACTIVATE)
        if arm.modifier is Modifier.DEACTIVATE and arm.is_wildcard:
            raise expansion_error(ErrorKind.MATCH_DEACTIVATED_WILD_ARM)
