"""Translate host key names into the engine's key vocabulary."""

from __future__ import annotations

from modal_engine.machine.transitions import ESCAPE

ARROW_KEYS = frozenset({"arrowleft", "arrowright", "arrowup", "arrowdown"})

_ALIASES = {
    "escape": ESCAPE,
    "esc": ESCAPE,
    "<esc>": ESCAPE,
    "left": "arrowleft",
    "right": "arrowright",
    "up": "arrowup",
    "down": "arrowdown",
}


def normalize_key(raw: str) -> str:
    """``Escape`` keeps its casing, everything else is lower-cased.

    Accepts browser-style names (``ArrowLeft``) as well as Textual's
    (``left``, ``escape``).
    """

    lowered = raw.lower()
    return _ALIASES.get(lowered, lowered)


def is_arrow(key: str) -> bool:
    return key in ARROW_KEYS


__all__ = ["ARROW_KEYS", "is_arrow", "normalize_key"]
