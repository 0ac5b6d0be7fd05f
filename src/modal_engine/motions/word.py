"""Word motions and the spans removed by ``dw`` and ``cw``."""

from __future__ import annotations

from typing import Optional, Tuple

from .classify import CharacterClass, classify, run_end, run_start
from .lines import MotionResult, clamp

Span = Tuple[int, int]


def move_word_forward(text: str, offset: int) -> MotionResult:
    """Jump to the start of the next non-whitespace run."""

    origin = clamp(text, offset)
    if origin >= len(text):
        return MotionResult(offset=origin, moved=False)
    pos = run_end(text, origin, classify(text[origin]))
    pos = run_end(text, pos, CharacterClass.WHITESPACE)
    return MotionResult(offset=pos, moved=pos != origin)


def move_word_backward(text: str, offset: int) -> MotionResult:
    """Jump to the start of the previous run.

    Word and punctuation runs are distinct, so moving back from inside
    ``bar`` in ``foo.bar`` stops at ``b`` rather than crossing the dot.
    """

    origin = clamp(text, offset)
    if origin == 0:
        return MotionResult(offset=0, moved=False)
    pos = origin - 1
    while pos > 0 and classify(text[pos]) is CharacterClass.WHITESPACE:
        pos -= 1
    pos = run_start(text, pos, classify(text[pos]))
    return MotionResult(offset=pos, moved=pos != origin)


def _target_run_end(text: str, offset: int) -> int:
    char_class = classify(text[offset])
    if char_class is CharacterClass.WHITESPACE:
        pos = run_end(text, offset, CharacterClass.WHITESPACE)
        if pos >= len(text):
            return pos
        return run_end(text, pos, classify(text[pos]))
    return run_end(text, offset, char_class)


def delete_word_span(text: str, offset: int) -> Optional[Span]:
    """Range removed by ``dw``: the target run plus trailing whitespace."""

    if offset < 0 or offset >= len(text):
        return None
    end = run_end(text, _target_run_end(text, offset), CharacterClass.WHITESPACE)
    return (offset, end) if end > offset else None


def change_word_span(text: str, offset: int) -> Optional[Span]:
    """Range removed by ``cw``: the target run only."""

    if offset < 0 or offset >= len(text):
        return None
    end = _target_run_end(text, offset)
    return (offset, end) if end > offset else None


__all__ = [
    "Span",
    "move_word_forward",
    "move_word_backward",
    "delete_word_span",
    "change_word_span",
]
