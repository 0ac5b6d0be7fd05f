"""Pure cursor motions and word spans over flat text."""

from .classify import CharacterClass, classify
from .lines import (
    LineInfo,
    MotionResult,
    clamp,
    line_info,
    location_for_offset,
    move_down,
    move_left,
    move_line_end,
    move_line_start,
    move_right,
    move_up,
    offset_for_location,
)
from .word import (
    Span,
    change_word_span,
    delete_word_span,
    move_word_backward,
    move_word_forward,
)

__all__ = [
    "CharacterClass",
    "classify",
    "LineInfo",
    "MotionResult",
    "Span",
    "clamp",
    "line_info",
    "location_for_offset",
    "offset_for_location",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_line_start",
    "move_line_end",
    "move_word_forward",
    "move_word_backward",
    "delete_word_span",
    "change_word_span",
]
