"""Handlers executing each ``ActionName`` against a text surface."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from modal_engine import motions
from modal_engine.machine import ActionName
from modal_engine.motions import MotionResult, Span
from modal_engine.surface import TextSurface

ActionHandler = Callable[[TextSurface], bool]


def _motion(func: Callable[[str, int], MotionResult]) -> ActionHandler:
    def run(surface: TextSurface) -> bool:
        result = func(surface.get_text(), surface.get_cursor_offset())
        if result.moved:
            surface.set_cursor_offset(result.offset)
        return result.moved

    run.__name__ = func.__name__
    return run


def _deletion(func: Callable[[str, int], Optional[Span]]) -> ActionHandler:
    def run(surface: TextSurface) -> bool:
        span = func(surface.get_text(), surface.get_cursor_offset())
        if span is None:
            return False
        surface.delete_range(*span)
        return True

    run.__name__ = func.__name__
    return run


ACTION_HANDLERS: Dict[ActionName, ActionHandler] = {
    ActionName.MOVE_LEFT: _motion(motions.move_left),
    ActionName.MOVE_RIGHT: _motion(motions.move_right),
    ActionName.MOVE_UP: _motion(motions.move_up),
    ActionName.MOVE_DOWN: _motion(motions.move_down),
    ActionName.MOVE_WORD_FORWARD: _motion(motions.move_word_forward),
    ActionName.MOVE_WORD_BACKWARD: _motion(motions.move_word_backward),
    ActionName.DELETE_WORD_SPAN: _deletion(motions.delete_word_span),
    ActionName.CHANGE_WORD_SPAN: _deletion(motions.change_word_span),
}


__all__ = ["ACTION_HANDLERS", "ActionHandler"]
