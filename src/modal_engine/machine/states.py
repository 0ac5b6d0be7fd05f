"""Mode states and the closed set of actions the machine can emit."""

from __future__ import annotations

from enum import Enum


class ModeState(str, Enum):
    INSERT = "INSERT"
    NORMAL = "NORMAL"
    PENDING_DELETE = "PENDING_DELETE"
    PENDING_CHANGE = "PENDING_CHANGE"

    @property
    def mode_name(self) -> str:
        """Coarse mode shown to users: ``insert`` or ``normal``."""

        return "insert" if self is ModeState.INSERT else "normal"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_pending(self) -> bool:
        return self in (ModeState.PENDING_DELETE, ModeState.PENDING_CHANGE)


_DISPLAY_NAMES = {
    ModeState.INSERT: "INSERT",
    ModeState.NORMAL: "NORMAL",
    ModeState.PENDING_DELETE: "DELETE",
    ModeState.PENDING_CHANGE: "CHANGE",
}


class ActionName(str, Enum):
    MOVE_LEFT = "moveLeft"
    MOVE_RIGHT = "moveRight"
    MOVE_UP = "moveUp"
    MOVE_DOWN = "moveDown"
    MOVE_WORD_FORWARD = "moveWordForward"
    MOVE_WORD_BACKWARD = "moveWordBackward"
    DELETE_WORD_SPAN = "deleteWordSpan"
    CHANGE_WORD_SPAN = "changeWordSpan"


__all__ = ["ActionName", "ModeState"]
