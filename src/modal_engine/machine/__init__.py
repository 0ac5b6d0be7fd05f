"""Modal state machine, its states, and the declarative transition table."""

from .machine import (
    ActionData,
    ModalStateMachine,
    ModeChange,
    ModeListener,
    TransitionResult,
)
from .states import ActionName, ModeState
from .transitions import (
    ESCAPE,
    MOTION_KEYS,
    GotoState,
    GotoStateWithAction,
    Transition,
    TransitionConflictError,
    TransitionTable,
    build_default_table,
)

__all__ = [
    "ActionData",
    "ActionName",
    "ModalStateMachine",
    "ModeChange",
    "ModeListener",
    "ModeState",
    "TransitionResult",
    "ESCAPE",
    "MOTION_KEYS",
    "GotoState",
    "GotoStateWithAction",
    "Transition",
    "TransitionConflictError",
    "TransitionTable",
    "build_default_table",
]
