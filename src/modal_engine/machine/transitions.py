"""Declarative transition table for the modal state machine.

Each state maps key tokens to a tagged transition. ``GotoState`` only moves
to another state; ``GotoStateWithAction`` also names an action for the
dispatcher to run. A state's ``default`` transition applies to every key
without an explicit entry; a state without one ignores unknown keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from .states import ActionName, ModeState

ESCAPE = "Escape"

MOTION_KEYS: Mapping[str, ActionName] = {
    "h": ActionName.MOVE_LEFT,
    "j": ActionName.MOVE_DOWN,
    "k": ActionName.MOVE_UP,
    "l": ActionName.MOVE_RIGHT,
    "w": ActionName.MOVE_WORD_FORWARD,
    "b": ActionName.MOVE_WORD_BACKWARD,
    "arrowleft": ActionName.MOVE_LEFT,
    "arrowdown": ActionName.MOVE_DOWN,
    "arrowup": ActionName.MOVE_UP,
    "arrowright": ActionName.MOVE_RIGHT,
}


@dataclass(frozen=True, slots=True)
class GotoState:
    state: ModeState

    @property
    def action(self) -> Optional[ActionName]:
        return None


@dataclass(frozen=True, slots=True)
class GotoStateWithAction:
    state: ModeState
    action: ActionName


Transition = Union[GotoState, GotoStateWithAction]


class TransitionConflictError(RuntimeError):
    """Raised when a key is registered twice for the same state."""

    def __init__(self, state: ModeState, key: str, existing: Transition) -> None:
        super().__init__(
            f"Key '{key}' in state {state.value} already maps to {existing!r}"
        )
        self.state = state
        self.key = key
        self.existing = existing


@dataclass(slots=True)
class StateRow:
    keys: Dict[str, Transition] = field(default_factory=dict)
    default: Optional[Transition] = None


class TransitionTable:
    """Per-state key -> transition lookup."""

    def __init__(self) -> None:
        self._rows: Dict[ModeState, StateRow] = {state: StateRow() for state in ModeState}

    def register(
        self,
        state: ModeState,
        key: str,
        transition: Transition,
        *,
        replace: bool = False,
    ) -> None:
        row = self._rows[state]
        existing = row.keys.get(key)
        if existing is not None and not replace:
            raise TransitionConflictError(state, key, existing)
        row.keys[key] = transition

    def set_default(self, state: ModeState, transition: Optional[Transition]) -> None:
        self._rows[state].default = transition

    def lookup(self, state: ModeState, key: str) -> Optional[Transition]:
        row = self._rows[state]
        return row.keys.get(key, row.default)

    def keys(self, state: ModeState) -> Tuple[str, ...]:
        return tuple(self._rows[state].keys)

    def transitions(self) -> Iterator[Tuple[ModeState, Optional[str], Transition]]:
        """Yield ``(state, key, transition)``; ``key`` is ``None`` for defaults."""

        for state, row in self._rows.items():
            for key, transition in row.keys.items():
                yield state, key, transition
            if row.default is not None:
                yield state, None, row.default

    def actions(self) -> frozenset[ActionName]:
        return frozenset(
            transition.action
            for _state, _key, transition in self.transitions()
            if transition.action is not None
        )


def _register_all(
    table: TransitionTable,
    state: ModeState,
    entries: Iterable[Tuple[str, Transition]],
) -> None:
    for key, transition in entries:
        table.register(state, key, transition)


def build_default_table() -> TransitionTable:
    """INSERT/NORMAL plus the ``d``/``c`` pending states.

    In the pending states only ``w`` completes the command; every other key,
    ``Escape`` included, cancels back to NORMAL with no action.
    """

    table = TransitionTable()

    table.register(ModeState.INSERT, ESCAPE, GotoState(ModeState.NORMAL))

    _register_all(
        table,
        ModeState.NORMAL,
        [
            ("i", GotoState(ModeState.INSERT)),
            ("d", GotoState(ModeState.PENDING_DELETE)),
            ("c", GotoState(ModeState.PENDING_CHANGE)),
        ],
    )
    _register_all(
        table,
        ModeState.NORMAL,
        (
            (key, GotoStateWithAction(ModeState.NORMAL, action))
            for key, action in MOTION_KEYS.items()
        ),
    )

    table.register(
        ModeState.PENDING_DELETE,
        "w",
        GotoStateWithAction(ModeState.NORMAL, ActionName.DELETE_WORD_SPAN),
    )
    table.register(ModeState.PENDING_DELETE, ESCAPE, GotoState(ModeState.NORMAL))
    table.set_default(ModeState.PENDING_DELETE, GotoState(ModeState.NORMAL))

    table.register(
        ModeState.PENDING_CHANGE,
        "w",
        GotoStateWithAction(ModeState.INSERT, ActionName.CHANGE_WORD_SPAN),
    )
    table.register(ModeState.PENDING_CHANGE, ESCAPE, GotoState(ModeState.NORMAL))
    table.set_default(ModeState.PENDING_CHANGE, GotoState(ModeState.NORMAL))

    return table


__all__ = [
    "ESCAPE",
    "MOTION_KEYS",
    "GotoState",
    "GotoStateWithAction",
    "StateRow",
    "Transition",
    "TransitionConflictError",
    "TransitionTable",
    "build_default_table",
]
