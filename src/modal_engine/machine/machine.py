"""Finite state machine driving the insert/normal modes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from modal_engine.runtime import telemetry

from .states import ActionName, ModeState
from .transitions import TransitionTable, build_default_table


@dataclass(frozen=True, slots=True)
class ActionData:
    element: object
    key: str


@dataclass(frozen=True, slots=True)
class TransitionResult:
    state_changed: bool = False
    action: Optional[ActionName] = None
    action_data: Optional[ActionData] = None


@dataclass(frozen=True, slots=True)
class ModeChange:
    """Notification sent to listeners whenever the state changes."""

    old_state: ModeState
    new_state: ModeState
    result: Optional[TransitionResult] = None

    @property
    def display_name(self) -> str:
        return self.new_state.display_name


ModeListener = Callable[[ModeChange], None]


class ModalStateMachine:
    """Consumes one key at a time and reports transitions and actions.

    The machine never touches a text surface: it hands the element back in
    ``TransitionResult.action_data`` and leaves the action to its caller.
    """

    def __init__(self, table: Optional[TransitionTable] = None) -> None:
        self.table = table or build_default_table()
        self.state = ModeState.INSERT
        self.previous_state: Optional[ModeState] = None
        self._listeners: List[ModeListener] = []
        self.logger = telemetry.get_logger("modal_engine.machine")

    def add_listener(self, callback: ModeListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: ModeListener) -> None:
        self._listeners = [item for item in self._listeners if item != callback]

    def process_input(self, key: str, element: object = None) -> TransitionResult:
        old_state = self.state
        with telemetry.span(
            "machine::process_input",
            component="machine",
            metadata={"key": key, "state": old_state},
        ) as handle:
            transition = self.table.lookup(old_state, key)
            if transition is None:
                handle.add_metadata("transition", "none")
                return TransitionResult()

            self._enter(transition.state)
            result = TransitionResult(
                state_changed=self.state is not old_state,
                action=transition.action,
                action_data=(
                    ActionData(element=element, key=key)
                    if transition.action is not None
                    else None
                ),
            )
            handle.add_metadata("next_state", self.state)
            if result.action is not None:
                handle.add_metadata("action", result.action)

        if result.state_changed:
            self._notify(ModeChange(old_state, self.state, result))
        return result

    def set_state(self, state: ModeState) -> bool:
        """Force ``state``; returns whether anything changed."""

        old_state = self.state
        self._enter(state)
        if self.state is old_state:
            return False
        self._notify(ModeChange(old_state, self.state))
        return True

    def reset(self) -> bool:
        return self.set_state(ModeState.INSERT)

    def is_insert_mode(self) -> bool:
        return self.state is ModeState.INSERT

    def is_normal_mode(self) -> bool:
        return self.state is not ModeState.INSERT

    def is_pending_command(self) -> bool:
        return self.state.is_pending

    def available_keys(self) -> tuple[str, ...]:
        return self.table.keys(self.state)

    def _enter(self, state: ModeState) -> None:
        if state is self.state:
            return
        self.previous_state = self.state
        self.state = state

    def _notify(self, change: ModeChange) -> None:
        telemetry.record_event(
            "mode.change",
            data={"old": change.old_state, "new": change.new_state},
            logger_name="modal_engine.machine",
        )
        for callback in list(self._listeners):
            try:
                callback(change)
            except Exception as exc:
                telemetry.record_event(
                    "mode.listener_error",
                    level="error",
                    data={"listener": repr(callback), "error": str(exc)},
                    logger_name="modal_engine.machine",
                )


__all__ = [
    "ActionData",
    "ModeChange",
    "ModeListener",
    "ModalStateMachine",
    "TransitionResult",
]
