"""Bridge between Textual key events and an ``InputDispatcher``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from modal_engine.dispatch import DispatchResult, InputDispatcher
from modal_engine.machine import ModeChange, ModeState


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to refresh Textual widgets."""

    update_mode: Callable[[ModeState], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualModalAdapter:
    """Feeds key presses to the dispatcher and mirrors mode changes to the UI."""

    def __init__(self, dispatcher: InputDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        self._downstream = dispatcher.context.on_mode_change
        dispatcher.context.on_mode_change = self._on_mode_change
        self.hooks.update_mode(dispatcher.machine.state)

    def handle_textual_key(
        self, key: str, *, target: Optional[object] = None
    ) -> DispatchResult:
        """Dispatch ``key``; the caller suppresses Textual's handling if ``handled``."""

        self._log_state("key ->", key=key)
        result = self.dispatcher.handle_key(key, target)
        if result.action is not None:
            status = f"{result.action.value}:{'ok' if result.performed else 'noop'}"
            self.hooks.update_status(status)
        self._log_state(
            "result <-",
            handled=result.handled,
            state_changed=result.state_changed,
            action=result.action.value if result.action else None,
        )
        return result

    def focus_changed(self, target: Optional[object]) -> None:
        self.dispatcher.focus_changed(target)

    def _on_mode_change(self, change: ModeChange) -> None:
        self._log_state(
            "mode ->", old=change.old_state.value, new=change.new_state.value
        )
        self.hooks.update_mode(change.new_state)
        if self._downstream is not None:
            self._downstream(change)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        context = self.dispatcher.context
        return {
            "context": context.name,
            "mode": context.machine.state.value,
            "active": context.active,
        }


__all__ = ["TextualModalAdapter", "TextualUIHooks"]
