"""Routes raw key presses through the state machine onto text surfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from modal_engine.machine import MOTION_KEYS, ActionName, ModalStateMachine, ModeChange
from modal_engine.runtime import telemetry
from modal_engine.surface import TextSurface, resolve_surface

from .actions import ACTION_HANDLERS, ActionHandler
from .context import HostingContext
from .keys import is_arrow, normalize_key


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of one key press.

    ``handled`` tells the host to suppress its native handling of the key;
    ``performed`` reports whether the action actually changed the surface.
    """

    handled: bool = False
    state_changed: bool = False
    action: Optional[ActionName] = None
    performed: bool = False


class UnknownActionError(RuntimeError):
    """Raised when a transition table names actions with no handler."""

    def __init__(self, actions: Iterable[ActionName]) -> None:
        names = sorted(action.value for action in actions)
        super().__init__(f"No handler registered for actions {names}")
        self.actions = tuple(names)


class InputDispatcher:
    """Owns the key path for one ``HostingContext``."""

    def __init__(
        self,
        context: HostingContext,
        *,
        handlers: Optional[Mapping[ActionName, ActionHandler]] = None,
    ) -> None:
        self.context = context
        self.handlers = dict(ACTION_HANDLERS if handlers is None else handlers)
        missing = context.machine.table.actions() - set(self.handlers)
        if missing:
            raise UnknownActionError(missing)
        self.logger = telemetry.get_logger("modal_engine.dispatch")
        self._dispatching = False
        context.machine.add_listener(self._forward_mode_change)

    @property
    def machine(self) -> ModalStateMachine:
        return self.context.machine

    def handle_key(self, raw_key: str, target: object = None) -> DispatchResult:
        """Process one key press against ``target`` (default: focused widget).

        A key arriving while a previous one is still being applied (for
        example from a listener reacting to the deletion it caused) is passed
        through untouched.
        """

        if self._dispatching:
            telemetry.record_event(
                "dispatch.reentrant",
                data={"key": raw_key, "context": self.context.name},
                logger_name="modal_engine.dispatch",
            )
            return DispatchResult()

        self._dispatching = True
        try:
            key = normalize_key(raw_key)
            if target is None:
                target = self.context.focus()
            with telemetry.span(
                "dispatch::handle_key",
                component="dispatch",
                metadata={"key": key, "context": self.context.name},
            ):
                return self._dispatch(key, target)
        finally:
            self._dispatching = False

    def _dispatch(self, key: str, target: object) -> DispatchResult:
        surface = resolve_surface(target)

        # the machine is not consulted, so a pending operator stays pending
        if surface is not None and is_arrow(key):
            action = MOTION_KEYS[key]
            if self._run(action, surface):
                return DispatchResult(handled=True, action=action, performed=True)

        if not self.context.active or surface is None:
            return DispatchResult()

        result = self.machine.process_input(key, target)
        performed = False
        if result.action is not None:
            performed = self._run(result.action, surface)

        handled = (
            self.machine.is_normal_mode()
            or result.state_changed
            or result.action is not None
        )
        return DispatchResult(
            handled=handled,
            state_changed=result.state_changed,
            action=result.action,
            performed=performed,
        )

    def _run(self, action: ActionName, surface: TextSurface) -> bool:
        handler = self.handlers.get(action)
        if handler is None:
            telemetry.record_event(
                "dispatch.unknown_action",
                level="error",
                data={"action": action},
                logger_name="modal_engine.dispatch",
            )
            return False
        performed = handler(surface)
        telemetry.record_event(
            "dispatch.action",
            data={"action": action, "kind": surface.kind, "performed": performed},
            logger_name="modal_engine.dispatch",
        )
        return performed

    def focus_changed(self, target: object) -> None:
        """Reset to INSERT when focus lands outside any editable surface."""

        if resolve_surface(target) is None:
            self.machine.reset()

    def settings_changed(
        self,
        *,
        enabled: Optional[bool] = None,
        site_match: Optional[bool] = None,
    ) -> None:
        if enabled is not None:
            self.context.enabled = enabled
            if not enabled:
                self.machine.reset()
        if site_match is not None:
            self.context.site_match = site_match

    def teardown(self) -> None:
        self.machine.reset()
        self.machine.remove_listener(self._forward_mode_change)

    def _forward_mode_change(self, change: ModeChange) -> None:
        sink = self.context.on_mode_change
        if sink is not None:
            sink(change)


__all__ = ["DispatchResult", "InputDispatcher", "UnknownActionError"]
