"""Native change notifications raised by host widgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass(frozen=True, slots=True)
class InputEvent:
    """Payload delivered to ``input``/``change`` subscribers."""

    type: str
    input_type: Optional[str] = None
    value: str = ""


Listener = Callable[[InputEvent], None]


class EventBus:
    """Per-widget subscriber lists, keyed by event type."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Listener) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, payload: InputEvent) -> None:
        for callback in list(self._subscribers.get(payload.type, [])):
            callback(payload)


__all__ = ["EventBus", "InputEvent", "Listener"]
