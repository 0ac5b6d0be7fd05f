"""Flat-buffer surfaces: a single string value with native selection offsets."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from modal_engine.runtime import telemetry

from .base import SurfaceKind, TextSurface
from .events import EventBus, InputEvent


@runtime_checkable
class FlatHost(Protocol):
    """What a single-line field or multi-line buffer widget must offer."""

    value: str
    selection_start: int
    selection_end: int

    def set_selection_range(self, start: int, end: int) -> None:
        ...

    def set_range_text(self, replacement: str, start: int, end: int) -> None:
        ...

    def dispatch_event(self, event: InputEvent) -> None:
        ...


class TextField:
    """In-memory flat widget (an ``<input>`` or ``<textarea>`` equivalent).

    ``set_range_text`` mutates silently, exactly like its DOM namesake;
    observers only learn about the edit through ``dispatch_event``.
    """

    def __init__(self, value: str = "", *, multiline: bool = False) -> None:
        self.multiline = multiline
        self.value = value if multiline else value.replace("\n", " ")
        self.selection_start = 0
        self.selection_end = 0
        self.events = EventBus()

    def set_selection_range(self, start: int, end: int) -> None:
        length = len(self.value)
        start = max(0, min(start, length))
        end = max(start, min(end, length))
        self.selection_start = start
        self.selection_end = end

    def set_range_text(self, replacement: str, start: int, end: int) -> None:
        self.value = self.value[:start] + replacement + self.value[end:]
        caret = start + len(replacement)
        self.set_selection_range(caret, caret)

    def dispatch_event(self, event: InputEvent) -> None:
        self.events.emit(event)

    def __repr__(self) -> str:
        kind = "textarea" if self.multiline else "input"
        return f"<TextField {kind} value={self.value!r}>"


class FlatSurface(TextSurface):
    kind = SurfaceKind.FLAT

    host: FlatHost

    def get_text(self) -> str:
        return self.host.value

    def get_cursor_offset(self) -> int:
        return self.clamp(self.host.selection_start)

    def set_cursor_offset(self, offset: int) -> None:
        offset = self.clamp(offset)
        self.host.set_selection_range(offset, offset)

    def delete_range(self, start: int, end: int) -> None:
        text = self.get_text()
        start, end = self.normalize_range(start, end, text)
        if start == end:
            return
        with telemetry.span(
            "surface::delete_range",
            component="surface",
            metadata={"kind": self.kind, "start": start, "end": end},
        ):
            self.host.set_selection_range(start, end)
            self.host.set_range_text("", start, end)
            self.host.dispatch_event(
                InputEvent(
                    type="input",
                    input_type="deleteContentBackward",
                    value=self.host.value,
                )
            )
            self.host.dispatch_event(InputEvent(type="change", value=self.host.value))
            self.set_cursor_offset(start)


__all__ = ["FlatHost", "FlatSurface", "TextField"]
