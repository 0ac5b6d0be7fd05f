"""Flat-host wrappers around Textual's ``Input`` and ``TextArea`` widgets.

Edits go through the widgets' own mutation APIs, so Textual posts its usual
``Changed`` messages; ``dispatch_event`` additionally relays the engine's
notification to anything subscribed on ``events``.
"""

from __future__ import annotations

from textual.widgets import Input, TextArea
from textual.widgets.text_area import Selection

from modal_engine.motions import location_for_offset, offset_for_location
from modal_engine.surface import EventBus, InputEvent


class TextualInputHost:
    """Single-line host backed by ``textual.widgets.Input``."""

    def __init__(self, widget: Input) -> None:
        self.widget = widget
        self.events = EventBus()

    @property
    def value(self) -> str:
        return self.widget.value

    @property
    def selection_start(self) -> int:
        return self.widget.cursor_position

    @property
    def selection_end(self) -> int:
        return self.widget.cursor_position

    def set_selection_range(self, start: int, end: int) -> None:
        """Collapse the range onto ``end``.

        ``Input`` exposes a single ``cursor_position``, so only the caret end
        of a range is kept. Deletions do not depend on the selection: they go
        through ``set_range_text`` with explicit bounds.
        """

        if start > end:
            start, end = end, start
        self.widget.cursor_position = max(0, min(end, len(self.widget.value)))

    def set_range_text(self, replacement: str, start: int, end: int) -> None:
        value = self.widget.value
        self.widget.value = value[:start] + replacement + value[end:]
        self.widget.cursor_position = start + len(replacement)

    def dispatch_event(self, event: InputEvent) -> None:
        self.events.emit(event)


class TextAreaHost:
    """Multi-line host backed by ``textual.widgets.TextArea``."""

    def __init__(self, widget: TextArea) -> None:
        self.widget = widget
        self.events = EventBus()

    @property
    def value(self) -> str:
        return self.widget.text

    @property
    def selection_start(self) -> int:
        start = min(self.widget.selection.start, self.widget.selection.end)
        return offset_for_location(self.widget.text, start)

    @property
    def selection_end(self) -> int:
        end = max(self.widget.selection.start, self.widget.selection.end)
        return offset_for_location(self.widget.text, end)

    def set_selection_range(self, start: int, end: int) -> None:
        text = self.widget.text
        self.widget.selection = Selection(
            location_for_offset(text, start), location_for_offset(text, end)
        )

    def set_range_text(self, replacement: str, start: int, end: int) -> None:
        text = self.widget.text
        self.widget.replace(
            replacement,
            location_for_offset(text, start),
            location_for_offset(text, end),
        )

    def dispatch_event(self, event: InputEvent) -> None:
        self.events.emit(event)


__all__ = ["TextAreaHost", "TextualInputHost"]
