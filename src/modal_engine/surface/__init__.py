"""Text surface abstraction over flat and structured host widgets."""

from .adapter import (
    delete_range,
    get_cursor_offset,
    get_text,
    is_editable,
    resolve_surface,
    set_cursor_offset,
)
from .base import SurfaceKind, TextSurface
from .events import EventBus, InputEvent
from .flat import FlatHost, FlatSurface, TextField
from .structured import Caret, RichTextContainer, StructuredSurface

__all__ = [
    "SurfaceKind",
    "TextSurface",
    "EventBus",
    "InputEvent",
    "FlatHost",
    "FlatSurface",
    "TextField",
    "Caret",
    "RichTextContainer",
    "StructuredSurface",
    "resolve_surface",
    "is_editable",
    "get_text",
    "get_cursor_offset",
    "set_cursor_offset",
    "delete_range",
]
