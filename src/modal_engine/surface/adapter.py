"""Kind-agnostic entry points over any host handle.

Each function accepts either a host widget or an already resolved
``TextSurface``. Handles that do not resolve to a surface are treated as
non-editable: readers return empty values and mutators do nothing.
"""

from __future__ import annotations

from typing import Optional

from .base import TextSurface
from .flat import FlatHost, FlatSurface
from .structured import RichTextContainer, StructuredSurface


def resolve_surface(handle: object) -> Optional[TextSurface]:
    if handle is None:
        return None
    if isinstance(handle, TextSurface):
        return handle
    if isinstance(handle, RichTextContainer):
        return StructuredSurface(handle)
    if isinstance(handle, FlatHost):
        return FlatSurface(handle)
    return None


def is_editable(handle: object) -> bool:
    return resolve_surface(handle) is not None


def get_text(handle: object) -> str:
    surface = resolve_surface(handle)
    return surface.get_text() if surface else ""


def get_cursor_offset(handle: object) -> int:
    surface = resolve_surface(handle)
    return surface.get_cursor_offset() if surface else 0


def set_cursor_offset(handle: object, offset: int) -> None:
    surface = resolve_surface(handle)
    if surface:
        surface.set_cursor_offset(offset)


def delete_range(handle: object, start: int, end: int) -> None:
    surface = resolve_surface(handle)
    if surface:
        surface.delete_range(start, end)


__all__ = [
    "resolve_surface",
    "is_editable",
    "get_text",
    "get_cursor_offset",
    "set_cursor_offset",
    "delete_range",
]
