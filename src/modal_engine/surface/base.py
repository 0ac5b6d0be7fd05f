"""Common contract every text surface strategy implements."""

from __future__ import annotations

from enum import Enum


class SurfaceKind(str, Enum):
    FLAT = "flat"
    STRUCTURED = "structured"


class TextSurface:
    """Linear text + single cursor view over one host editable region.

    Strategies translate between the integer offset model and whatever
    addressing the host uses. Offsets handed to the mutators are clamped to
    ``[0, len(text)]`` rather than rejected.
    """

    kind: SurfaceKind

    def __init__(self, host: object) -> None:
        self.host = host

    def get_text(self) -> str:  # pragma: no cover - abstract override
        raise NotImplementedError

    def get_cursor_offset(self) -> int:  # pragma: no cover - abstract override
        raise NotImplementedError

    def set_cursor_offset(self, offset: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def delete_range(self, start: int, end: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def clamp(self, offset: int, text: str | None = None) -> int:
        length = len(self.get_text() if text is None else text)
        return max(0, min(int(offset), length))

    def normalize_range(self, start: int, end: int, text: str) -> tuple[int, int]:
        start = self.clamp(start, text)
        end = self.clamp(end, text)
        if start > end:
            start, end = end, start
        return start, end

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind.value} host={self.host!r}>"


__all__ = ["SurfaceKind", "TextSurface"]
