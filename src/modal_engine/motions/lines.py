"""Line bookkeeping and character/line motions over flat text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class MotionResult:
    """Outcome of a motion: the target offset and whether it differs."""

    offset: int
    moved: bool


@dataclass(frozen=True, slots=True)
class LineInfo:
    lines: Tuple[str, ...]
    line_index: int
    line_start: int

    @property
    def line(self) -> str:
        return self.lines[self.line_index]

    @property
    def line_end(self) -> int:
        return self.line_start + len(self.line)


def clamp(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))


def _result(origin: int, target: int) -> MotionResult:
    return MotionResult(offset=target, moved=target != origin)


def line_info(text: str, offset: int) -> LineInfo:
    """Locate the line holding ``offset``.

    An offset sitting exactly on a newline belongs to the line the newline
    terminates, so ``line_start <= offset <= line_end`` always holds.
    """

    offset = clamp(text, offset)
    lines = tuple(text.split("\n"))
    line_start = 0
    for index, line in enumerate(lines[:-1]):
        if offset <= line_start + len(line):
            return LineInfo(lines=lines, line_index=index, line_start=line_start)
        line_start += len(line) + 1
    return LineInfo(lines=lines, line_index=len(lines) - 1, line_start=line_start)


def location_for_offset(text: str, offset: int) -> Tuple[int, int]:
    """Convert a flat offset into a ``(row, column)`` location."""

    info = line_info(text, offset)
    return (info.line_index, clamp(text, offset) - info.line_start)


def offset_for_location(text: str, location: Tuple[int, int]) -> int:
    """Convert ``(row, column)`` back into a flat offset, clamping both parts."""

    lines = text.split("\n")
    row = max(0, min(location[0], len(lines) - 1))
    offset = sum(len(line) + 1 for line in lines[:row])
    return offset + max(0, min(location[1], len(lines[row])))


def move_left(text: str, offset: int) -> MotionResult:
    origin = clamp(text, offset)
    return _result(origin, max(0, origin - 1))


def move_right(text: str, offset: int) -> MotionResult:
    origin = clamp(text, offset)
    return _result(origin, min(len(text), origin + 1))


def move_up(text: str, offset: int) -> MotionResult:
    origin = clamp(text, offset)
    info = line_info(text, origin)
    if info.line_index == 0:
        return _result(origin, origin)
    column = origin - info.line_start
    previous = info.lines[info.line_index - 1]
    previous_start = info.line_start - len(previous) - 1
    return _result(origin, previous_start + min(column, len(previous)))


def move_down(text: str, offset: int) -> MotionResult:
    origin = clamp(text, offset)
    info = line_info(text, origin)
    if info.line_index >= len(info.lines) - 1:
        return _result(origin, origin)
    column = origin - info.line_start
    following = info.lines[info.line_index + 1]
    following_start = info.line_end + 1
    return _result(origin, following_start + min(column, len(following)))


def move_line_start(text: str, offset: int) -> MotionResult:
    origin = clamp(text, offset)
    return _result(origin, line_info(text, origin).line_start)


def move_line_end(text: str, offset: int) -> MotionResult:
    origin = clamp(text, offset)
    return _result(origin, line_info(text, origin).line_end)


__all__ = [
    "LineInfo",
    "MotionResult",
    "clamp",
    "line_info",
    "location_for_offset",
    "offset_for_location",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_line_start",
    "move_line_end",
]
