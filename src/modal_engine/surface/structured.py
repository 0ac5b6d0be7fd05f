"""Structured rich-text containers backed by a BeautifulSoup markup tree.

The container's content is a tree of block elements, inline elements, line
breaks and text nodes. To give the engine a flat offset model the tree is
linearized: every ``<br>`` becomes a newline, every block element that has a
following sibling is followed by a newline, and runs of three or more
newlines are collapsed to two. Caret lookups go through the same
linearization so that offsets read back from the caret always agree with the
text.

Deletions are applied to the tree itself: text nodes are trimmed, ``<br>``
tags removed and, where a block boundary falls inside the range, the content
after it is pulled into the block before it. Markup outside the deleted range
is left alone.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from modal_engine.runtime import telemetry

from .base import SurfaceKind, TextSurface
from .events import EventBus, InputEvent

BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "blockquote",
        "div",
        "footer",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "li",
        "p",
        "pre",
        "section",
    }
)


@dataclass(frozen=True, slots=True)
class Caret:
    """DOM-style collapsed selection.

    For a text node ``offset`` counts characters; for an element it counts
    child positions (``offset == i`` sits just before ``contents[i]``).
    """

    node: PageElement
    offset: int

    def same_point(self, other: "Caret") -> bool:
        # bs4 compares tags structurally, position needs identity
        return self.node is other.node and self.offset == other.offset


class RichTextContainer:
    """Editable markup region with a caret and native ``input`` events."""

    def __init__(self, markup: str | Tag = "") -> None:
        self._factory = BeautifulSoup("", "html.parser")
        if isinstance(markup, Tag):
            self.root = markup
        else:
            self.root = self._factory.new_tag("div")
            fragment = BeautifulSoup(markup, "html.parser")
            for child in list(fragment.contents):
                self.root.append(child.extract())
        self.caret = Caret(self.root, 0)
        self.events = EventBus()

    @property
    def markup(self) -> str:
        return self.root.decode_contents()

    def select(self, node: PageElement, offset: int) -> None:
        self.caret = Caret(node, offset)

    def dispatch_event(self, event: InputEvent) -> None:
        self.events.emit(event)

    def __repr__(self) -> str:
        return f"<RichTextContainer markup={self.markup!r}>"


def _is_text(node: PageElement) -> bool:
    return isinstance(node, NavigableString) and not isinstance(
        node, PreformattedString
    )


def _breaks_line(node: PageElement) -> bool:
    return isinstance(node, Tag) and (node.name == "br" or node.name in BLOCK_TAGS)


def collapse_newlines(raw: str) -> Tuple[str, List[int]]:
    """Collapse 3+ newlines to 2, returning the text and a raw->flat index map."""

    kept: List[str] = []
    mapping = [0] * (len(raw) + 1)
    run = 0
    for index, char in enumerate(raw):
        mapping[index] = len(kept)
        if char == "\n":
            run += 1
            if run > 2:
                continue
        else:
            run = 0
        kept.append(char)
    mapping[len(raw)] = len(kept)
    return "".join(kept), mapping


class SegmentKind(str, Enum):
    TEXT = "text"
    BREAK = "break"
    BLOCK_END = "block_end"


@dataclass(frozen=True, slots=True)
class Segment:
    """Raw-text span contributed by one node.

    ``BLOCK_END`` is the newline emitted after ``node``, a block element.
    """

    start: int
    end: int
    node: PageElement
    kind: SegmentKind


class Linearization:
    """Flat text of a container plus every caret position it can hold."""

    def __init__(self, root: Tag) -> None:
        self.root = root
        self._pieces: List[str] = []
        self._length = 0
        self.points: List[Tuple[int, Caret]] = []
        self.segments: List[Segment] = []
        self._walk(root)
        self.raw = "".join(self._pieces)
        self.text, self._raw_to_flat = collapse_newlines(self.raw)

    def _append(self, piece: str, node: PageElement, kind: SegmentKind) -> None:
        start = self._length
        self._pieces.append(piece)
        self._length += len(piece)
        self.segments.append(Segment(start, self._length, node, kind))

    def _walk(self, element: Tag) -> None:
        children: Sequence[PageElement] = list(element.contents)
        for index, child in enumerate(children):
            self.points.append((self._length, Caret(element, index)))
            if _is_text(child):
                data = str(child)
                for column in range(len(data) + 1):
                    self.points.append((self._length + column, Caret(child, column)))
                self._append(data, child, SegmentKind.TEXT)
            elif isinstance(child, Tag):
                if child.name == "br":
                    self._append("\n", child, SegmentKind.BREAK)
                    continue
                self._walk(child)
                if child.name in BLOCK_TAGS and child.next_sibling is not None:
                    self._append("\n", child, SegmentKind.BLOCK_END)
        self.points.append((self._length, Caret(element, len(children))))

    def offset_of(self, caret: Caret) -> int:
        for raw_index, point in self.points:
            if point.same_point(caret):
                return self._raw_to_flat[raw_index]
        if _is_text(caret.node):
            # offset past the node's end: clamp inside the node
            length = len(str(caret.node))
            if caret.offset > length:
                return self.offset_of(Caret(caret.node, length))
        return 0

    def caret_at(self, offset: int) -> Caret:
        offset = max(0, min(offset, len(self.text)))
        raw_index = bisect_right(self._raw_to_flat, offset) - 1
        candidates = [point for index, point in self.points if index == raw_index]
        for point in candidates:
            if _is_text(point.node):
                return point
        return candidates[0] if candidates else Caret(self.root, 0)

    def raw_range(self, start: int, end: int) -> Tuple[int, int]:
        """Raw span covering flat ``[start, end)``, hidden newlines included."""

        raw_start = bisect_left(self._raw_to_flat, start)
        raw_end = bisect_right(self._raw_to_flat, end) - 1
        return raw_start, max(raw_start, raw_end)


def _innermost_last_block(block: Tag) -> Tag:
    target = block
    while target.contents:
        last = target.contents[-1]
        if not (isinstance(last, Tag) and last.name in BLOCK_TAGS):
            break
        target = last
    return target


def _join_following(block: Tag) -> None:
    """Remove the line break after ``block`` by pulling the next line into it."""

    target = _innermost_last_block(block)
    following = block.next_sibling
    if isinstance(following, Tag) and following.name in BLOCK_TAGS:
        for child in list(following.contents):
            target.append(child.extract())
        following.extract()
        return
    while following is not None and not _breaks_line(following):
        upcoming = following.next_sibling
        target.append(following.extract())
        following = upcoming
    if isinstance(following, Tag) and following.name == "br":
        # the block's own boundary now ends this line
        following.extract()


def delete_raw(layout: Linearization, start: int, end: int) -> None:
    """Remove raw ``[start, end)`` from the tree ``layout`` was built from."""

    joins: List[Tag] = []
    for segment in layout.segments:
        if segment.end <= start or segment.start >= end:
            continue
        if segment.kind is SegmentKind.TEXT:
            data = str(segment.node)
            low = max(start, segment.start) - segment.start
            high = min(end, segment.end) - segment.start
            remaining = data[:low] + data[high:]
            if remaining:
                segment.node.replace_with(NavigableString(remaining))
            else:
                segment.node.extract()
        elif segment.kind is SegmentKind.BREAK:
            segment.node.extract()
        elif isinstance(segment.node, Tag):
            joins.append(segment.node)
    for block in reversed(joins):
        _join_following(block)


class StructuredSurface(TextSurface):
    kind = SurfaceKind.STRUCTURED

    host: RichTextContainer

    def linearize(self) -> Linearization:
        return Linearization(self.host.root)

    def get_text(self) -> str:
        return self.linearize().text

    def get_cursor_offset(self) -> int:
        return self.linearize().offset_of(self.host.caret)

    def set_cursor_offset(self, offset: int) -> None:
        caret = self.linearize().caret_at(int(offset))
        self.host.select(caret.node, caret.offset)

    def delete_range(self, start: int, end: int) -> None:
        layout = self.linearize()
        start, end = self.normalize_range(start, end, layout.text)
        if start == end:
            return
        with telemetry.span(
            "surface::delete_range",
            component="surface",
            metadata={"kind": self.kind, "start": start, "end": end},
        ):
            delete_raw(layout, *layout.raw_range(start, end))
            self.host.dispatch_event(
                InputEvent(
                    type="input",
                    input_type="deleteContentBackward",
                    value=self.get_text(),
                )
            )
            self.set_cursor_offset(start)


__all__ = [
    "BLOCK_TAGS",
    "Caret",
    "Linearization",
    "RichTextContainer",
    "Segment",
    "SegmentKind",
    "StructuredSurface",
    "collapse_newlines",
    "delete_raw",
]
