"""Character classes used by word motions."""

from __future__ import annotations

from enum import Enum


class CharacterClass(str, Enum):
    WORD = "word"
    PUNCTUATION = "punctuation"
    WHITESPACE = "whitespace"


def classify(char: str) -> CharacterClass:
    """Return the class of a single character.

    Alphanumerics and ``_`` are ``WORD``, anything ``str.isspace`` accepts is
    ``WHITESPACE`` and every other character is ``PUNCTUATION``.
    """

    if char.isalnum() or char == "_":
        return CharacterClass.WORD
    if char.isspace():
        return CharacterClass.WHITESPACE
    return CharacterClass.PUNCTUATION


def run_end(text: str, start: int, char_class: CharacterClass) -> int:
    """First offset at or after ``start`` whose character is not ``char_class``."""

    pos = start
    while pos < len(text) and classify(text[pos]) is char_class:
        pos += 1
    return pos


def run_start(text: str, end: int, char_class: CharacterClass) -> int:
    """Lowest offset ``p <= end`` such that ``text[p:end]`` is all ``char_class``."""

    pos = end
    while pos > 0 and classify(text[pos - 1]) is char_class:
        pos -= 1
    return pos


__all__ = [
    "CharacterClass",
    "classify",
    "run_end",
    "run_start",
]
