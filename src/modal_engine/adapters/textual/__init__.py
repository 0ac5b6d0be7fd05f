"""Textual host adapter for the modal engine."""

from .controller import TextualModalAdapter, TextualUIHooks
from .hosts import TextAreaHost, TextualInputHost

__all__ = [
    "TextAreaHost",
    "TextualInputHost",
    "TextualModalAdapter",
    "TextualUIHooks",
]
