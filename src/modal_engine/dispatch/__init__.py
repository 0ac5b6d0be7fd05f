"""Key dispatch from host events into the modal engine."""

from .actions import ACTION_HANDLERS, ActionHandler
from .context import HostingContext
from .dispatcher import DispatchResult, InputDispatcher, UnknownActionError
from .keys import ARROW_KEYS, is_arrow, normalize_key

__all__ = [
    "ACTION_HANDLERS",
    "ARROW_KEYS",
    "ActionHandler",
    "DispatchResult",
    "HostingContext",
    "InputDispatcher",
    "UnknownActionError",
    "is_arrow",
    "normalize_key",
]
