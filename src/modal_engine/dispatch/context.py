"""Per-document hosting context owned by whatever embeds the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from modal_engine.config import EngineSettings
from modal_engine.machine import ModalStateMachine, ModeChange


def _nothing_focused() -> Optional[object]:
    return None


@dataclass
class HostingContext:
    """Everything one document needs: switches, focus lookup, its own machine.

    ``focus`` returns the currently focused host widget (or ``None``);
    ``on_mode_change`` is the presentation sink fired on every state change.
    """

    enabled: bool = True
    site_match: bool = False
    focus: Callable[[], Optional[object]] = _nothing_focused
    on_mode_change: Optional[Callable[[ModeChange], None]] = None
    machine: ModalStateMachine = field(default_factory=ModalStateMachine)
    name: str = "default"

    @property
    def active(self) -> bool:
        return self.enabled and self.site_match

    @classmethod
    def from_settings(
        cls, settings: EngineSettings, *, url: str, **kwargs: Any
    ) -> "HostingContext":
        return cls(
            enabled=settings.enabled,
            site_match=settings.matches(url),
            **kwargs,
        )


__all__ = ["HostingContext"]
