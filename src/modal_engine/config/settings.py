"""User-facing engine settings sourced from the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from modal_engine.runtime.telemetry import env_flag, env_value

from .sites import DEFAULT_SITES, url_matches_sites


def _parse_sites(raw: Optional[str]) -> Tuple[str, ...]:
    if raw is None:
        return DEFAULT_SITES
    sites = tuple(part.strip() for part in raw.split(",") if part.strip())
    return sites or DEFAULT_SITES


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Snapshot of the switches the hosting layer owns.

    An empty site list falls back to ``DEFAULT_SITES``, mirroring the
    first-run seeding of the allow-list.
    """

    enabled: bool = True
    sites: Tuple[str, ...] = field(default=DEFAULT_SITES)
    colored_indicator: bool = True
    colored_cursor: bool = True

    def __post_init__(self) -> None:
        cleaned = tuple(site.strip() for site in self.sites if site.strip())
        object.__setattr__(self, "sites", cleaned or DEFAULT_SITES)

    @classmethod
    def from_env(cls) -> "EngineSettings":
        return cls(
            enabled=env_flag("ENABLED", True),
            sites=_parse_sites(env_value("SITES")),
            colored_indicator=env_flag("COLORED_INDICATOR", True),
            colored_cursor=env_flag("COLORED_CURSOR", True),
        )

    def matches(self, url: str) -> bool:
        return url_matches_sites(url, self.sites)

    def active_for(self, url: str) -> bool:
        return self.enabled and self.matches(url)


__all__ = ["EngineSettings"]
