"""Settings and site allow-list matching."""

from .settings import EngineSettings
from .sites import DEFAULT_SITES, site_to_regex, url_matches_sites

__all__ = [
    "DEFAULT_SITES",
    "EngineSettings",
    "site_to_regex",
    "url_matches_sites",
]
