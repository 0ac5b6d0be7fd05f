"""Site allow-list patterns (``https://github.com/*`` style globs)."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Pattern

DEFAULT_SITES: tuple[str, ...] = (
    "https://github.com/*",
    "https://chatgpt.com/*",
    "https://gemini.google.com/*",
    "https://www.notion.so/*",
)


@lru_cache(maxsize=256)
def site_to_regex(site: str) -> Pattern[str]:
    """Compile a site pattern; ``*`` matches any run, everything else is literal."""

    escaped = re.escape(site.strip())
    return re.compile("^" + escaped.replace(r"\*", ".*") + "$")


def url_matches_sites(url: str, sites: Iterable[str]) -> bool:
    return any(site_to_regex(site).match(url) for site in sites if site.strip())


__all__ = ["DEFAULT_SITES", "site_to_regex", "url_matches_sites"]
