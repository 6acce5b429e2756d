# infrastructure/url/base_url_resolver.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict

_BASE_KEY_PREFIX = re.compile(r"^\{(\w+)\}(.*)$", re.S)


@dataclass(frozen=True)
class BaseUrlResolver:
    """
    Resolves step URLs against named base URLs.
      https://x/y      -> unchanged
      {api}/todos      -> base_urls["api"] + "/todos"
      /todos           -> first base URL + "/todos"
    """
    base_urls: Dict[str, str] = field(default_factory=dict)

    def resolve_url(self, url: str) -> str:
        if url.startswith("http://") or url.startswith("https://"):
            return url

        m = _BASE_KEY_PREFIX.match(url)
        if m and self.base_urls.get(m.group(1)):
            return self.base_urls[m.group(1)] + m.group(2)

        default_base = next(iter(self.base_urls.values()), "")
        if default_base:
            return default_base + url

        return url
