"""Named URL patterns and their template-facing proxy."""

import re
from urllib.parse import urlencode

from ..core.proxy import ServiceProxy

_PARAM = re.compile(r"\{(\w+)\}")


class URLBuilder:
    """Builds URLs from named patterns such as ``"/user/{id}/"``."""

    def __init__(self):
        self.base_url = ""
        self._patterns: dict[str, str] = {}

    def set_base_url(self, base_url: str) -> "URLBuilder":
        self.base_url = base_url.rstrip("/")
        return self

    def new_pattern(self, name: str, pattern: str) -> "URLBuilder":
        self._patterns[name] = "/" + pattern.lstrip("/")
        return self

    def has_pattern(self, name: str) -> bool:
        return name in self._patterns

    def build(self, name: str, **params) -> str:
        """Fill pattern ``name``; unused params become the query string."""
        try:
            pattern = self._patterns[name]
        except KeyError:
            raise KeyError(f"No URL pattern named {name!r}") from None

        used = set()

        def substitute(match: re.Match) -> str:
            key = match.group(1)
            if key not in params:
                raise ValueError(f"Missing URL parameter {key!r} for pattern {name!r}")
            used.add(key)
            return str(params[key])

        url = self.base_url + _PARAM.sub(substitute, pattern)
        extra = {k: v for k, v in params.items() if k not in used}
        if extra:
            url += "?" + urlencode(extra)
        return url


class URLBuilderProxy(ServiceProxy):
    """Template facade over the "url" service; calling it builds a URL."""

    target_name = "url"

    def __call__(self, name: str, **params) -> str:
        return self.resolve_target().build(name, **params)
