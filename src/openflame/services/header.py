"""Response header management."""

from typing import Optional

from .cookie import CookieManager


class CookieSubmodule:
    """Header submodule that emits the cookie manager's queued cookies."""

    def __init__(self):
        self.cookie_manager: Optional[CookieManager] = None

    def set_cookie_manager(self, manager: CookieManager) -> "CookieSubmodule":
        self.cookie_manager = manager
        return self

    def headers(self) -> list[tuple[str, str]]:
        if self.cookie_manager is None:
            return []
        return self.cookie_manager.headers()


class HeaderManager:
    """Collects response headers from direct calls and submodules."""

    SUBMODULES = {"Cookie": CookieSubmodule}

    def __init__(self):
        self._headers: dict[str, str] = {}
        self._submodules: dict[str, object] = {}

    def get_submodule(self, name: str):
        """Return (creating on first use) the submodule called ``name``."""
        if name not in self._submodules:
            try:
                self._submodules[name] = self.SUBMODULES[name]()
            except KeyError:
                raise KeyError(f"Unknown header submodule: {name!r}") from None
        return self._submodules[name]

    def set_header(self, name: str, value: str) -> "HeaderManager":
        self._headers[name] = value
        return self

    def remove_header(self, name: str) -> "HeaderManager":
        self._headers.pop(name, None)
        return self

    def get_headers(self) -> list[tuple[str, str]]:
        headers = list(self._headers.items())
        for submodule in self._submodules.values():
            headers.extend(submodule.headers())
        return headers
