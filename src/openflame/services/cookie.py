"""Cookie reading and queued Set-Cookie output."""

from http.cookies import SimpleCookie
from typing import Mapping, Optional

from ..config import get_config


class CookieManager:
    """Reads incoming cookies and queues outgoing ones under a common prefix."""

    def __init__(self):
        self.prefix = get_config("cookie.prefix", "")
        self.path = get_config("cookie.path", "/")
        self.domain: Optional[str] = get_config("cookie.domain")
        self._incoming: dict[str, str] = {}
        self._outgoing = SimpleCookie()

    def load_request_cookies(self, cookies: Mapping[str, str]) -> "CookieManager":
        self._incoming = dict(cookies)
        return self

    def get_cookie(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._incoming.get(self.prefix + name, default)

    def set_cookie(
        self, name: str, value: str, max_age: Optional[int] = None, http_only: bool = True
    ) -> "CookieManager":
        key = self.prefix + name
        self._outgoing[key] = value
        morsel = self._outgoing[key]
        morsel["path"] = self.path
        if self.domain:
            morsel["domain"] = self.domain
        if max_age is not None:
            morsel["max-age"] = max_age
        morsel["httponly"] = http_only
        return self

    def delete_cookie(self, name: str) -> "CookieManager":
        return self.set_cookie(name, "", max_age=0)

    def headers(self) -> list[tuple[str, str]]:
        """Return queued cookies as ``("Set-Cookie", value)`` pairs."""
        return [
            ("Set-Cookie", morsel.OutputString())
            for morsel in self._outgoing.values()
        ]
