"""Request path routing."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional


@dataclass
class Route:
    """A path pattern such as ``"/user/:id/"`` bound to a callback."""
    pattern: str
    callback: Callable[..., Any]
    name: Optional[str] = None
    segments: list[str] = field(init=False)

    def __post_init__(self):
        self.segments = [s for s in self.pattern.strip("/").split("/") if s]

    def match(self, path: str) -> Optional[dict[str, str]]:
        parts = [s for s in path.strip("/").split("/") if s]
        if len(parts) != len(self.segments):
            return None
        params = {}
        for expected, actual in zip(self.segments, parts):
            if expected.startswith(":"):
                params[expected[1:]] = actual
            elif expected != actual:
                return None
        return params


class Router:
    """Matches paths against routes in registration order."""

    def __init__(self):
        self._routes: list[Route] = []

    def new_route(
        self, pattern: str, callback: Callable[..., Any], name: Optional[str] = None
    ) -> Route:
        route = Route(pattern, callback, name)
        self._routes.append(route)
        return route

    def process_request(self, path: str) -> Optional[tuple[Route, dict[str, str]]]:
        """Return the first matching route and its parameters, or None."""
        for route in self._routes:
            params = route.match(path)
            if params is not None:
                return route, params
        return None


class AliasRouter:
    """Rewrites aliased paths to their canonical form."""

    def __init__(self):
        self._aliases: dict[str, str] = {}

    def new_alias(self, alias: str, target: str) -> "AliasRouter":
        self._aliases["/" + alias.strip("/")] = "/" + target.strip("/")
        return self

    def resolve(self, path: str) -> str:
        return self._aliases.get("/" + path.strip("/"), path)
