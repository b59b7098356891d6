"""Lazy by-name proxies.

A proxy is registered under its own name (``"asset_proxy"``) and holds only
the name of the service it fronts plus a handle to the container. The
wrapped service is resolved on first attribute access, which lets two
recipes refer to each other through proxies without either being built
eagerly.
"""

from typing import Any, Callable, Optional, TYPE_CHECKING

from .registry import MISSING

if TYPE_CHECKING:
    from .container import Container


class ServiceProxy:
    """Forward attribute access to a named service, resolving it lazily.

    Subclasses set ``target_name``; it can also be passed explicitly.
    The proxy never owns the target: the registry does.
    """

    target_name: Optional[str] = None

    def __init__(self, container: "Container", target_name: Optional[str] = None):
        name = target_name or self.target_name
        if not name:
            raise ValueError(f"{type(self).__name__} needs a target service name")
        self._proxy_container = container
        self._proxy_target_name = name
        self._proxy_target = MISSING

    @property
    def proxied_name(self) -> str:
        return self._proxy_target_name

    @property
    def is_resolved(self) -> bool:
        return self._proxy_target is not MISSING

    def resolve_target(self) -> Any:
        """Return the wrapped service, resolving it on first call."""
        if self._proxy_target is MISSING:
            self._proxy_target = self._proxy_container.resolve(self._proxy_target_name)
        return self._proxy_target

    def __getattr__(self, attr: str) -> Any:
        # Only reached for attributes the proxy itself does not define
        if attr.startswith("_proxy_"):
            raise AttributeError(attr)
        return getattr(self.resolve_target(), attr)

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else "pending"
        return f"<{type(self).__name__} -> {self._proxy_target_name!r} ({state})>"


def proxy_recipe(
    proxy_cls: type = ServiceProxy, target_name: Optional[str] = None
) -> Callable[["Container"], ServiceProxy]:
    """Build a table entry that constructs ``proxy_cls`` around ``target_name``."""

    def factory(container: "Container") -> ServiceProxy:
        return proxy_cls(container, target_name)

    return factory
