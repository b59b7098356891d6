"""Process-wide object registry.

A pure name -> instance store. It knows nothing about how instances are
built; the container fills it the first time a recipe fires.
"""

import threading
from typing import Any, Iterator


class _Missing:
    """Sentinel type for "never set" (distinct from a stored None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class ObjectRegistry:
    """Name -> instance cache backing singleton semantics.

    Entries are never evicted automatically. ``lock`` is re-entrant and is
    held by the container for the whole check-fire-store sequence, so every
    container sharing a registry also shares its resolution lock.
    """

    def __init__(self):
        self._objects: dict[str, Any] = {}
        self.lock = threading.RLock()

    def get(self, name: str, default: Any = MISSING) -> Any:
        """Return the stored instance, or ``default`` (``MISSING``) if never set.

        Lock-free: a single dict lookup is atomic, so cached hits never wait
        behind a construction in progress.
        """
        return self._objects.get(name, default)

    def set(self, name: str, instance: Any) -> Any:
        """Store ``instance`` under ``name`` and hand it back."""
        with self.lock:
            self._objects[name] = instance
        return instance

    def exists(self, name: str) -> bool:
        return name in self._objects

    def remove(self, name: str) -> bool:
        """Drop a stored instance. Returns whether anything was removed."""
        with self.lock:
            return self._objects.pop(name, MISSING) is not MISSING

    def clear(self) -> None:
        with self.lock:
            self._objects.clear()

    def names(self) -> list[str]:
        with self.lock:
            return list(self._objects)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name)

    def __len__(self) -> int:
        with self.lock:
            return len(self._objects)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


_default_registry = ObjectRegistry()


def get_registry() -> ObjectRegistry:
    """Return the process-wide registry."""
    return _default_registry


def get_object(name: str, default: Any = MISSING) -> Any:
    return _default_registry.get(name, default)


def set_object(name: str, instance: Any) -> Any:
    return _default_registry.set(name, instance)
