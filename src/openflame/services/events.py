"""Event objects and the publish/subscribe dispatcher."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..core.errors import InvalidSourceError

logger = logging.getLogger(__name__)

# Values rather than objects: scalars and plain containers
_NON_OBJECT_TYPES = (str, bytes, int, float, bool, complex, list, tuple, dict, set)


class Event:
    """A named event carrying a source object, data points and listener returns."""

    def __init__(self, name: str = "", source: Any = None, data: Optional[dict] = None):
        self.name = str(name)
        self._source = None
        self.data: dict[str, Any] = dict(data or {})
        self._returns: list[Any] = []
        self._break = False
        self.set_source(source)

    @property
    def source(self) -> Any:
        return self._source

    def set_source(self, source: Any) -> "Event":
        """Attach the object that raised the event.

        Raises:
            InvalidSourceError: If ``source`` is a scalar or a plain
                container rather than an object
        """
        if source is not None and isinstance(source, _NON_OBJECT_TYPES):
            raise InvalidSourceError(
                "Source provided to event instance must be an object or None",
                self.name,
            )
        self._source = source
        return self

    def get_data(self) -> dict[str, Any]:
        return self.data

    def set_data(self, data: Optional[dict] = None) -> "Event":
        self.data = dict(data or {})
        return self

    def data_point_exists(self, point: str) -> bool:
        return point in self.data

    def get_data_point(self, point: str) -> Any:
        if not self.data_point_exists(point):
            raise KeyError(f"Invalid event parameter specified: {point!r}")
        return self.data[point]

    def set_data_point(self, point: str, value: Any) -> "Event":
        self.data[point] = value
        return self

    def break_trigger(self) -> "Event":
        """Stop the dispatcher from calling further listeners."""
        self._break = True
        return self

    @property
    def was_break_triggered(self) -> bool:
        return self._break

    def count_returns(self) -> int:
        return len(self._returns)

    def add_return(self, value: Any) -> "Event":
        self._returns.append(value)
        return self

    def get_returns(self) -> Any:
        """Return None, the single return value, or the list of all returns."""
        if not self._returns:
            return None
        if len(self._returns) == 1:
            return self._returns[0]
        return list(self._returns)


@dataclass(order=True)
class _Listener:
    priority: int
    sequence: int
    callback: Callable[[Event], Any] = field(compare=False)


class Dispatcher:
    """Priority-ordered listener registry (lower priority runs first)."""

    def __init__(self):
        self._listeners: dict[str, list[_Listener]] = {}
        self._sequence = 0

    def register(
        self, event_name: str, callback: Callable[[Event], Any], priority: int = 0
    ) -> "Dispatcher":
        self._sequence += 1
        listeners = self._listeners.setdefault(event_name, [])
        listeners.append(_Listener(priority, self._sequence, callback))
        listeners.sort()
        return self

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def trigger(self, event: Event) -> Event:
        """Call every listener for ``event.name`` until one breaks the chain."""
        for listener in self._listeners.get(event.name, []):
            result = listener.callback(event)
            if result is not None:
                event.add_return(result)
            if event.was_break_triggered:
                logger.debug(f"Listener chain for {event.name!r} broken")
                break
        return event
