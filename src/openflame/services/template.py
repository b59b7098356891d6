"""Variables collected for the template layer."""

from typing import Any, Iterator


class TemplateVariables:
    """Named values handed to templates at render time."""

    def __init__(self):
        self._vars: dict[str, Any] = {}

    def assign(self, name: str, value: Any) -> "TemplateVariables":
        self._vars[name] = value
        return self

    def get(self, name: str, default: Any = None) -> Any:
        return self._vars.get(name, default)

    def all(self) -> dict[str, Any]:
        return dict(self._vars)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)
