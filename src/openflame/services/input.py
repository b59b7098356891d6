"""Request input retrieval with type binding and sanitising."""

import html
from typing import Any, Mapping, Optional

INPUT_TYPES = ("REQUEST", "GET", "POST", "COOKIE", "SERVER", "FILES")


def _clean_string(value: str) -> str:
    value = value.replace("\r\n", "\n").replace("\r", "\n").replace("\0", "")
    return html.escape(value, quote=False).replace('"', "&quot;").strip()


def _bind(value: Any, default: Any) -> Any:
    """Coerce ``value`` to the type of ``default``, cleaning strings."""
    if isinstance(default, (list, tuple)):
        item_default = default[0] if default else ""
        values = value if isinstance(value, (list, tuple)) else [value]
        return [_bind(v, item_default) for v in values]
    if isinstance(default, dict):
        key_default, value_default = next(iter(default.items()), ("", ""))
        items = value.items() if isinstance(value, Mapping) else ()
        return {_bind(k, key_default): _bind(v, value_default) for k, v in items}
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if isinstance(default, (int, float)):
        try:
            return type(default)(value)
        except (TypeError, ValueError):
            return default
    if isinstance(default, str):
        if isinstance(value, bytes):
            try:
                value = value.decode("utf-8")
            except UnicodeDecodeError:
                value = default
        return _clean_string(str(value))
    return value


class InputInstance:
    """A single named input field, processed lazily and memoised."""

    def __init__(self, handler: "InputHandler", name: str, default: Any, kind: str = "REQUEST"):
        if default is None:
            raise ValueError("Cannot specify None as the default value for input")
        kind = kind.upper().lstrip("_")
        self.handler = handler
        self.name = name
        self.default = default
        self.kind = kind if kind in INPUT_TYPES else "REQUEST"
        self._processed = False
        self._raw = None
        self._clean = None
        self._was_set = False

    def _process(self) -> None:
        if self._processed:
            return
        source = self.handler.get_source(self.kind)
        value = source.get(self.name)
        self._was_set = bool(value)
        self._raw = value if self._was_set else self.default
        self._clean = _bind(self._raw, self.default)
        self._processed = True

    @property
    def raw(self) -> Any:
        self._process()
        return self._raw

    @property
    def clean(self) -> Any:
        self._process()
        return self._clean

    @property
    def was_set(self) -> bool:
        self._process()
        return self._was_set

    def __str__(self) -> str:
        return str(self.clean)


class InputHandler:
    """Holds request input sources and hands out ``InputInstance`` objects."""

    def __init__(self):
        self._sources: dict[str, dict[str, Any]] = {kind: {} for kind in INPUT_TYPES}

    def set_source(self, kind: str, data: Mapping[str, Any]) -> "InputHandler":
        kind = kind.upper().lstrip("_")
        if kind not in INPUT_TYPES:
            raise ValueError(f"Unknown input type: {kind}")
        self._sources[kind] = dict(data)
        if kind in ("GET", "POST", "COOKIE"):
            # POST beats GET beats COOKIE
            merged = {}
            for part in ("COOKIE", "GET", "POST"):
                merged.update(self._sources[part])
            self._sources["REQUEST"] = merged
        return self

    def get_source(self, kind: str) -> dict[str, Any]:
        return self._sources.get(kind, {})

    def get_input(self, name: str, default: Any, kind: str = "REQUEST") -> InputInstance:
        return InputInstance(self, name, default, kind)
