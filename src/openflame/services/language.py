"""Language string lookup and its template-facing proxy."""

from typing import Any, Mapping

from ..core.proxy import ServiceProxy


class LanguageHandler:
    """Key -> translated string table. Unknown keys render as themselves."""

    def __init__(self):
        self._entries: dict[str, str] = {}

    def load_entries(self, entries: Mapping[str, str]) -> "LanguageHandler":
        self._entries.update({str(k).upper(): str(v) for k, v in entries.items()})
        return self

    def has_entry(self, key: str) -> bool:
        return key.upper() in self._entries

    def get_entry(self, key: str, *args: Any) -> str:
        entry = self._entries.get(key.upper(), key)
        if args:
            return entry % args
        return entry


class LanguageProxy(ServiceProxy):
    """Template facade over the "language" service; ``lang.KEY`` reads an entry."""

    target_name = "language"

    def __getattr__(self, attr: str) -> Any:
        if attr.isupper():
            return self.resolve_target().get_entry(attr)
        return super().__getattr__(attr)
