"""Cache driver and storage engines.

Engines implement a small storage contract (build/load/exists/destroy/store)
and are selected by name through the container's ``cache.engine`` recipe.
"""

import json
import logging
import pickle
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class CacheEngine(ABC):
    """Abstract cache storage engine."""

    @property
    @abstractmethod
    def engine_name(self) -> str:
        """Return the engine identifier used in configuration."""
        pass

    @abstractmethod
    def build(self, data: Any) -> Any:
        """Convert ``data`` into the engine's stored representation."""
        pass

    @abstractmethod
    def load(self, key: str) -> Any:
        """Return the stored data for ``key``, or None."""
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    def destroy(self, key: str) -> None:
        pass

    @abstractmethod
    def store(self, key: str, data: Any) -> None:
        pass


class FileEngine(CacheEngine):
    """Base for engines that keep one file per key under ``cache_path``."""

    extension = ".cache"

    def __init__(self):
        self.cache_path: Optional[Path] = None

    def set_cache_path(self, path: str | Path) -> "FileEngine":
        self.cache_path = Path(path).expanduser()
        self.cache_path.mkdir(parents=True, exist_ok=True)
        return self

    def _file(self, key: str) -> Path:
        if self.cache_path is None:
            raise RuntimeError(f"No cache path set for {self.engine_name} engine")
        safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return self.cache_path / f"data_{safe}{self.extension}"

    @abstractmethod
    def _read(self, raw: bytes) -> Any:
        pass

    def load(self, key: str) -> Any:
        path = self._file(key)
        if not path.exists():
            return None
        return self._read(path.read_bytes())

    def exists(self, key: str) -> bool:
        return self._file(key).exists()

    def destroy(self, key: str) -> None:
        self._file(key).unlink(missing_ok=True)

    def store(self, key: str, data: Any) -> None:
        path = self._file(key)
        built = self.build(data)
        if isinstance(built, str):
            built = built.encode("utf-8")
        path.write_bytes(built)
        logger.debug(f"Stored cache entry {key!r} at {path}")


class JSONFileEngine(FileEngine):
    """Stores entries as JSON documents."""

    extension = ".json"

    @property
    def engine_name(self) -> str:
        return "json"

    def build(self, data: Any) -> str:
        return json.dumps(data)

    def _read(self, raw: bytes) -> Any:
        return json.loads(raw.decode("utf-8"))


class SerializeFileEngine(FileEngine):
    """Stores entries as pickled Python objects."""

    extension = ".pkl"

    @property
    def engine_name(self) -> str:
        return "serialize"

    def build(self, data: Any) -> bytes:
        return pickle.dumps(data)

    def _read(self, raw: bytes) -> Any:
        return pickle.loads(raw)


class MemoryEngine(CacheEngine):
    """Keeps entries in process memory."""

    def __init__(self):
        self._entries: dict[str, Any] = {}

    @property
    def engine_name(self) -> str:
        return "memory"

    def build(self, data: Any) -> Any:
        return data

    def load(self, key: str) -> Any:
        return self._entries.get(key)

    def exists(self, key: str) -> bool:
        return key in self._entries

    def destroy(self, key: str) -> None:
        self._entries.pop(key, None)

    def store(self, key: str, data: Any) -> None:
        self._entries[key] = self.build(data)


class CacheDriver:
    """Front end over a cache engine with optional expiry."""

    def __init__(self):
        self.engine: Optional[CacheEngine] = None

    def set_engine(self, engine: CacheEngine) -> "CacheDriver":
        self.engine = engine
        return self

    def _require_engine(self) -> CacheEngine:
        if self.engine is None:
            raise RuntimeError("No cache engine set")
        return self.engine

    def load(self, key: str) -> Any:
        entry = self._require_engine().load(key)
        if entry is None:
            return None
        expires = entry.get("expires")
        if expires is not None and expires < time.time():
            self.engine.destroy(key)
            return None
        return entry.get("data")

    def store(self, key: str, data: Any, ttl: Optional[float] = None) -> None:
        expires = time.time() + ttl if ttl else None
        self._require_engine().store(key, {"expires": expires, "data": data})

    def exists(self, key: str) -> bool:
        return self.load(key) is not None

    def destroy(self, key: str) -> None:
        self._require_engine().destroy(key)
