"""Sessions: a driver composed from a storage engine and a client engine."""

import json
import logging
import re
import secrets
from pathlib import Path
from typing import Any, Optional

from ..config import CONFIG_DEFAULTS
from .cookie import CookieManager

logger = logging.getLogger(__name__)

_SID = re.compile(r"^[A-Za-z0-9_-]{16,128}$")


class FilesystemStorageEngine:
    """Persists session data as one JSON file per session id."""

    def __init__(self):
        self.path = Path(CONFIG_DEFAULTS["session.path"])

    def set_path(self, path: str | Path) -> "FilesystemStorageEngine":
        self.path = Path(path).expanduser()
        return self

    def _file(self, sid: str) -> Path:
        if not _SID.match(sid):
            raise ValueError(f"Invalid session id: {sid!r}")
        return self.path / f"sess_{sid}.json"

    def load(self, sid: str) -> dict[str, Any]:
        path = self._file(sid)
        if not path.exists():
            return {}
        with open(path) as f:
            return json.load(f)

    def store(self, sid: str, data: dict[str, Any]) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        with open(self._file(sid), "w") as f:
            json.dump(data, f)

    def destroy(self, sid: str) -> None:
        self._file(sid).unlink(missing_ok=True)


class CookieClientEngine:
    """Tracks the session id in a cookie."""

    def __init__(self):
        self.cookie_name = CONFIG_DEFAULTS["session.cookie_name"]
        self.cookie_manager: Optional[CookieManager] = None

    def set_cookie_manager(self, manager: CookieManager) -> "CookieClientEngine":
        self.cookie_manager = manager
        return self

    def get_sid(self) -> Optional[str]:
        if self.cookie_manager is None:
            return None
        sid = self.cookie_manager.get_cookie(self.cookie_name)
        return sid if sid and _SID.match(sid) else None

    def set_sid(self, sid: str) -> None:
        if self.cookie_manager is not None:
            self.cookie_manager.set_cookie(self.cookie_name, sid)

    def clear_sid(self) -> None:
        if self.cookie_manager is not None:
            self.cookie_manager.delete_cookie(self.cookie_name)


class SessionDriver:
    """Session data bound to an id handed out by the client engine."""

    def __init__(self):
        self.storage_engine: Optional[FilesystemStorageEngine] = None
        self.client_engine: Optional[CookieClientEngine] = None
        self.sid: Optional[str] = None
        self._data: dict[str, Any] = {}

    def set_storage_engine(self, engine: FilesystemStorageEngine) -> "SessionDriver":
        self.storage_engine = engine
        return self

    def set_client_engine(self, engine: CookieClientEngine) -> "SessionDriver":
        self.client_engine = engine
        return self

    @property
    def started(self) -> bool:
        return self.sid is not None

    def start(self) -> "SessionDriver":
        if self.storage_engine is None or self.client_engine is None:
            raise RuntimeError("Session engines must be set before start()")
        sid = self.client_engine.get_sid()
        if sid is None:
            sid = secrets.token_urlsafe(24)
            self.client_engine.set_sid(sid)
            logger.debug("Started new session")
        self.sid = sid
        self._data = self.storage_engine.load(sid)
        return self

    def _require_started(self) -> None:
        if not self.started:
            raise RuntimeError("Session not started. Call start() first.")

    def get(self, key: str, default: Any = None) -> Any:
        self._require_started()
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> "SessionDriver":
        self._require_started()
        self._data[key] = value
        return self

    def save(self) -> None:
        self._require_started()
        self.storage_engine.store(self.sid, self._data)

    def destroy(self) -> None:
        self._require_started()
        self.storage_engine.destroy(self.sid)
        self.client_engine.clear_sid()
        self.sid = None
        self._data = {}
