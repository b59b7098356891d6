"""Framework configuration.

Configuration is a flat store of dotted keys (``"cache.engine"``,
``"session.path"``) that can be loaded from:
- YAML files (nested mappings are flattened into dotted keys)
- Environment variables
- Programmatic construction

Absent keys never fail: ``get`` falls back to ``CONFIG_DEFAULTS`` and then
to the caller's default.
"""

import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

ENV_PREFIX = "OPENFLAME"
DEFAULT_CONFIG_FILE = "~/.openflame/config.yaml"

CACHE_ENGINES = ("json", "serialize", "memory")

CONFIG_DEFAULTS: dict[str, Any] = {
    "cache.engine": "serialize",
    "cache.path": str(Path(tempfile.gettempdir()) / "openflame" / "cache"),
    "session.path": str(Path(tempfile.gettempdir()) / "openflame" / "sessions"),
    "session.cookie_name": "sid",
    "cookie.prefix": "",
    "cookie.path": "/",
    "url.base": "",
    "asset.base_url": "",
    "twig.template_path": "/data/template/",
    "twig.cache_path": "/cache/twig/",
    "twig.debug": False,
}


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat = {}
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, dotted))
        else:
            flat[dotted] = value
    return flat


class FrameworkConfig:
    """Dotted-key configuration store."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: dict[str, Any] = dict(values or {})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FrameworkConfig":
        """Create configuration from a (possibly nested) dictionary."""
        return cls(_flatten(data))

    @classmethod
    def from_file(cls, path: str | Path) -> "FrameworkConfig":
        """Load configuration from YAML file."""
        path = Path(path).expanduser()
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "FrameworkConfig":
        """Load configuration from the environment.

        Environment variables:
            {prefix}_CONFIG: Path to a YAML config file
            {prefix}_<SECTION>__<KEY>: Override for "section.key",
                e.g. OPENFLAME_CACHE__ENGINE=json
        """
        config = cls.from_file(
            os.environ.get(f"{prefix}_CONFIG", DEFAULT_CONFIG_FILE)
        )

        marker = f"{prefix}_"
        for var, value in os.environ.items():
            if not var.startswith(marker) or var == f"{prefix}_CONFIG":
                continue
            key = var[len(marker):].lower().replace("__", ".")
            config.set(key, value)

        return config

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._values:
            return self._values[key]
        return CONFIG_DEFAULTS.get(key, default)

    def set(self, key: str, value: Any) -> "FrameworkConfig":
        self._values[key] = value
        return self

    def has(self, key: str) -> bool:
        """Whether ``key`` was explicitly configured (defaults don't count)."""
        return key in self._values

    def as_dict(self) -> dict[str, Any]:
        merged = dict(CONFIG_DEFAULTS)
        merged.update(self._values)
        return merged

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        engine = self.get("cache.engine")
        if engine not in CACHE_ENGINES:
            errors.append(
                f"cache.engine must be one of {', '.join(CACHE_ENGINES)}, "
                f"got {engine!r}"
            )

        for key in ("cache.path", "session.path"):
            if not str(self.get(key) or "").strip():
                errors.append(f"{key} cannot be empty")

        if not str(self.get("session.cookie_name") or "").strip():
            errors.append("session.cookie_name cannot be empty")

        return errors


_default_config: Optional[FrameworkConfig] = None
_config_lock = threading.Lock()


def get_default_config() -> FrameworkConfig:
    """Return the process-wide configuration, loading it from env on first use."""
    global _default_config
    if _default_config is None:
        with _config_lock:
            if _default_config is None:
                _default_config = FrameworkConfig.from_env()
    return _default_config


def set_default_config(config: Optional[FrameworkConfig]) -> None:
    global _default_config
    with _config_lock:
        _default_config = config


def reset_config() -> None:
    """Forget the process-wide configuration (reloaded on next access)."""
    set_default_config(None)


def get_config(key: str, default: Any = None) -> Any:
    return get_default_config().get(key, default)


def set_config(key: str, value: Any) -> None:
    get_default_config().set(key, value)
