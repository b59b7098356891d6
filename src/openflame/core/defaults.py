"""Built-in recipe table.

Type entries are dotted type ids, imported the first time the service is
resolved. Callable entries are composite recipes: they receive the
container and resolve their collaborators through it, so the dependency on
the container is visible in each signature.
"""

import logging
from typing import TYPE_CHECKING, Any

from ..services.assets import AssetProxy
from ..services.language import LanguageProxy
from ..services.url import URLBuilderProxy
from .proxy import proxy_recipe

if TYPE_CHECKING:
    from ..services.cache import CacheDriver, FileEngine
    from ..services.header import HeaderManager
    from ..services.session import SessionDriver
    from .container import Container

logger = logging.getLogger(__name__)


def build_header(container: "Container") -> "HeaderManager":
    from ..services.header import HeaderManager

    header = HeaderManager()
    cookie = header.get_submodule("Cookie")
    cookie.set_cookie_manager(container.resolve("cookie"))
    return header


def build_session(container: "Container") -> "SessionDriver":
    from ..services.session import SessionDriver

    store = container.resolve("session_store_engine")
    store.set_path(container.config.get("session.path"))

    client = container.resolve("session_client_engine")
    client.cookie_name = container.config.get("session.cookie_name")
    client.set_cookie_manager(container.resolve("cookie"))

    session = SessionDriver()
    session.set_storage_engine(store)
    session.set_client_engine(client)
    return session


def select_cache_engine(container: "Container") -> Any:
    """Delegate "cache.engine" to "cache.engine.<configured name>".

    The choice is made once: after the first resolution the registry
    serves the cached engine whatever the configuration says.
    """
    engine = container.config.get("cache.engine", "serialize")
    logger.debug(f"Selected cache engine {engine!r}")
    return container.resolve(f"cache.engine.{engine}")


def _file_engine(engine: "FileEngine", container: "Container") -> "FileEngine":
    return engine.set_cache_path(container.config.get("cache.path"))


def build_json_engine(container: "Container") -> "FileEngine":
    from ..services.cache import JSONFileEngine

    return _file_engine(JSONFileEngine(), container)


def build_serialize_engine(container: "Container") -> "FileEngine":
    from ..services.cache import SerializeFileEngine

    return _file_engine(SerializeFileEngine(), container)


def build_cache(container: "Container") -> "CacheDriver":
    from ..services.cache import CacheDriver

    cache = CacheDriver()
    cache.set_engine(container.resolve("cache.engine"))
    return cache


DEFAULT_RECIPES: dict[str, Any] = {
    "router": "openflame.services.router:Router",
    "alias_router": "openflame.services.router:AliasRouter",
    "input": "openflame.services.input:InputHandler",
    "template": "openflame.services.template:TemplateVariables",
    "asset": "openflame.services.assets:AssetManager",
    "form": "openflame.services.security:FormKey",
    "dispatcher": "openflame.services.events:Dispatcher",
    "language": "openflame.services.language:LanguageHandler",
    "hasher": "openflame.services.security:Hasher",
    "url": "openflame.services.url:URLBuilder",
    "cookie": "openflame.services.cookie:CookieManager",
    "seeder": "openflame.services.security:Seeder",
    "timer": "openflame.services.timer:Timer",
    "session_store_engine": "openflame.services.session:FilesystemStorageEngine",
    "session_client_engine": "openflame.services.session:CookieClientEngine",
    "asset_proxy": proxy_recipe(AssetProxy),
    "url_proxy": proxy_recipe(URLBuilderProxy),
    "language_proxy": proxy_recipe(LanguageProxy),
    "header": build_header,
    "session": build_session,
    "cache.engine": select_cache_engine,
    "cache.engine.json": build_json_engine,
    "cache.engine.serialize": build_serialize_engine,
    "cache.engine.memory": "openflame.services.cache:MemoryEngine",
    "cache": build_cache,
}
