"""Tests for the built-in recipe table."""

import pytest

from openflame.core.container import Container
from openflame.core.defaults import DEFAULT_RECIPES
from openflame.services.assets import AssetManager, AssetProxy
from openflame.services.cache import (
    CacheDriver,
    JSONFileEngine,
    MemoryEngine,
    SerializeFileEngine,
)
from openflame.services.cookie import CookieManager
from openflame.services.header import HeaderManager
from openflame.services.language import LanguageProxy
from openflame.services.session import (
    CookieClientEngine,
    FilesystemStorageEngine,
    SessionDriver,
)
from openflame.services.url import URLBuilderProxy


class TestDefaultTable:
    """Tests that every default recipe resolves."""

    @pytest.mark.parametrize("name", sorted(DEFAULT_RECIPES))
    def test_every_default_resolves(self, container, name):
        """Test each built-in name produces an instance."""
        assert container.resolve(name) is not None

    def test_type_recipes_are_lazy(self, container):
        """Test constructing the container fires nothing."""
        assert len(container.registry) == 0

    def test_custom_table(self, registry, config):
        """Test register_defaults accepts an alternative table."""
        container = Container(registry=registry, config=config, with_defaults=False)
        container.register_defaults({
            "manager": "openflame.services.assets:AssetManager",
            "answer": lambda c: 42,
        })

        assert isinstance(container.resolve("manager"), AssetManager)
        assert container.resolve("answer") == 42


class TestCompositeDefaults:
    """Tests for composite default recipes."""

    def test_header_injects_cookie_manager(self, container):
        """Test "header" carries the shared "cookie" service."""
        header = container.resolve("header")

        assert isinstance(header, HeaderManager)
        assert header.get_submodule("Cookie").cookie_manager is container.resolve("cookie")

    def test_session_composes_engines(self, container, config):
        """Test "session" is built with both shared engines injected."""
        session = container.resolve("session")

        assert isinstance(session, SessionDriver)
        assert session.storage_engine is container.resolve("session_store_engine")
        assert session.client_engine is container.resolve("session_client_engine")
        assert isinstance(session.storage_engine, FilesystemStorageEngine)
        assert isinstance(session.client_engine, CookieClientEngine)
        assert str(session.storage_engine.path) == config.get("session.path")
        assert session.client_engine.cookie_manager is container.resolve("cookie")

    def test_session_round_trip(self, container):
        """Test a composed session persists data through its engines."""
        session = container.resolve("session")
        session.start()
        session.set("user", "sam")
        session.save()

        sid = session.sid
        cookie_headers = container.resolve("cookie").headers()
        assert any(sid in value for _, value in cookie_headers)

        loaded = session.storage_engine.load(sid)
        assert loaded == {"user": "sam"}

    def test_proxies_front_their_services(self, container):
        """Test the proxy recipes wrap the named services lazily."""
        asset_proxy = container.resolve("asset_proxy")
        url_proxy = container.resolve("url_proxy")
        language_proxy = container.resolve("language_proxy")

        assert isinstance(asset_proxy, AssetProxy)
        assert isinstance(url_proxy, URLBuilderProxy)
        assert isinstance(language_proxy, LanguageProxy)
        assert not container.is_resolved("asset")

        container.resolve("asset").register_asset("css", "main", "style.css")
        assert str(asset_proxy["css"]["main"]) == "/style.css"

        container.resolve("url").new_pattern("home", "/")
        assert url_proxy("home") == "/"

        container.resolve("language").load_entries({"WELCOME": "Welcome!"})
        assert language_proxy.WELCOME == "Welcome!"


class TestCacheEngineSelection:
    """Tests for configuration-driven cache engine selection."""

    def test_default_engine_is_serialize(self, container):
        """Test an unset "cache.engine" falls back to serialize."""
        assert isinstance(container.resolve("cache.engine"), SerializeFileEngine)

    @pytest.mark.parametrize("name,engine_cls", [
        ("json", JSONFileEngine),
        ("serialize", SerializeFileEngine),
        ("memory", MemoryEngine),
    ])
    def test_configured_engine_selected(self, container, config, name, engine_cls):
        """Test the configured name picks the concrete engine."""
        config.set("cache.engine", name)

        engine = container.resolve("cache.engine")

        assert isinstance(engine, engine_cls)
        assert engine is container.resolve(f"cache.engine.{name}")
        assert engine.engine_name == name

    def test_config_change_after_resolution_ignored(self, container, config):
        """Test switching configuration after first resolution has no effect."""
        config.set("cache.engine", "json")
        first = container.resolve("cache.engine")

        config.set("cache.engine", "memory")

        assert container.resolve("cache.engine") is first
        assert isinstance(container.resolve("cache.engine"), JSONFileEngine)

    def test_config_change_before_resolution_applies(self, container, config):
        """Test switching configuration before first resolution changes the engine."""
        config.set("cache.engine", "json")
        config.set("cache.engine", "memory")
        assert isinstance(container.resolve("cache.engine"), MemoryEngine)

    def test_unknown_engine_is_lookup_failure(self, container, config):
        """Test an unknown engine name fails naming the concrete recipe."""
        from openflame.core.errors import RecipeNotFoundError

        config.set("cache.engine", "apcu")
        with pytest.raises(RecipeNotFoundError) as exc_info:
            container.resolve("cache.engine")
        assert exc_info.value.name == "cache.engine.apcu"

    def test_file_engines_use_configured_path(self, container, config):
        """Test file-backed engines write under "cache.path"."""
        config.set("cache.engine", "json")
        engine = container.resolve("cache.engine")
        assert str(engine.cache_path) == config.get("cache.path")

    def test_cache_driver_uses_selected_engine(self, container, config):
        """Test "cache" composes the selected engine."""
        config.set("cache.engine", "memory")
        cache = container.resolve("cache")

        assert isinstance(cache, CacheDriver)
        assert cache.engine is container.resolve("cache.engine.memory")

        cache.store("answer", 42)
        assert cache.load("answer") == 42

    def test_grab_uses_process_config(self):
        """Test the process-wide accessor honours set_config."""
        from openflame.config import set_config

        set_config("cache.engine", "memory")
        assert isinstance(Container.grab("cache.engine"), MemoryEngine)
        assert isinstance(Container.grab("cookie"), CookieManager)
