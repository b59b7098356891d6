"""Tests for the object registry."""

import threading

from openflame.core.registry import (
    MISSING,
    ObjectRegistry,
    get_object,
    get_registry,
    set_object,
)


class TestObjectRegistry:
    """Tests for ObjectRegistry get/set semantics."""

    def test_get_unset_returns_missing(self, registry):
        """Test a never-set name yields the absent signal."""
        assert registry.get("nothing") is MISSING
        assert not registry.exists("nothing")

    def test_set_returns_instance(self, registry):
        """Test set hands back the stored instance for chaining."""
        obj = object()
        assert registry.set("thing", obj) is obj
        assert registry.get("thing") is obj

    def test_falsy_values_are_hits(self, registry):
        """Test None, 0 and empty containers are stored, not treated as misses."""
        for name, value in [("none", None), ("zero", 0), ("empty", []), ("blank", "")]:
            registry.set(name, value)
            assert registry.get(name) is not MISSING
            assert registry.get(name) == value
            assert registry.exists(name)

    def test_get_with_default(self, registry):
        """Test an explicit default replaces the sentinel."""
        assert registry.get("nothing", default=42) == 42

    def test_missing_is_falsy_singleton(self):
        """Test the sentinel is a falsy singleton."""
        assert not MISSING
        assert type(MISSING)() is MISSING
        assert repr(MISSING) == "MISSING"

    def test_remove_and_clear(self, registry):
        """Test remove reports whether anything was dropped."""
        registry.set("a", 1)
        registry.set("b", 2)

        assert registry.remove("a") is True
        assert registry.remove("a") is False
        assert "a" not in registry
        assert len(registry) == 1

        registry.clear()
        assert len(registry) == 0

    def test_names_and_iteration(self, registry):
        """Test iteration lists stored names."""
        registry.set("x", 1)
        registry.set("y", 2)
        assert sorted(registry) == ["x", "y"]
        assert sorted(registry.names()) == ["x", "y"]

    def test_lock_is_reentrant(self, registry):
        """Test the resolution lock can be re-acquired by the same thread."""
        with registry.lock:
            with registry.lock:
                registry.set("nested", True)
        assert registry.get("nested") is True

    def test_concurrent_sets_are_all_visible(self, registry):
        """Test concurrent writers to distinct names don't lose entries."""
        def writer(i):
            registry.set(f"name{i}", i)

        threads = [threading.Thread(target=writer, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 20


class TestProcessRegistry:
    """Tests for the process-wide registry helpers."""

    def test_module_helpers_use_shared_registry(self):
        """Test get_object/set_object operate on get_registry()."""
        obj = object()
        set_object("shared", obj)

        assert get_object("shared") is obj
        assert get_registry().get("shared") is obj
        assert get_object("unknown") is MISSING

    def test_private_registries_are_independent(self):
        """Test separately constructed registries don't share entries."""
        a, b = ObjectRegistry(), ObjectRegistry()
        a.set("svc", 1)
        assert b.get("svc") is MISSING
