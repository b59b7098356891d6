"""Pytest fixtures for OpenFlame tests."""

import pytest

from openflame.config import FrameworkConfig, set_default_config
from openflame.core.container import Container
from openflame.core.registry import ObjectRegistry, get_registry


@pytest.fixture(autouse=True)
def isolate_process_state():
    """Give every test a fresh process-wide config, container and registry."""
    set_default_config(FrameworkConfig())
    Container.reset_instance(clear_registry=True)
    get_registry().clear()
    yield
    Container.reset_instance(clear_registry=True)
    get_registry().clear()
    set_default_config(None)


@pytest.fixture
def registry():
    """Provide a private object registry."""
    return ObjectRegistry()


@pytest.fixture
def config(tmp_path):
    """Provide a configuration pointing file-backed services at tmp_path."""
    return FrameworkConfig({
        "cache.path": str(tmp_path / "cache"),
        "session.path": str(tmp_path / "sessions"),
    })


@pytest.fixture
def container(registry, config):
    """Provide a container with the default recipes and private state."""
    return Container(registry=registry, config=config)


@pytest.fixture
def bare_container(registry, config):
    """Provide a container with no recipes registered."""
    return Container(registry=registry, config=config, with_defaults=False)


class Counter:
    """Counts constructions; used to prove singleton memoization."""

    created = 0

    def __init__(self):
        type(self).created += 1
        self.number = type(self).created


@pytest.fixture
def counter_cls():
    """Provide a fresh Counter subclass so counts don't leak between tests."""
    return type("FreshCounter", (Counter,), {"created": 0})
