"""OpenFlame - a small web-application framework.

The heart of the framework is a lazy dependency container. Services are
registered by name as either a type or a factory, built on first use and
then shared for the life of the process:

    from openflame import Container

    session = Container.grab("session")
    session.start()

Which cache engine backs "cache" is chosen by configuration:

    from openflame.config import set_config

    set_config("cache.engine", "json")
    cache = Container.grab("cache")
"""

from .config import FrameworkConfig, get_config, set_config
from .core import (
    CircularDependencyError,
    ConstructionError,
    Container,
    Deferred,
    InjectorError,
    InvalidRecipeError,
    InvalidSourceError,
    ObjectRegistry,
    RecipeNotFoundError,
    ServiceProxy,
)

__version__ = "0.1.0"

__all__ = [
    "Container",
    "ObjectRegistry",
    "ServiceProxy",
    "Deferred",
    "FrameworkConfig",
    "get_config",
    "set_config",
    "InjectorError",
    "RecipeNotFoundError",
    "InvalidRecipeError",
    "ConstructionError",
    "CircularDependencyError",
    "InvalidSourceError",
]
