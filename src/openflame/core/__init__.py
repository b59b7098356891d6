"""Object wiring runtime: registry, recipes, container and proxies."""

from .container import Container
from .errors import (
    CircularDependencyError,
    ConstructionError,
    InjectorError,
    InvalidRecipeError,
    InvalidSourceError,
    RecipeNotFoundError,
)
from .proxy import ServiceProxy, proxy_recipe
from .recipes import Deferred, FactoryRecipe, TypeRecipe
from .registry import MISSING, ObjectRegistry, get_object, get_registry, set_object

__all__ = [
    "Container",
    "ObjectRegistry",
    "MISSING",
    "get_registry",
    "get_object",
    "set_object",
    "Deferred",
    "TypeRecipe",
    "FactoryRecipe",
    "ServiceProxy",
    "proxy_recipe",
    # Errors
    "InjectorError",
    "RecipeNotFoundError",
    "InvalidRecipeError",
    "ConstructionError",
    "CircularDependencyError",
    "InvalidSourceError",
]
