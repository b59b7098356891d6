"""Lazy dependency-resolution container."""

import functools
import logging
import threading
from typing import Any, Callable, Mapping, Optional, Union

from ..config import FrameworkConfig, get_default_config
from .errors import (
    CircularDependencyError,
    ConstructionError,
    InjectorError,
    InvalidRecipeError,
    RecipeNotFoundError,
)
from .recipes import Deferred, Recipe, make_recipe
from .registry import MISSING, ObjectRegistry, get_registry

logger = logging.getLogger(__name__)

# Entries of a recipe table: a type id, or a callable taking the container.
TableEntry = Union[str, type, Callable[["Container"], Any]]


class Container:
    """Dependency injection container.

    Maps service names to recipes and resolves them on first use. Every
    resolved instance is stored in an ``ObjectRegistry``; later lookups
    are served from there, so each name yields at most one instance for
    the lifetime of the registry.

    Usage:
        container = Container()
        container.register_factory("greeter", Greeter)
        greeter = container.resolve("greeter")

        # array-style sugar
        container["clock"] = lambda: Clock()
        clock = container["clock"]

        # process-wide instance
        session = Container.grab("session")
    """

    _instance: Optional["Container"] = None
    _instance_lock = threading.Lock()

    def __init__(
        self,
        registry: Optional[ObjectRegistry] = None,
        config: Optional[FrameworkConfig] = None,
        with_defaults: bool = True,
    ):
        """Initialize container.

        Args:
            registry: Instance store; the process-wide registry if omitted
            config: Configuration provider; the process-wide configuration
                (read at resolution time) if omitted
            with_defaults: Register the built-in default recipe table
        """
        self._registry = registry if registry is not None else get_registry()
        self._config = config
        self._recipes: dict[str, Recipe] = {}
        self._local = threading.local()

        if with_defaults:
            from .defaults import DEFAULT_RECIPES
            self.register_defaults(DEFAULT_RECIPES)

    @property
    def registry(self) -> ObjectRegistry:
        return self._registry

    @property
    def config(self) -> FrameworkConfig:
        if self._config is not None:
            return self._config
        return get_default_config()

    # -- process-wide access ------------------------------------------------

    @classmethod
    def get_instance(cls) -> "Container":
        """Return the process-wide container, creating it on first call."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
                    logger.info("Created process-wide dependency container")
        return cls._instance

    @classmethod
    def grab(cls, name: str) -> Any:
        """Resolve ``name`` through the process-wide container."""
        return cls.get_instance().resolve(name)

    @classmethod
    def reset_instance(cls, clear_registry: bool = False) -> None:
        """Drop the process-wide container (for test isolation).

        Args:
            clear_registry: Also empty the registry it was using
        """
        with cls._instance_lock:
            instance = cls._instance
            cls._instance = None
        if instance is not None and clear_registry:
            instance.registry.clear()
        logger.info("Reset process-wide dependency container")

    # -- registration -------------------------------------------------------

    def register_factory(self, name: str, recipe: Any) -> "Container":
        """Register (or overwrite) the recipe for ``name``.

        Args:
            name: Non-empty service name, e.g. "cache.engine.json"
            recipe: A type, a dotted type id, or a zero-argument callable

        Raises:
            InvalidRecipeError: If the name or recipe shape is invalid
        """
        if not isinstance(name, str) or not name:
            raise InvalidRecipeError(
                f"Dependency name must be a non-empty string, got {name!r}", None
            )
        self._recipes[name] = make_recipe(name, recipe)

        if self._registry.exists(name):
            logger.warning(
                f'Recipe for "{name}" replaced after it was resolved; '
                f"the cached instance stays until forget() is called"
            )
        logger.debug(f'Registered {self._recipes[name].kind} recipe for "{name}"')
        return self

    def register_defaults(self, table: Mapping[str, TableEntry]) -> "Container":
        """Register a recipe table.

        Type entries are registered as-is; callables receive this container
        as their only argument when fired.
        """
        for name, entry in table.items():
            if callable(entry) and not isinstance(entry, type):
                entry = functools.partial(entry, self)
            self.register_factory(name, entry)
        return self

    def unregister(self, name: str) -> "Container":
        """Remove the recipe for ``name``. A cached instance is left in place."""
        self._recipes.pop(name, None)
        return self

    def has_recipe(self, name: str) -> bool:
        return name in self._recipes

    def get_recipe(self, name: str) -> Recipe:
        try:
            return self._recipes[name]
        except KeyError:
            raise RecipeNotFoundError(name) from None

    def recipe_names(self) -> list[str]:
        return sorted(self._recipes)

    # -- resolution ---------------------------------------------------------

    def resolve(self, name: str) -> Any:
        """Return the instance for ``name``, firing its recipe on first use.

        Raises:
            RecipeNotFoundError: No recipe is registered for ``name``
            CircularDependencyError: ``name`` depends on itself
            ConstructionError: The recipe failed to build an instance
        """
        instance = self._registry.get(name)
        if instance is not MISSING:
            return instance

        with self._registry.lock:
            # Another thread may have finished while we waited for the lock
            instance = self._registry.get(name)
            if instance is not MISSING:
                return instance
            return self._fire(name)

    get = resolve

    def is_resolved(self, name: str) -> bool:
        return self._registry.exists(name)

    def forget(self, name: str) -> bool:
        """Clear the cached instance so the next resolve fires the recipe again."""
        return self._registry.remove(name)

    def _stack(self) -> list[str]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def _fire(self, name: str) -> Any:
        stack = self._stack()
        if name in stack:
            chain = stack[stack.index(name):] + [name]
            raise CircularDependencyError(name, chain)

        recipe = self.get_recipe(name)

        stack.append(name)
        try:
            instance = recipe.build(name)
            if isinstance(instance, Deferred):
                instance = instance()
        except InjectorError:
            raise
        except Exception as e:
            raise ConstructionError(
                f'Failed to construct dependency "{name}": {e}', name
            ) from e
        finally:
            stack.pop()

        logger.debug(f'Fired {recipe.kind} recipe for "{name}"')
        return self._registry.set(name, instance)

    # -- array-style sugar --------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_recipe(name)

    def __getitem__(self, name: str) -> Any:
        return self.resolve(name)

    def __setitem__(self, name: str, recipe: Any) -> None:
        self.register_factory(name, recipe)

    def __delitem__(self, name: str) -> None:
        self.unregister(name)

    def __repr__(self) -> str:
        return (
            f"<Container recipes={len(self._recipes)} "
            f"resolved={len(self._registry)}>"
        )
