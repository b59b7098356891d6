"""Recipes: the registered instructions for building a named service.

A recipe is one of two shapes:

- ``TypeRecipe``: a zero-argument-constructible type, given either as the
  class itself or as a dotted type id (``"pkg.module:Class"`` or
  ``"pkg.module.Class"``). String ids are imported at build time, never at
  registration time.
- ``FactoryRecipe``: a zero-argument callable returning the instance.
"""

import importlib
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Union

from .errors import ConstructionError, InvalidRecipeError


class Deferred:
    """A thunk a factory may return instead of its final object.

    The container invokes it once and caches only the invoked result.
    """

    def __init__(self, thunk: Callable[[], Any]):
        if not callable(thunk):
            raise TypeError("Deferred requires a callable")
        self._thunk = thunk

    def __call__(self) -> Any:
        return self._thunk()

    def __repr__(self) -> str:
        return f"Deferred({self._thunk!r})"


def load_type(type_id: str) -> type:
    """Import the class named by a dotted type id."""
    module_name, sep, attr = type_id.partition(":")
    if not sep:
        module_name, _, attr = type_id.rpartition(".")
    if not module_name or not attr:
        raise ImportError(f"Malformed type id: {type_id!r}")

    module = importlib.import_module(module_name)
    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


@dataclass(frozen=True)
class TypeRecipe:
    """Construct ``type_id`` with no arguments."""
    type_id: Union[str, type]

    @property
    def kind(self) -> str:
        return "type"

    def build(self, name: str) -> Any:
        if isinstance(self.type_id, str):
            try:
                cls = load_type(self.type_id)
            except (ImportError, AttributeError) as e:
                raise ConstructionError(
                    f'Type "{self.type_id}" for dependency "{name}" does not exist: {e}',
                    name,
                ) from e
        else:
            cls = self.type_id

        if not isinstance(cls, type):
            raise ConstructionError(
                f'"{self.type_id}" for dependency "{name}" is not a constructible type',
                name,
            )
        return cls()


@dataclass(frozen=True)
class FactoryRecipe:
    """Invoke ``factory`` with no arguments."""
    factory: Callable[[], Any]

    @property
    def kind(self) -> str:
        return "factory"

    def build(self, name: str) -> Any:
        return self.factory()


Recipe = Union[TypeRecipe, FactoryRecipe]


def _accepts_no_arguments(func: Callable) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins expose no signature; trust them.
        return True
    try:
        signature.bind()
    except TypeError:
        return False
    return True


def make_recipe(name: str, recipe: Any) -> Recipe:
    """Validate the shape of ``recipe`` and wrap it in a tagged variant.

    Raises:
        InvalidRecipeError: Empty type id, non-callable object, or a
            callable that cannot be invoked without arguments.
    """
    if isinstance(recipe, (TypeRecipe, FactoryRecipe)):
        return recipe

    if isinstance(recipe, str):
        if not recipe.strip():
            raise InvalidRecipeError(
                f'Empty type id registered for dependency "{name}"', name
            )
        return TypeRecipe(recipe.strip())

    if isinstance(recipe, type):
        return TypeRecipe(recipe)

    if callable(recipe):
        if not _accepts_no_arguments(recipe):
            raise InvalidRecipeError(
                f'Factory for dependency "{name}" must accept zero arguments', name
            )
        return FactoryRecipe(recipe)

    raise InvalidRecipeError(
        f'Recipe for dependency "{name}" must be a type id or a zero-argument '
        f"callable, got {type(recipe).__name__}",
        name,
    )
