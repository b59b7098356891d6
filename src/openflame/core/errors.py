"""Exception hierarchy for the dependency container.

Every error carries the name of the service whose wiring is broken so the
failure can be traced back to the registration that caused it.
"""

from typing import Optional, Sequence


class InjectorError(Exception):
    """Base class for all container failures."""

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name


class RecipeNotFoundError(InjectorError, LookupError):
    """No recipe is registered for the requested service name."""

    def __init__(self, name: str):
        super().__init__(
            f'Cannot fetch dependency object "{name}", no recipe defined', name
        )


class InvalidRecipeError(InjectorError, ValueError):
    """A recipe was registered with an unusable name or shape."""


class ConstructionError(InjectorError, RuntimeError):
    """A recipe fired but could not produce an instance."""


class CircularDependencyError(ConstructionError):
    """A recipe (directly or transitively) depends on itself."""

    def __init__(self, name: str, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__(
            f'Circular dependency detected while resolving "{name}": '
            + " -> ".join(self.chain),
            name,
        )


class InvalidSourceError(InjectorError, TypeError):
    """A non-object was supplied where an object reference is required."""
