"""
Component registry for the resolution pipeline.

Gazetteers, indexes, selection strategies and reduction strategies register
themselves here by name so that a resolver can be assembled from a plain
configuration dict.
"""

from typing import Any, Callable, Dict, TypeVar

T = TypeVar("T")


class ComponentRegistry:
    """Simple registry to keep components pluggable."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._registry: Dict[str, Callable[..., Any]] = {}

    def register(self, name: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
        def decorator(factory: Callable[..., T]) -> Callable[..., T]:
            if name in self._registry:
                raise ValueError(f"{self.kind} '{name}' already registered.")
            self._registry[name] = factory
            return factory

        return decorator

    def get(self, name: str) -> Callable[..., Any]:
        try:
            return self._registry[name]
        except KeyError as exc:
            raise KeyError(f"{self.kind} '{name}' not found.") from exc

    def available(self) -> Dict[str, Callable[..., Any]]:
        return dict(self._registry)


# Registries for all pipeline components
gazetteers = ComponentRegistry("Gazetteer")
location_indexes = ComponentRegistry("Location index")
coordinate_indexes = ComponentRegistry("Coordinate index")
location_selectors = ComponentRegistry("Location selector")
coordinate_selectors = ComponentRegistry("Coordinate selector")
reducers = ComponentRegistry("Reducer")
