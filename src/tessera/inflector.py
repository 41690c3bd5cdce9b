"""Inflectors: post-construction hooks keyed by type.

Every value leaving the container passes through
:meth:`InflectorRegistry.inflect`, which runs each inflector whose type
matches the value, in registration order.
"""

from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Tuple

from .aware import ContainerAwareMixin
from .definition import resolve_arguments

Callback = Callable[[Any], Any]


class Inflector(ContainerAwareMixin):
    """Transformation applied to values that are instances of *type*.

    *type* may be a class or a ``runtime_checkable`` Protocol. The callback
    receives the value; a non-``None`` return replaces it. Recorded method
    calls and property assignments run after the callback.
    """

    def __init__(self, type: Any, callback: Optional[Callback] = None) -> None:
        self.type = type
        self.callback = callback
        self.methods: List[Tuple[str, Tuple[Any, ...]]] = []
        self.properties: List[Tuple[str, Any]] = []

    def __repr__(self) -> str:
        return f"Inflector(type={getattr(self.type, '__name__', self.type)!r})"

    def matches(self, value: Any) -> bool:
        return isinstance(value, self.type)

    def invoke_method(self, name: str, args: Iterable[Any] = ()) -> "Inflector":
        self.methods.append((name, tuple(args)))
        return self

    def invoke_methods(self, methods: Mapping[str, Iterable[Any]]) -> "Inflector":
        for name, args in methods.items():
            self.invoke_method(name, args)
        return self

    def set_property(self, name: str, value: Any) -> "Inflector":
        self.properties.append((name, value))
        return self

    def set_properties(self, properties: Mapping[str, Any]) -> "Inflector":
        for name, value in properties.items():
            self.set_property(name, value)
        return self

    def inflect(self, value: Any) -> Any:
        container = self._container
        if self.callback is not None:
            result = self.callback(value)
            if result is not None:
                value = result
        for name, raw in self.properties:
            setattr(value, name, resolve_arguments((raw,), container)[0])
        for name, args in self.methods:
            getattr(value, name)(*resolve_arguments(args, container))
        return value


class InflectorRegistry(ContainerAwareMixin):
    def __init__(self) -> None:
        self._inflectors: List[Inflector] = []

    def __len__(self) -> int:
        return len(self._inflectors)

    def __iter__(self) -> Iterator[Inflector]:
        return iter(list(self._inflectors))

    def set_container(self, container):
        super().set_container(container)
        for inflector in self._inflectors:
            inflector.set_container(container)
        return self

    def add(self, type: Any, callback: Optional[Callback] = None) -> Inflector:
        inflector = Inflector(type, callback)
        if self._container is not None:
            inflector.set_container(self._container)
        self._inflectors.append(inflector)
        return inflector

    def inflect(self, value: Any) -> Any:
        """Run every matching inflector over *value*, chaining their outputs."""
        for inflector in self._inflectors:
            if inflector.matches(value):
                value = inflector.inflect(value)
        return value
