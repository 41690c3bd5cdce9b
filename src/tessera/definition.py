"""Definitions and the definition registry.

A :class:`Definition` is the recipe for one identifier: what to build, with
which arguments, and whether the result is shared. :class:`DefinitionRegistry`
owns the identifier-to-definition mapping, the shared-instance cache, and
tag lookup.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .aware import ContainerAwareMixin
from .exceptions import NotFoundError

_logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class LiteralArgument:
    """Argument passed verbatim, even when it names a managed identifier."""

    value: Any


@dataclass(frozen=True)
class ResolvableArgument:
    """Argument resolved through the container by identifier."""

    id: str


def resolve_arguments(arguments: Iterable[Any], container: Optional[Any]) -> List[Any]:
    """Resolve definition or inflector arguments against *container*.

    ``LiteralArgument`` unwraps to its value, ``ResolvableArgument`` is
    fetched from the container, and a bare string is fetched when the
    container manages it. Everything else passes through unchanged.
    """
    resolved: List[Any] = []
    for arg in arguments:
        if isinstance(arg, LiteralArgument):
            resolved.append(arg.value)
        elif isinstance(arg, ResolvableArgument):
            if container is None:
                raise NotFoundError(arg.id, f"Unable to resolve argument ({arg.id}) without a container")
            resolved.append(container.get(arg.id))
        elif isinstance(arg, str) and container is not None and container.has(arg):
            resolved.append(container.get(arg))
        else:
            resolved.append(arg)
    return resolved


class Definition(ContainerAwareMixin):
    """Recipe for producing the value of one identifier.

    Args:
        id: The identifier the definition is registered under.
        concrete: A class, a callable factory, or a literal value.
            Defaults to *id*.
        shared: Whether the first built instance is cached and reused.
    """

    def __init__(self, id: str, concrete: Any = _UNSET, shared: bool = False) -> None:
        self.id = id
        self.concrete = id if concrete is _UNSET or concrete is None else concrete
        self.shared = shared
        self.tags: Dict[str, None] = {}
        self.arguments: List[Any] = []
        self.method_calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self._resolved: Any = _UNSET

    def __repr__(self) -> str:
        return f"Definition(id={self.id!r}, concrete={self.concrete!r}, shared={self.shared})"

    def add_tag(self, tag: str) -> "Definition":
        self.tags[tag] = None
        return self

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def set_shared(self, shared: bool = True) -> "Definition":
        self.shared = shared
        return self

    def is_shared(self) -> bool:
        return self.shared

    def set_concrete(self, concrete: Any) -> "Definition":
        """Replace what the definition builds and drop any cached instance."""
        self.concrete = concrete
        self._resolved = _UNSET
        return self

    def add_argument(self, arg: Any) -> "Definition":
        self.arguments.append(arg)
        return self

    def add_arguments(self, args: Iterable[Any]) -> "Definition":
        for arg in args:
            self.add_argument(arg)
        return self

    def add_method_call(self, method: str, args: Iterable[Any] = ()) -> "Definition":
        self.method_calls.append((method, tuple(args)))
        return self

    def add_method_calls(self, calls: Mapping[str, Iterable[Any]]) -> "Definition":
        for method, args in calls.items():
            self.add_method_call(method, args)
        return self

    def resolve(self) -> Any:
        """Return the cached instance of a shared definition, building it if needed."""
        if self.shared and self._resolved is not _UNSET:
            return self._resolved
        return self.resolve_new()

    def resolve_new(self) -> Any:
        """Build a fresh value; a shared definition also caches it."""
        instance = self._build()
        if self.shared:
            self._resolved = instance
        return instance

    def _build(self) -> Any:
        container = self._container
        concrete = self.concrete

        if isinstance(concrete, LiteralArgument):
            instance = concrete.value
        elif callable(concrete):
            instance = concrete(*resolve_arguments(self.arguments, container))
        elif isinstance(concrete, str) and concrete != self.id and container is not None and container.has(concrete):
            instance = container.get_uninflected(concrete)
        else:
            instance = concrete

        for method, args in self.method_calls:
            getattr(instance, method)(*resolve_arguments(args, container))
        return instance

    def clear_resolved(self) -> None:
        self._resolved = _UNSET


class DefinitionRegistry(ContainerAwareMixin):
    """Owns identifier-to-definition mappings.

    Registration order is preserved and determines the order of tag
    resolution. Adding an identifier that already exists without
    ``overwrite`` returns the existing definition unchanged.
    """

    def __init__(self, definitions: Iterable[Definition] = ()) -> None:
        self._definitions: Dict[str, Definition] = {}
        for definition in definitions:
            self._store(definition, overwrite=True)

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[Definition]:
        return iter(list(self._definitions.values()))

    def set_container(self, container):
        super().set_container(container)
        for definition in self._definitions.values():
            definition.set_container(container)
        return self

    def add(self, id: str, concrete: Any = None, overwrite: bool = False) -> Definition:
        """Register a non-shared definition for *id*.

        Args:
            id: The identifier to register.
            concrete: A :class:`Definition`, a class, a factory or a literal.
            overwrite: Replace an existing definition for *id*.

        Returns:
            The stored definition, or the existing one when *id* is already
            registered and *overwrite* is false.
        """
        if isinstance(concrete, Definition):
            definition = concrete
            definition.id = id
        else:
            definition = Definition(id, concrete)
        return self._store(definition, overwrite)

    def add_shared(self, id: str, concrete: Any = None, overwrite: bool = False) -> Definition:
        if isinstance(concrete, Definition):
            definition = concrete
            definition.id = id
        else:
            definition = Definition(id, concrete)
        definition.set_shared(True)
        return self._store(definition, overwrite)

    def _store(self, definition: Definition, overwrite: bool) -> Definition:
        existing = self._definitions.get(definition.id)
        if existing is not None and not overwrite:
            _logger.warning("Definition (%s) already registered; keeping the existing one", definition.id)
            return existing
        if existing is not None:
            self.remove(definition.id)
        if self._container is not None:
            definition.set_container(self._container)
        self._definitions[definition.id] = definition
        _logger.debug("Registered definition %r", definition)
        return definition

    def remove(self, id: str) -> None:
        self._definitions.pop(id, None)

    def has(self, id: str) -> bool:
        return id in self._definitions

    def has_tag(self, tag: str) -> bool:
        return any(d.has_tag(tag) for d in self._definitions.values())

    def get_definition(self, id: str) -> Definition:
        try:
            return self._definitions[id]
        except KeyError:
            raise NotFoundError(id, f"Alias ({id}) is not being handled as a definition") from None

    def resolve(self, id: str) -> Any:
        return self.get_definition(id).resolve()

    def resolve_new(self, id: str) -> Any:
        return self.get_definition(id).resolve_new()

    def tagged(self, tag: str) -> List[Definition]:
        return [d for d in self._definitions.values() if d.has_tag(tag)]

    def resolve_tagged(self, tag: str) -> List[Any]:
        return [d.resolve() for d in self.tagged(tag)]

    def resolve_tagged_new(self, tag: str) -> List[Any]:
        return [d.resolve_new() for d in self.tagged(tag)]
