"""The container: registration API and the resolution chain.

Lookups walk a fixed chain: direct definitions, tags, service providers,
then delegates. Every value that leaves the container passes through the
inflectors.
"""

from typing import Any, Callable, Optional

from .aware import ContainerAware
from .config import ContainerConfig
from .constants import LOGGER
from .definition import Definition, DefinitionRegistry
from .delegates import DelegateChain, Registry
from .exceptions import ContainerError, NotFoundError
from .inflector import Inflector, InflectorRegistry
from .provider import ProviderRegistry, ServiceProvider


def _unchanged(value: Any) -> Any:
    return value


class Container:
    """Inversion-of-control registry.

    Args:
        definitions: Definition registry to use (a fresh one by default).
        providers: Service provider registry to use.
        inflectors: Inflector registry to use.
        config: Registration defaults; see :class:`ContainerConfig`.

    Example:
        >>> c = Container()
        >>> _ = c.add_shared("config", dict)
        >>> c.get("config") is c.get("config")
        True
    """

    def __init__(
        self,
        definitions: Optional[DefinitionRegistry] = None,
        providers: Optional[ProviderRegistry] = None,
        inflectors: Optional[InflectorRegistry] = None,
        config: Optional[ContainerConfig] = None,
    ) -> None:
        self.definitions = definitions if definitions is not None else DefinitionRegistry()
        self.providers = providers if providers is not None else ProviderRegistry()
        self.inflectors = inflectors if inflectors is not None else InflectorRegistry()
        self.delegates = DelegateChain()
        self.config = config or ContainerConfig()
        self._provider_depth = 0

        for component in (self.definitions, self.providers, self.inflectors):
            if isinstance(component, ContainerAware):
                component.set_container(self)

    def add(self, id: str, concrete: Any = None, overwrite: bool = False) -> Definition:
        """Register *id*, shared when the container defaults to shared.

        Args:
            id: Identifier to register.
            concrete: Class, factory, literal or :class:`Definition`;
                defaults to *id*.
            overwrite: Replace an existing definition; always on when the
                container defaults to overwrite.

        Returns:
            The definition, for further configuration. When *id* is already
            registered and no overwrite applies, the existing definition.
        """
        overwrite = overwrite or self.config.default_to_overwrite
        concrete = id if concrete is None else concrete

        if self.config.default_to_shared:
            return self.add_shared(id, concrete, overwrite)

        return self.definitions.add(id, concrete, overwrite)

    def add_shared(self, id: str, concrete: Any = None, overwrite: bool = False) -> Definition:
        overwrite = overwrite or self.config.default_to_overwrite
        concrete = id if concrete is None else concrete
        return self.definitions.add_shared(id, concrete, overwrite)

    def default_to_shared(self, shared: bool = True) -> "Container":
        self.config = self.config.with_values(default_to_shared=shared)
        return self

    def default_to_overwrite(self, overwrite: bool = True) -> "Container":
        self.config = self.config.with_values(default_to_overwrite=overwrite)
        return self

    def extend(self, id: str) -> Definition:
        """Return the definition for *id* so it can be modified.

        A service provider claiming *id* is registered first, so lazily
        declared definitions can be extended too.

        Raises:
            NotFoundError: If *id* is not managed as a definition.
        """
        if self.providers.provides(id):
            self._register_provider(id)

        if self.definitions.has(id):
            return self.definitions.get_definition(id)

        raise NotFoundError(id, f"Unable to extend alias ({id}) as it is not being managed as a definition")

    def add_service_provider(self, provider: ServiceProvider) -> "Container":
        self.providers.add(provider)
        return self

    def get(self, id: str) -> Any:
        return self._resolve(id)

    def get_new(self, id: str) -> Any:
        return self._resolve(id, new=True)

    def get_uninflected(self, id: str) -> Any:
        """Resolve *id* without running inflectors.

        Alias definitions use this so the aliased value is inflected once,
        when it leaves the container under the alias. Tag members are still
        inflected, since under the alias only the list itself passes through
        the inflectors again.
        """
        return self._resolve(id, inflect=False)

    def has(self, id: str) -> bool:
        if self.definitions.has(id):
            return True
        if self.definitions.has_tag(id):
            return True
        if self.providers.provides(id):
            return True
        return self.delegates.has(id)

    def __contains__(self, id: str) -> bool:
        return self.has(id)

    def inflector(self, type: Any, callback: Optional[Callable[[Any], Any]] = None) -> Inflector:
        return self.inflectors.add(type, callback)

    def delegate(self, registry: Registry) -> "Container":
        """Append *registry* as a fallback source.

        A container-aware delegate is handed this container so it can
        resolve its own dependencies through it.
        """
        self.delegates.append(registry)

        if isinstance(registry, ContainerAware):
            registry.set_container(self)

        return self

    def _resolve(self, id: str, new: bool = False, inflect: bool = True) -> Any:
        finish = self.inflectors.inflect if inflect else _unchanged
        while True:
            if self.definitions.has(id):
                resolved = self.definitions.resolve_new(id) if new else self.definitions.resolve(id)
                return finish(resolved)

            if self.definitions.has_tag(id):
                tagged = self.definitions.resolve_tagged_new(id) if new else self.definitions.resolve_tagged(id)
                return [self.inflectors.inflect(resolved) for resolved in tagged]

            if not self.providers.provides(id):
                break

            self._register_provider(id)

            if not self.definitions.has(id) and not self.definitions.has_tag(id):
                raise ContainerError(f"Service provider lied about providing ({id}) service")

        delegate = self.delegates.find(id)
        if delegate is not None:
            LOGGER.debug("Resolving (%s) through delegate %s", id, type(delegate).__name__)
            return finish(delegate.get(id))

        raise NotFoundError(id)

    def _register_provider(self, id: str) -> None:
        limit = self.config.max_provider_depth
        if self._provider_depth >= limit:
            raise ContainerError(f"Gave up resolving ({id}): service provider registrations nested deeper than {limit}")
        self._provider_depth += 1
        try:
            self.providers.register(id)
        finally:
            self._provider_depth -= 1

