"""Service providers and the provider registry.

A service provider bundles related definitions and registers them lazily:
the container only calls :meth:`ServiceProvider.register` the first time
something asks for an identifier the provider claims.
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional, Set

from .aware import ContainerAwareMixin
from .exceptions import ContainerError, NotFoundError

_logger = logging.getLogger(__name__)


class ServiceProvider(ContainerAwareMixin):
    """Base class for lazy registration units.

    Subclasses list their identifiers in ``provided`` (or override
    :meth:`provides`) and add the matching definitions in :meth:`register`
    through :meth:`get_container`.

    Example:
        >>> class MailProvider(ServiceProvider):
        ...     provided = {"mailer"}
        ...     def register(self):
        ...         self.get_container().add_shared("mailer", SmtpMailer)
    """

    provided: Iterable[str] = ()
    identifier: Optional[str] = None
    registered: bool = False

    def get_identifier(self) -> str:
        return self.identifier or f"{type(self).__module__}.{type(self).__qualname__}"

    def set_identifier(self, identifier: str) -> "ServiceProvider":
        self.identifier = identifier
        return self

    def provides(self, id: str) -> bool:
        return id in self.provided

    def register(self) -> None:
        raise NotImplementedError


class BootableServiceProvider(ServiceProvider):
    """Service provider with an eager :meth:`boot` step.

    ``boot`` runs as soon as the provider is added to a container, while
    ``register`` stays lazy.
    """

    def boot(self) -> None:
        raise NotImplementedError


class ProviderRegistry(ContainerAwareMixin):
    """Ordered set of service providers, keyed by identifier."""

    def __init__(self) -> None:
        self._providers: List[ServiceProvider] = []
        self._registering: Set[str] = set()

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[ServiceProvider]:
        return iter(list(self._providers))

    def set_container(self, container):
        super().set_container(container)
        for provider in self._providers:
            provider.set_container(container)
        return self

    def __contains__(self, provider: Any) -> bool:
        if isinstance(provider, ServiceProvider):
            provider = provider.get_identifier()
        return any(p.get_identifier() == provider for p in self._providers)

    def add(self, provider: ServiceProvider) -> "ProviderRegistry":
        if provider in self:
            _logger.warning("Service provider (%s) already added; keeping the existing one", provider.get_identifier())
            return self
        if self._container is not None:
            provider.set_container(self._container)
        if isinstance(provider, BootableServiceProvider):
            provider.boot()
        self._providers.append(provider)
        return self

    def provides(self, id: str) -> bool:
        return any(p.provides(id) for p in self._providers)

    def register(self, id: str) -> None:
        """Run the registration of the first provider claiming *id*.

        A provider registers at most once; later calls are no-ops.

        Raises:
            NotFoundError: If no provider claims *id*.
            ContainerError: If the provider's registration asks for *id*
                again before it has finished.
        """
        provider = next((p for p in self._providers if p.provides(id)), None)
        if provider is None:
            raise NotFoundError(id, f"({id}) is not provided by a service provider")
        if provider.registered:
            return

        identifier = provider.get_identifier()
        if identifier in self._registering:
            raise ContainerError(f"Service provider ({identifier}) re-entered its own registration while providing ({id})")

        self._registering.add(identifier)
        try:
            _logger.debug("Registering service provider %s for (%s)", identifier, id)
            provider.register()
            provider.registered = True
        finally:
            self._registering.discard(identifier)
