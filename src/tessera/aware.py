"""Container-aware capability.

Components that need to reach back into the container that owns them (to
resolve arguments, or to register definitions) implement
:class:`ContainerAware`. The container offers itself to such components via
``set_container`` whenever it adopts them.
"""

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

from .exceptions import ContainerError

if TYPE_CHECKING:
    from .container import Container


@runtime_checkable
class ContainerAware(Protocol):
    """Protocol for objects that can be attached to a container."""

    def set_container(self, container: Any) -> Any: ...

    def get_container(self) -> Any: ...


class ContainerAwareMixin:
    """Default :class:`ContainerAware` implementation.

    Stores a reference to the owning container. The reference is non-owning:
    the container never destroys the objects it has been attached to.
    """

    _container: Optional["Container"] = None

    def set_container(self, container: "Container"):
        self._container = container
        return self

    def get_container(self) -> "Container":
        """Return the attached container.

        Raises:
            ContainerError: If no container has been attached yet.
        """
        if self._container is None:
            raise ContainerError(f"No container has been set for {type(self).__name__}")
        return self._container

    def has_container(self) -> bool:
        return self._container is not None
