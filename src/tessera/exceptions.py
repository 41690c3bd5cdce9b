"""Exception hierarchy for tessera.

All registry-specific exceptions inherit from :class:`TesseraError`, making
it easy to catch any tessera error with a single ``except TesseraError``
clause.
"""

from typing import Any


class TesseraError(Exception):
    """Base exception for all tessera errors."""

    pass


class ContainerError(TesseraError):
    """Raised when the container detects a broken contract.

    Typical triggers are a service provider that claims an identifier but
    does not register it, or a provider chain that never settles.
    """

    def __init__(self, msg: str):
        super().__init__(msg)


class NotFoundError(ContainerError):
    """Raised when no source can supply a requested identifier.

    Attributes:
        id: The identifier that could not be found.
    """

    def __init__(self, id: Any, msg: str | None = None):
        super().__init__(msg or f"Alias ({id}) is not being managed by the container or delegates")
        self.id = id


class ConfigurationError(TesseraError):
    """Raised for configuration problems (invalid values, unreadable sources)."""

    def __init__(self, msg: str):
        super().__init__(msg)
