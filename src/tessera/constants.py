"""Constants used throughout the tessera registry.

This module defines the framework logger and the defaults backing
:class:`~tessera.config.ContainerConfig`.
"""

import logging

LOGGER_NAME: str = "tessera"
"""Default logger name for the tessera registry."""

LOGGER: logging.Logger = logging.getLogger(LOGGER_NAME)
"""Pre-configured logger instance for tessera internal diagnostics."""

DEFAULT_TO_SHARED: bool = False
"""Whether a bare ``add`` registers a shared definition by default."""

DEFAULT_TO_OVERWRITE: bool = False
"""Whether registrations replace existing definitions by default."""

MAX_PROVIDER_DEPTH: int = 8
"""Upper bound on nested service provider registrations."""
