# tessera/__init__.py
__version__ = "0.1.0"

from .aware import ContainerAware, ContainerAwareMixin
from .config import ConfigSource, ContainerConfig, EnvSource, FileSource, MappingSource, configuration
from .container import Container
from .definition import Definition, DefinitionRegistry, LiteralArgument, ResolvableArgument
from .delegates import DelegateChain
from .exceptions import ConfigurationError, ContainerError, NotFoundError, TesseraError
from .inflector import Inflector, InflectorRegistry
from .provider import BootableServiceProvider, ProviderRegistry, ServiceProvider

__all__ = [
    "__version__",
    "Container",
    "ContainerConfig",
    "configuration",
    "ConfigSource",
    "EnvSource",
    "MappingSource",
    "FileSource",
    "Definition",
    "DefinitionRegistry",
    "LiteralArgument",
    "ResolvableArgument",
    "Inflector",
    "InflectorRegistry",
    "ServiceProvider",
    "BootableServiceProvider",
    "ProviderRegistry",
    "DelegateChain",
    "ContainerAware",
    "ContainerAwareMixin",
    "TesseraError",
    "ContainerError",
    "NotFoundError",
    "ConfigurationError",
]
