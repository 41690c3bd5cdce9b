"""Container configuration.

:class:`ContainerConfig` replaces loose boolean toggles with one immutable
object. :func:`configuration` assembles it from sources, each of which
reads and validates the ``ContainerConfig`` fields on its own terms.
"""

import json
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from .constants import DEFAULT_TO_OVERWRITE, DEFAULT_TO_SHARED, MAX_PROVIDER_DEPTH
from .exceptions import ConfigurationError

SECTION = "tessera"


@dataclass(frozen=True)
class ContainerConfig:
    """Immutable registration defaults for a :class:`~tessera.Container`.

    Attributes:
        default_to_shared: A bare ``add`` registers a shared definition.
        default_to_overwrite: Every registration replaces an existing
            definition, as if ``overwrite=True`` were passed.
        max_provider_depth: How deeply service provider registrations may
            nest (a provider whose ``register`` fetches an identifier owned
            by another, not yet registered provider) before the container
            gives up.
    """

    default_to_shared: bool = DEFAULT_TO_SHARED
    default_to_overwrite: bool = DEFAULT_TO_OVERWRITE
    max_provider_depth: int = MAX_PROVIDER_DEPTH

    def __post_init__(self) -> None:
        if self.max_provider_depth < 1:
            raise ConfigurationError(f"max_provider_depth must be positive, got {self.max_provider_depth}")

    def with_values(self, **changes: Any) -> "ContainerConfig":
        return replace(self, **changes)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    raise ValueError("invalid boolean")


def _parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("invalid integer")
    return int(value)


_PARSERS: Dict[type, Callable[[Any], Any]] = {bool: _parse_bool, int: _parse_int}


class ConfigSource:
    """Base class for configuration sources.

    Subclasses implement :meth:`lookup` for a single field name; :meth:`load`
    parses every ``ContainerConfig`` field the source defines.
    """

    def lookup(self, name: str) -> Any:
        """Return the raw value for field *name*, or ``None`` when unset."""
        raise NotImplementedError

    def load(self) -> Dict[str, Any]:
        """Return the typed values this source defines.

        Raises:
            ConfigurationError: If a value cannot be parsed for its field.
        """
        values: Dict[str, Any] = {}
        for f in fields(ContainerConfig):
            raw = self.lookup(f.name)
            if raw is None:
                continue
            try:
                values[f.name] = _PARSERS[f.type](raw)
            except (TypeError, ValueError):
                raise ConfigurationError(f"Invalid {f.type.__name__} for {f.name} in {self!r}: {raw!r}") from None
        return values


class EnvSource(ConfigSource):
    """Reads ``<prefix><FIELD>`` environment variables.

    Example:
        >>> EnvSource(environ={"TESSERA_DEFAULT_TO_SHARED": "yes"}).load()
        {'default_to_shared': True}
    """

    def __init__(self, prefix: str = "TESSERA_", environ: Optional[Mapping[str, str]] = None) -> None:
        self.prefix = prefix
        self._environ = environ

    def __repr__(self) -> str:
        return f"EnvSource(prefix={self.prefix!r})"

    def lookup(self, name: str) -> Any:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(self.prefix + name.upper())


class MappingSource(ConfigSource):
    """Reads fields from a mapping, or from its ``tessera`` section if present."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        section = data.get(SECTION)
        self._data = section if isinstance(section, Mapping) else data

    def __repr__(self) -> str:
        return "MappingSource(...)"

    def lookup(self, name: str) -> Any:
        return self._data.get(name)


class FileSource(MappingSource):
    """Reads fields from a JSON file, or a YAML file (``.yaml``/``.yml``).

    YAML requires ``PyYAML`` (``pip install tessera[yaml]``).

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or does not
            hold a mapping.
    """

    def __init__(self, path: str) -> None:
        self.path = str(path)
        super().__init__(self._read())

    def __repr__(self) -> str:
        return f"FileSource({self.path!r})"

    def _read(self) -> Mapping[str, Any]:
        is_yaml = self.path.endswith((".yaml", ".yml"))
        try:
            with open(self.path, encoding="utf-8") as f:
                if is_yaml:
                    data = _load_yaml(f)
                else:
                    data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Failed to load config file {self.path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Config file {self.path} must contain a mapping")
        return data


def _load_yaml(stream: Any) -> Any:
    try:
        import yaml
    except ImportError:
        raise ConfigurationError("PyYAML not installed")
    try:
        return yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise ValueError(str(e)) from e


def configuration(*sources: ConfigSource, overrides: Optional[Mapping[str, Any]] = None) -> ContainerConfig:
    """Build a :class:`ContainerConfig` from one or more sources.

    Precedence, highest first: *overrides*, then *sources* in the order
    given, then the built-in defaults.

    Raises:
        ConfigurationError: For an unknown source type or an invalid value.

    Example:
        >>> cfg = configuration(EnvSource(), FileSource("tessera.yaml"), overrides={"default_to_shared": True})
    """
    chain = list(sources)
    if overrides:
        chain.insert(0, MappingSource(overrides))

    values: Dict[str, Any] = {}
    for src in reversed(chain):
        if not isinstance(src, ConfigSource):
            raise ConfigurationError(f"Unknown configuration source type: {type(src)}")
        values.update(src.load())
    return ContainerConfig(**values)
