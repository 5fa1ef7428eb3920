"""Domain models used throughout the container."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from vessel.errors import ConfigurationError

__all__ = ["Key", "ContainerConfig"]


Key = str
"""Type alias for entry keys.

Keys are opaque strings. No namespacing or structure is implied, and an
alias may point at a key that has not been registered (yet).
"""


_OPTION_NAMES = {
    "services": "services",
    "factories": "factories",
    "providers": "providers",
    "aliases": "aliases",
    "shared": "shared",
    "shared_by_default": "shared_by_default",
    "sharedByDefault": "shared_by_default",
}


@dataclass(frozen=True)
class ContainerConfig:
    """A batch of declarations applied to a container in one pass.

    Every field is optional. Sections are applied in declaration order:
    services, factories, providers, aliases, shared flags, and finally the
    container-wide default.

    Attributes:
        services: Values stored verbatim and returned as-is by ``get``.
        factories: Single-argument callables, invoked with the container.
        providers: Objects exposing ``get(container)``.
        aliases: Mapping of alias key to target key.
        shared: Per-key caching overrides.
        shared_by_default: Container-wide caching default. ``None`` leaves
            the current default unchanged.

    Example:
        >>> ContainerConfig(
        ...     factories={"db": lambda c: Database(c.get("dsn"))},
        ...     services={"dsn": "sqlite://"},
        ...     aliases={"database": "db"},
        ... )
    """

    services: Optional[Mapping[Key, Any]] = None
    factories: Optional[Mapping[Key, Any]] = None
    providers: Optional[Mapping[Key, Any]] = None
    aliases: Optional[Mapping[Key, Key]] = None
    shared: Optional[Mapping[Key, bool]] = None
    shared_by_default: Optional[bool] = None

    @staticmethod
    def from_mapping(options: Mapping[str, Any]) -> "ContainerConfig":
        """Build a config from a plain mapping of option names.

        Both the field names and the camelCase ``sharedByDefault`` spelling
        are accepted.

        Raises:
            ConfigurationError: If an option name is not recognised.
        """
        unknown = [name for name in options if name not in _OPTION_NAMES]
        if unknown:
            raise ConfigurationError(f"Unknown configuration options: {sorted(unknown)}")

        return ContainerConfig(**{
            _OPTION_NAMES[name]: value for name, value in options.items()
        })
