"""High level entry point for constructing containers."""

from typing import Any, Mapping, Optional

from vessel.container import Container
from vessel.domain import ContainerConfig, Key

__all__ = ["make_container"]


def make_container(
    services: Optional[Mapping[Key, Any]] = None,
    factories: Optional[Mapping[Key, Any]] = None,
    providers: Optional[Mapping[Key, Any]] = None,
    aliases: Optional[Mapping[Key, Key]] = None,
    shared: Optional[Mapping[Key, bool]] = None,
    shared_by_default: Optional[bool] = None,
) -> Container:
    """Construct a :class:`Container` configured with the given declarations.

    Args:
        services: Values stored verbatim.
        factories: Callables invoked with the container to produce entries.
        providers: Objects exposing ``get(container)``.
        aliases: Mapping of alias key to target key.
        shared: Per-key caching overrides.
        shared_by_default: Container-wide caching default; ``True`` if omitted.

    Returns:
        The configured :class:`Container`.

    Raises:
        DuplicateInstanceError: If a key is registered as a service and again
            as anything else.
        CyclicAliasError: If the aliases contain a cycle.
        ConfigurationError: If a factory or provider is malformed.

    Example:
        >>> container = make_container(
        ...     services={"greeting": "Hello"},
        ...     factories={"greeter": lambda c: lambda name: f"{c['greeting']} {name}"},
        ...     shared={"greeter": False},
        ... )
        >>> container["greeter"]("Dominic")
        'Hello Dominic'
    """
    return Container(
        ContainerConfig(
            services=services,
            factories=factories,
            providers=providers,
            aliases=aliases,
            shared=shared,
            shared_by_default=shared_by_default,
        )
    )
