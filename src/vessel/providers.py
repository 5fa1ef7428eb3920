"""Provider capability and the adapter that turns a factory into one.

A provider is any object exposing ``get(container)``: given read-only access
to the container it produces a value, typically by looking up its own
dependencies with ``container.get``. Providers must not register entries as
a side effect.
"""

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from vessel.domain import Key
from vessel.errors import ConfigurationError

__all__ = ["Factory", "Provider", "FactoryProvider", "as_provider", "factory_provider"]


Factory = Callable[[Any], Any]
"""A callable invoked with the container that returns a service instance."""


class Provider(Protocol):
    """Produces a value on demand, given the container for dependency lookups."""

    def get(self, container: Any) -> Any:
        ...


@dataclass(frozen=True)
class FactoryProvider:
    """Wraps a plain factory callable as a :class:`Provider`.

    Example:
        >>> provider = FactoryProvider(lambda container: Mailer(container.get("smtp")))
        >>> mailer = provider.get(container)
    """

    factory: Factory

    def get(self, container: Any) -> Any:
        return self.factory(container)


def as_provider(key: Key, candidate: Any) -> Provider:
    """Validate that ``candidate`` exposes a callable ``get``.

    Raises:
        ConfigurationError: If ``candidate`` is not usable as a provider.
    """
    if not callable(getattr(candidate, "get", None)):
        raise ConfigurationError(
            f"Provider for '{key}' must expose a callable get(container), got {candidate!r}"
        )
    return candidate


def factory_provider(key: Key, factory: Any) -> FactoryProvider:
    """Wrap ``factory`` after checking that it is callable.

    Raises:
        ConfigurationError: If ``factory`` is not callable.
    """
    if not callable(factory):
        raise ConfigurationError(f"Factory for '{key}' is not callable: {factory!r}")
    return FactoryProvider(factory)
