"""The container: configuration batches in, resolved entries out.

Entries are addressed by string keys and declared as services (stored
verbatim), factories or providers (invoked on request), or aliases of other
keys. Provider results are cached ("shared") per key unless a shared flag or
the container-wide default says otherwise. An alias and its terminal key
decide caching independently, so requesting a shared alias of an unshared
entry caches the instance under the alias only.

All mutation, including the caching writes made by :meth:`Container.get`,
happens under one lock per container. Concurrent first requests for a shared
key run its provider once and all receive the same instance.
"""

import logging
import threading
from typing import Any, Mapping, Union

from vessel.aliases import AliasGraph
from vessel.domain import ContainerConfig, Key
from vessel.errors import ConfigurationError, EntryNotFoundError
from vessel.providers import Factory, Provider, as_provider, factory_provider
from vessel.stores import EntryStores

__all__ = ["Container"]

logger = logging.getLogger(__name__)

ConfigLike = Union[ContainerConfig, Mapping[str, Any], None]


class Container:
    """Registry mapping keys to services, providers and aliases.

    Example:
        >>> container = Container({
        ...     "services": {"dsn": "sqlite://"},
        ...     "factories": {"db": lambda c: Database(c.get("dsn"))},
        ...     "aliases": {"database": "db"},
        ... })
        >>> container.get("database") is container.get("db")
        True
    """

    def __init__(self, config: ConfigLike = None):
        self._stores = EntryStores()
        self._aliases = AliasGraph(self._stores)
        self._shared_by_default = True
        self._configured = False
        self._lock = threading.RLock()
        self._flight_locks: dict[Key, threading.RLock] = {}

        self.configure(config)

    def configure(self, config: ConfigLike = None):
        """Apply a batch of declarations.

        Sections are applied in order: services, factories, providers,
        aliases, shared flags, then the container-wide default. Application
        is not transactional: when a declaration fails, those before it
        remain in place.

        Args:
            config: A :class:`ContainerConfig`, a mapping of option names, or
                ``None`` for an empty batch.

        Raises:
            DuplicateInstanceError: If a key being registered already holds
                an instance.
            CyclicAliasError: If the aliases introduce a cycle.
            ConfigurationError: If an option or registration is malformed.
        """
        config = _as_config(config)

        with self._lock:
            for key, service in (config.services or {}).items():
                self._stores.set_service(key, service)

            for key, factory in (config.factories or {}).items():
                self._stores.set_provider(key, factory_provider(key, factory))

            for key, provider in (config.providers or {}).items():
                self._stores.set_provider(key, as_provider(key, provider))

            if config.aliases:
                self._aliases.apply_batch(config.aliases, initial=not self._configured)

            for key, flag in (config.shared or {}).items():
                self._stores.set_shared_flag(key, flag)

            if config.shared_by_default is not None:
                self._shared_by_default = config.shared_by_default

            self._configured = True

        logger.debug(
            "Configured %d services, %d factories, %d providers, %d aliases, %d shared flags",
            len(config.services or {}),
            len(config.factories or {}),
            len(config.providers or {}),
            len(config.aliases or {}),
            len(config.shared or {}),
        )

    def get(self, key: Key) -> Any:
        """Retrieve the entry registered under ``key`` or the key it aliases.

        A cached instance under ``key`` itself is returned without resolving
        aliases. A shared alias whose terminal key is already cached copies
        that instance under the alias. Otherwise the terminal key's provider
        is invoked with this container, and the result cached under the
        terminal key and/or the requested alias according to their shared
        flags. An unshared alias always invokes the provider.

        Raises:
            EntryNotFoundError: If the terminal key has neither an instance
                nor a provider.
            CyclicAliasError: If ``key`` leads into an alias cycle.
        """
        with self._lock:
            if key in self._stores.services:
                return self._stores.services[key]

            final_key = self._aliases.terminal_key(key)
            is_alias = final_key != key
            is_key_shared = self._stores.is_shared(final_key, self._shared_by_default)
            cache_requested = is_alias and self._stores.is_shared(key, self._shared_by_default)

            if cache_requested and final_key in self._stores.services:
                instance = self._stores.services[final_key]
                self._stores.cache(key, instance)
                return instance

            provider = self._stores.providers.get(final_key)
            if provider is None:
                raise EntryNotFoundError(final_key)

            if not (is_key_shared or cache_requested):
                flight_lock = None
            else:
                flight_lock = self._flight_lock(final_key)

        if flight_lock is None:
            logger.debug("Providing unshared entry '%s'", final_key)
            return provider.get(self)

        with flight_lock:
            with self._lock:
                if key in self._stores.services:
                    return self._stores.services[key]
                if cache_requested and final_key in self._stores.services:
                    instance = self._stores.services[final_key]
                    self._stores.cache(key, instance)
                    return instance

            logger.debug("Providing shared entry '%s' requested as '%s'", final_key, key)
            instance = provider.get(self)

            with self._lock:
                if is_key_shared:
                    self._stores.cache(final_key, instance)
                if cache_requested:
                    self._stores.cache(key, instance)

        return instance

    def has(self, key: Key) -> bool:
        """Whether ``key``, after alias resolution, has an instance or provider.

        Never instantiates anything.

        Raises:
            CyclicAliasError: If ``key`` leads into an alias cycle.
        """
        with self._lock:
            return self._stores.is_registered(self._aliases.terminal_key(key))

    def keys(self) -> set[Key]:
        """Every key for which :meth:`has` currently answers ``True``."""
        with self._lock:
            found = set(self._stores.services) | set(self._stores.providers)
            found.update(
                alias
                for alias, terminal in self._aliases.resolved.items()
                if self._stores.is_registered(terminal)
            )
            return found

    def __getitem__(self, key: Key) -> Any:
        return self.get(key)

    def __contains__(self, key: Key) -> bool:
        return self.has(key)

    def service(self, key: Key, instance: Any):
        """Register a value returned verbatim by every ``get``."""
        self.configure(ContainerConfig(services={key: instance}))

    def provider(self, key: Key, provider: Provider):
        """Register an object whose ``get(container)`` produces the entry."""
        self.configure(ContainerConfig(providers={key: provider}))

    def factory(self, key: Key, factory: Factory):
        """Register a callable invoked with the container to produce the entry."""
        self.configure(ContainerConfig(factories={key: factory}))

    def alias(self, alias: Key, target: Key):
        """Make ``alias`` resolve to whatever ``target`` resolves to."""
        self.configure(ContainerConfig(aliases={alias: target}))

    def set_shared(self, key: Key, flag: bool):
        """Set the caching behaviour for ``key``.

        Flagging an alias does not affect the key it resolves to. Has no
        effect on entries registered as services.
        """
        self.configure(ContainerConfig(shared={key: flag}))

    @property
    def shared_by_default(self) -> bool:
        return self._shared_by_default

    @shared_by_default.setter
    def shared_by_default(self, flag: bool):
        with self._lock:
            self._shared_by_default = flag

    def get_shared_by_default(self) -> bool:
        return self.shared_by_default

    def set_shared_by_default(self, flag: bool):
        self.shared_by_default = flag

    def _flight_lock(self, key: Key) -> threading.RLock:
        # Caller holds self._lock. At most one lock per registered provider
        # key; locks live as long as the container.
        lock = self._flight_locks.get(key)
        if lock is None:
            lock = self._flight_locks[key] = threading.RLock()
        return lock


def _as_config(config: ConfigLike) -> ContainerConfig:
    if config is None:
        return ContainerConfig()
    if isinstance(config, ContainerConfig):
        return config
    if not isinstance(config, Mapping):
        raise ConfigurationError(f"Expected a ContainerConfig or mapping, got {config!r}")
    return ContainerConfig.from_mapping(config)
