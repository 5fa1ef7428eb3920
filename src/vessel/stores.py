"""Key-addressed storage for service instances, providers and shared flags.

The stores carry no retrieval logic. They only enforce the one uniqueness
rule the container relies on: nothing may be registered against a key that
already holds an instance.
"""

from typing import Any

from vessel.domain import Key
from vessel.errors import DuplicateInstanceError
from vessel.providers import Provider

__all__ = ["EntryStores"]


class EntryStores:
    """The three independent key-to-value mappings behind a container.

    Attributes:
        services: Instances, either registered directly or cached by ``get``.
            Values are never inspected or mutated.
        providers: Registered providers, keyed by the entry they produce.
        shared: Per-key caching overrides.
    """

    def __init__(self):
        self.services: dict[Key, Any] = {}
        self.providers: dict[Key, Provider] = {}
        self.shared: dict[Key, bool] = {}

    def assert_no_instance(self, key: Key):
        """Fail if ``key`` holds a registered or cached instance.

        This always fails for keys registered as services. For providers it
        fails once the entry has been requested and cached.

        Raises:
            DuplicateInstanceError: If an instance exists under ``key``.
        """
        if key in self.services:
            raise DuplicateInstanceError(key)

    def set_service(self, key: Key, value: Any):
        self.assert_no_instance(key)
        self.services[key] = value

    def set_provider(self, key: Key, provider: Provider):
        self.assert_no_instance(key)
        self.providers[key] = provider

    def set_shared_flag(self, key: Key, flag: bool):
        self.shared[key] = flag

    def cache(self, key: Key, instance: Any):
        """Store an instance produced during retrieval, bypassing the guard."""
        self.services[key] = instance

    def is_shared(self, key: Key, default: bool) -> bool:
        return self.shared.get(key, default)

    def is_registered(self, key: Key) -> bool:
        return key in self.services or key in self.providers
