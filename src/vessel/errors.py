"""Exceptions raised by the container."""

__all__ = [
    "ContainerError",
    "DuplicateInstanceError",
    "CyclicAliasError",
    "EntryNotFoundError",
    "ConfigurationError",
]


class ContainerError(Exception):
    """Base class for every error raised by the container."""

    pass


class DuplicateInstanceError(ContainerError):
    """Raised when registering against a key that already holds an instance."""

    def __init__(self, key: str):
        super().__init__(f"An instance of '{key}' entry already exists.")
        self.key = key


class CyclicAliasError(ContainerError):
    """Raised when a key reappears in its own alias chain."""

    def __init__(self, key: str):
        super().__init__(f"Cyclic alias '{key}'.")
        self.key = key


class EntryNotFoundError(ContainerError, KeyError):
    """Raised when a resolved key has neither an instance nor a provider."""

    def __init__(self, key: str):
        super().__init__(f"Entry '{key}' not found.")
        self.key = key

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ConfigurationError(ContainerError, TypeError):
    """Raised for malformed registrations or unknown configuration options."""

    pass
