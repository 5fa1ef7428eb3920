"""Vessel service container.

Vessel is a small service locator: a registry mapping string keys to values,
factories or providers, with multi-hop aliases and opt-in instance caching.
It performs no reflection or auto-wiring. Providers look up their own
dependencies by key, and only explicitly registered keys resolve.

Key Features:
    - Services stored verbatim, factories and providers invoked on demand
    - Aliases chaining through any number of hops, with cycle detection
    - Per-key and container-wide control over instance caching ("sharing")
    - Incremental configuration that keeps resolved aliases up to date
    - Thread-safe retrieval; shared providers run at most once

Basic Usage:
    >>> from vessel.container import Container
    >>>
    >>> container = Container()
    >>> container.service("dsn", "sqlite://")
    >>> container.factory("db", lambda c: Database(c.get("dsn")))
    >>> container.alias("database", "db")
    >>>
    >>> db = container.get("database")

The package consists of several modules:
    - container: The Container facade and retrieval logic
    - builders: Keyword-argument container construction
    - aliases: Alias edges, resolution and cycle detection
    - stores: Service, provider and shared-flag storage
    - providers: The provider protocol and factory adapter
    - domain: Key type and ContainerConfig
    - errors: Container-specific exceptions
"""
