"""Bindery: a minimal inversion-of-control container.

Bindery maps string keys to lazily resolved values. Register how to build a
component once, then look up the current instance wherever it is needed, without
the caller knowing whether it gets a fresh object, a cached singleton or a fixed
value.

Key Features:
    - Resolver functions called lazily with the owning container
    - Singleton bindings that resolve once and refuse re-registration
    - Fixed-value bindings that need no resolver at all
    - Strict or lenient lookup of unregistered keys

Basic Usage:
    >>> from bindery import Container
    >>>
    >>> container = Container()
    >>> container.register_value("dsn", "sqlite://")
    >>> container.register_singleton("db", lambda c: Database(c.get("dsn")))
    >>>
    >>> db = container.get("db")

The package consists of:
    - container: The key-to-binding registry and its overwrite rules
    - binding: Per-key resolution strategy and value cache
    - errors: Package-specific exceptions
"""

from bindery.binding import Binding, Resolver
from bindery.container import Container, inferred_key
from bindery.errors import BindingNotFound, ContainerError, OwnerReleased

__all__ = [
    "Binding",
    "BindingNotFound",
    "Container",
    "ContainerError",
    "OwnerReleased",
    "Resolver",
    "inferred_key",
]
