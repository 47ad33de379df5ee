"""The container: a registry of keyed bindings and the rules for overwriting them."""

import logging
from typing import Any, Callable, Iterator, Optional

from bindery.binding import Binding, Resolver
from bindery.errors import BindingNotFound

__all__ = ["Container", "inferred_key"]

logger = logging.getLogger(__name__)

_NO_DEFAULT: Any = object()


def inferred_key(func: Callable) -> str:
    """Derive a binding key from a function name, removing a 'make_' prefix if present.

    Example:
        >>> inferred_key(make_database)  # Returns "database"
        >>> inferred_key(mailer)         # Returns "mailer"
    """
    if func.__name__.startswith("make_"):
        return func.__name__[5:]
    else:
        return func.__name__


class Container:
    """Registry mapping string keys to bindings.

    Once a key holds a singleton binding it can no longer be re-registered: further
    registrations under that key are ignored and return the existing binding.
    Non-singleton bindings are replaced by each new registration.

    Args:
        owner: The object passed to resolvers. Defaults to the container itself; pass
            another object when the class that resolvers expect cannot extend
            Container. It must support weak references.
        strict: If True, :meth:`get` raises :class:`BindingNotFound` for unknown keys
            when no default is given; if False it returns None.

    Example:
        >>> container = Container()
        >>> container.singleton("db", lambda c: Database(c.get("dsn")))
        >>> container.instance("dsn", "sqlite://")
        >>> container.get("db") is container.get("db")
        True
    """

    def __init__(self, owner: Optional[Any] = None, strict: bool = True):
        self._owner = owner
        self._strict = strict
        self._bindings: dict[str, Binding] = {}

    @property
    def owner(self) -> Any:
        """The object passed to resolvers registered on this container."""
        return self._owner if self._owner is not None else self

    def register_singleton(self, key: str, resolver: Resolver) -> Binding:
        """Bind ``key`` to a resolver whose first result is kept for good."""
        return self.register(key, resolver, True)

    def register(self, key: str, resolver: Resolver, singleton: bool = False) -> Binding:
        """Bind ``key`` to a resolver that is called lazily with the owner.

        Args:
            key: The key to bind.
            resolver: Callable taking the owner and returning the value.
            singleton: Whether the first resolved value is kept for good.

        Returns:
            The binding now stored under ``key``, which is the existing one if the key
            already held a singleton.
        """
        return self._store(
            key, lambda: Binding.from_resolver(self.owner, resolver, singleton)
        )

    def register_value(self, key: str, value: Any, singleton: bool = False) -> Binding:
        """Bind ``key`` to a fixed value.

        Args:
            key: The key to bind.
            value: The object returned on lookup.
            singleton: Whether the key is locked against re-registration.

        Returns:
            The binding now stored under ``key``.
        """
        return self._store(
            key, lambda: Binding.from_value(self.owner, value, singleton)
        )

    tie = register
    singleton = register_singleton
    instance = register_value

    def provides(self, key: Optional[str] = None, singleton: bool = False) -> Callable:
        """Decorator to register a function as the resolver for a key.

        Args:
            key: Optional key; defaults to the function name with any 'make_' prefix
                removed.
            singleton: Whether the first resolved value is kept for good.

        Returns:
            A decorator that registers the function and returns it unchanged.

        Example:
            @container.provides(singleton=True)
            def make_mailer(container) -> Mailer:
                return Mailer(container.get("smtp_host"))
        """

        def decorator(func: Callable) -> Callable:
            self.register(key or inferred_key(func), func, singleton)
            return func

        return decorator

    def get(self, key: str, default: Any = _NO_DEFAULT) -> Any:
        """Return the resolved value bound to ``key``.

        Args:
            key: The key to look up.
            default: Returned when ``key`` is not registered. If omitted, a strict
                container raises and a lenient one returns None.

        Raises:
            BindingNotFound: If the key is unregistered, no default was given and the
                container is strict.
        """
        if key in self._bindings:
            return self._bindings[key].get_resolved()
        if default is not _NO_DEFAULT:
            return default
        if self._strict:
            raise BindingNotFound(key)
        return None

    def binding(self, key: str) -> Binding:
        """Return the binding object stored under ``key`` without resolving it."""
        try:
            return self._bindings[key]
        except KeyError:
            raise BindingNotFound(key) from None

    def keys(self) -> list[str]:
        return list(self._bindings)

    def _store(self, key: str, make_binding: Callable[[], Binding]) -> Binding:
        existing = self._bindings.get(key)
        if existing is not None and existing.is_singleton():
            logger.debug(f"Key '{key}' is bound as a singleton; ignoring re-registration")
            return existing

        binding = make_binding()
        self._bindings[key] = binding
        logger.debug(f"Registered {binding!r} under key '{key}'")
        return binding

    def __getitem__(self, key: str) -> Any:
        return self.binding(key).get_resolved()

    def __contains__(self, key: str) -> bool:
        return key in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)
