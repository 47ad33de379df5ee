"""A single keyed binding: its resolution strategy, singleton flag and value cache.

A binding is either built from a fixed value, in which case the value is its
resolved value from the outset, or from a resolver function that is called with the
binding's owner to produce the value on demand.

Singleton bindings keep the first value they resolve for the rest of their lifetime.
Non-singleton bindings built from a resolver produce a fresh value on each lookup,
and their cache can always be dropped with :meth:`Binding.unresolve`.
"""

import logging
import weakref
from typing import Any, Callable, Generic, Optional, TypeVar

from bindery.errors import OwnerReleased

__all__ = ["Binding", "Resolver"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

Resolver = Callable[[Any], T]
"""A function that receives the binding's owner and returns the bound value."""

_UNRESOLVED: Any = object()


class Binding(Generic[T]):
    """The resolution strategy and cached value for one container key.

    The owner is held through a weak reference so that a binding never keeps its
    container alive. Use the factory classmethods rather than the constructor where
    possible.

    Example:
        >>> binding = Binding.from_resolver(container, lambda c: Database(), True)
        >>> binding.get_resolved() is binding.get_resolved()
        True
    """

    def __init__(
        self,
        owner: Any,
        resolver: Optional[Resolver[T]] = None,
        value: Any = _UNRESOLVED,
        singleton: bool = False,
    ):
        self._owner_ref = weakref.ref(owner) if owner is not None else None
        self._resolver = resolver
        self._resolved = value
        self._singleton = singleton

    @classmethod
    def create_empty(cls, owner: Any) -> "Binding[T]":
        """Create a binding with neither a resolver nor a value."""
        return cls(owner)

    @classmethod
    def from_value(cls, owner: Any, value: T, singleton: bool = False) -> "Binding[T]":
        """Create a binding whose resolved value is ``value`` from the outset.

        Args:
            owner: The object handed to resolvers; held weakly.
            value: The value to bind. ``None`` and other falsy values are kept as is.
            singleton: Whether the value survives :meth:`unresolve`.
        """
        return cls(owner, value=value, singleton=singleton)

    @classmethod
    def from_resolver(
        cls, owner: Any, resolver: Resolver[T], singleton: bool = False
    ) -> "Binding[T]":
        """Create a binding that calls ``resolver(owner)`` to produce its value.

        Args:
            owner: The object handed to the resolver; held weakly.
            resolver: Callable taking the owner and returning the value.
            singleton: Whether the first resolved value is kept for good.
        """
        return cls(owner, resolver=resolver, singleton=singleton)

    @property
    def owner(self) -> Any:
        """The object passed to the resolver.

        Raises:
            OwnerReleased: If the owner has already been garbage collected.
        """
        if self._owner_ref is None:
            return None
        owner = self._owner_ref()
        if owner is None:
            raise OwnerReleased("The owner of this binding has been garbage collected")
        return owner

    def resolve(self) -> Optional[T]:
        """Run the resolver, if there is one, and cache its result.

        Unlike :meth:`get_resolved` this always calls the resolver again. A binding
        without a resolver returns its current value, or ``None`` if it has none.
        If the resolver raises, the exception propagates and the cached value is
        left as it was.
        """
        if self._resolver is not None:
            logger.debug(f"Invoking resolver {self._resolver!r}")
            resolved = self._resolver(self.owner)
            self._resolved = resolved
        return None if self._resolved is _UNRESOLVED else self._resolved

    def unresolve(self) -> None:
        """Drop the cached value. Singleton bindings are left untouched."""
        if self._singleton:
            return
        self._resolved = _UNRESOLVED

    def set_resolver(self, resolver: Resolver[T]) -> "Binding[T]":
        self._resolver = resolver
        return self

    def set_value(self, value: T) -> "Binding[T]":
        self._resolved = value
        return self

    def set_singleton(self, singleton: bool) -> "Binding[T]":
        self._singleton = singleton
        return self

    def is_singleton(self) -> bool:
        return self._singleton

    def is_resolved(self) -> bool:
        """Whether a value is currently cached."""
        return self._resolved is not _UNRESOLVED

    def get_resolved(self) -> Optional[T]:
        """Return the bound value, resolving it if needed.

        A cached value is returned as is for singletons and for bindings built from
        a fixed value. A non-singleton binding with a resolver is resolved afresh on
        every call, so each caller receives a new object.
        """
        if self._resolver is not None and not self._singleton:
            return self.resolve()
        if self._resolved is not _UNRESOLVED:
            return self._resolved
        return self.resolve()

    def __repr__(self) -> str:
        strategy = "resolver" if self._resolver is not None else "value"
        return (
            f"Binding(strategy={strategy}, singleton={self._singleton}, "
            f"resolved={self.is_resolved()})"
        )
