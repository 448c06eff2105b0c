"""Typed values held in storage with write-back caching."""

from __future__ import annotations

import abc
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class Flush(abc.ABC):
    """Something that keeps cached state which must be written back to storage."""

    @abc.abstractmethod
    def flush(self) -> None:
        """Write any cached state back to storage."""


def _plain(other: Any) -> Any:
    return other.get() if isinstance(other, Value) else other


class Value(Flush, Generic[T]):
    """A storage value that behaves like the value it wraps.

    Writes are cached and marked dirty; ``flush`` hands a dirty value to the
    ``on_flush`` callback, if one was given, and marks it clean again.
    """

    __slots__ = ("_value", "_dirty", "_on_flush")

    def __init__(
        self,
        value: Any = _UNSET,
        *,
        on_flush: Optional[Callable[[T], None]] = None,
    ) -> None:
        self._value = value
        self._dirty = value is not _UNSET
        self._on_flush = on_flush

    @property
    def dirty(self) -> bool:
        """True if the cached value has not been flushed yet."""
        return self._dirty

    def get(self) -> T:
        """Return the wrapped value; raise LookupError if none was ever set."""
        if self._value is _UNSET:
            raise LookupError("storage value has not been initialised")
        return self._value

    def set(self, val: T) -> None:
        """Replace the wrapped value."""
        self._value = val
        self._dirty = True

    def mutate_with(self, f: Callable[[T], Optional[T]]) -> T:
        """Mutate the wrapped value with f and return the result.

        f may change the value in place, or return a new value to store.
        """
        current = self.get()
        result = f(current)
        if result is not None:
            current = result
        self.set(current)
        return current

    def flush(self) -> None:
        """Write a dirty value to the flush callback and mark it clean."""
        if not self._dirty:
            return
        if self._on_flush is not None:
            self._on_flush(self._value)
        self._dirty = False

    def _apply(self, op: Callable[[Any, Any], Any], other: Any) -> "Value[T]":
        rhs = _plain(other)
        self.mutate_with(lambda current: op(current, rhs))
        return self

    # Binary operators yield plain results, like the wrapped type does.
    def __add__(self, other: Any) -> Any:
        return self.get() + _plain(other)

    def __sub__(self, other: Any) -> Any:
        return self.get() - _plain(other)

    def __mul__(self, other: Any) -> Any:
        return self.get() * _plain(other)

    def __floordiv__(self, other: Any) -> Any:
        return self.get() // _plain(other)

    def __truediv__(self, other: Any) -> Any:
        return self.get() / _plain(other)

    def __mod__(self, other: Any) -> Any:
        return self.get() % _plain(other)

    def __and__(self, other: Any) -> Any:
        return self.get() & _plain(other)

    def __or__(self, other: Any) -> Any:
        return self.get() | _plain(other)

    def __xor__(self, other: Any) -> Any:
        return self.get() ^ _plain(other)

    def __lshift__(self, other: Any) -> Any:
        return self.get() << _plain(other)

    def __rshift__(self, other: Any) -> Any:
        return self.get() >> _plain(other)

    # In-place operators update the stored value.
    def __iadd__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a + b, other)

    def __isub__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a - b, other)

    def __imul__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a * b, other)

    def __ifloordiv__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a // b, other)

    def __itruediv__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a / b, other)

    def __imod__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a % b, other)

    def __iand__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a & b, other)

    def __ior__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a | b, other)

    def __ixor__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a ^ b, other)

    def __ilshift__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a << b, other)

    def __irshift__(self, other: Any) -> "Value[T]":
        return self._apply(lambda a, b: a >> b, other)

    def __neg__(self) -> Any:
        return -self.get()

    def __invert__(self) -> Any:
        return ~self.get()

    def __getitem__(self, index: Any) -> Any:
        return self.get()[index]

    def __eq__(self, other: object) -> bool:
        return self.get() == _plain(other)

    def __lt__(self, other: Any) -> bool:
        return self.get() < _plain(other)

    def __le__(self, other: Any) -> bool:
        return self.get() <= _plain(other)

    def __gt__(self, other: Any) -> bool:
        return self.get() > _plain(other)

    def __ge__(self, other: Any) -> bool:
        return self.get() >= _plain(other)

    def __hash__(self) -> int:
        return hash(self.get())

    def __str__(self) -> str:
        return str(self.get())

    def __repr__(self) -> str:
        if self._value is _UNSET:
            return "Value(<unset>)"
        return f"Value({self._value!r})"