"""A stash: a table with O(1) insertion, removal and access that reuses indices."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterator,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from inkstore.value import Flush, Value

T = TypeVar("T")

FlushCallback = Callable[[int, Dict[int, Optional[Any]]], None]


@dataclass(frozen=True)
class _Header:
    """Densely stored bookkeeping of a stash."""

    next_vacant: int = 0
    len: int = 0
    max_len: int = 0


@dataclass(frozen=True)
class _Vacant:
    next_vacant: int


@dataclass(frozen=True)
class _Occupied(Generic[T]):
    val: T


_Entry = Union[_Vacant, "_Occupied[Any]"]


class StashIter(Generic[T]):
    """Iterator over the ``(index, value)`` pairs of a stash, from both ends."""

    def __init__(self, stash: "Stash[T]") -> None:
        self._stash = stash
        self._begin = 0
        self._end = stash.max_len()
        self._yielded = 0

    def __iter__(self) -> "StashIter[T]":
        return self

    def __next__(self) -> Tuple[int, T]:
        if self._yielded == len(self._stash):
            raise StopIteration
        while self._begin < self._end:
            cur = self._begin
            self._begin += 1
            entry = self._stash._entries.get(cur)
            if isinstance(entry, _Occupied):
                self._yielded += 1
                return cur, entry.val
        raise StopIteration

    def next_back(self) -> Optional[Tuple[int, T]]:
        """Return the last remaining pair, or None when exhausted."""
        if self._yielded == len(self._stash):
            return None
        while self._begin < self._end:
            self._end -= 1
            entry = self._stash._entries.get(self._end)
            if isinstance(entry, _Occupied):
                self._yielded += 1
                return self._end, entry.val
        return None

    def __len__(self) -> int:
        return len(self._stash) - self._yielded

    def __length_hint__(self) -> int:
        return len(self)


class Stash(Flush, Generic[T]):
    """A table with deterministic index assignment that reuses freed indices.

    Indices never reach the largest number of elements ever held at once.
    Entries changed since the last ``flush`` are handed to the ``on_flush``
    callback together with the length, with ``None`` for a vacant entry.
    """

    def __init__(self, *, on_flush: Optional[FlushCallback] = None) -> None:
        self._header: Value[_Header] = Value(_Header())
        self._entries: Dict[int, _Entry] = {}
        self._dirty_entries: set = set()
        self._on_flush = on_flush

    def __len__(self) -> int:
        return self._header.get().len

    def max_len(self) -> int:
        """Return the largest number of elements ever held at the same time."""
        return self._header.get().max_len

    def is_empty(self) -> bool:
        """Return True if the stash holds no elements."""
        return len(self) == 0

    def _update_header(self, **changes: int) -> None:
        self._header.set(replace(self._header.get(), **changes))

    def _store(self, n: int, entry: _Entry) -> None:
        self._entries[n] = entry
        self._dirty_entries.add(n)

    def get(self, n: int) -> Optional[T]:
        """Return the element at index n, or None if there is none."""
        entry = self._entries.get(n)
        if isinstance(entry, _Occupied):
            return entry.val
        return None

    def put(self, val: T) -> int:
        """Store val at the next vacant index and return that index."""
        header = self._header.get()
        current = header.next_vacant
        if current == header.len:
            self._store(current, _Occupied(val))
            self._update_header(
                next_vacant=current + 1,
                len=header.len + 1,
                max_len=header.max_len + 1,
            )
        else:
            old = self._entries.get(current)
            if not isinstance(old, _Vacant):
                raise RuntimeError("next vacant index does not point to a vacant entry")
            self._store(current, _Occupied(val))
            self._update_header(next_vacant=old.next_vacant, len=header.len + 1)
        return current

    def take(self, n: int) -> Optional[T]:
        """Remove and return the element at index n, or None if there is none."""
        entry = self._entries.get(n)
        if not isinstance(entry, _Occupied):
            return None
        header = self._header.get()
        self._store(n, _Vacant(header.next_vacant))
        self._update_header(next_vacant=n, len=header.len - 1)
        return entry.val

    def iter(self) -> StashIter[T]:
        """Return an iterator over ``(index, value)`` pairs in index order."""
        return StashIter(self)

    def values(self) -> Iterator[T]:
        """Yield the stored values in index order."""
        for _index, val in self.iter():
            yield val

    def __iter__(self) -> StashIter[T]:
        return self.iter()

    def flush(self) -> None:
        """Hand the length and changed entries to the flush callback, if dirty."""
        if not self._header.dirty and not self._dirty_entries:
            return
        if self._on_flush is not None:
            changed: Dict[int, Optional[Any]] = {}
            for index in sorted(self._dirty_entries):
                entry = self._entries.get(index)
                changed[index] = entry.val if isinstance(entry, _Occupied) else None
            self._on_flush(len(self), changed)
        self._header.flush()
        self._dirty_entries.clear()

    def __repr__(self) -> str:
        pairs = ", ".join(f"{index}: {val!r}" for index, val in self.iter())
        return f"Stash({{{pairs}}})"