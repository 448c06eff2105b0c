"""A growable array whose elements live in contiguous storage cells."""

from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Iterator, Optional, TypeVar

from inkstore.value import Flush, Value

T = TypeVar("T")

MAX_LEN = (1 << 32) - 1

_MISSING: Any = object()

FlushCallback = Callable[[int, Dict[int, Any]], None]


class _VecIter(Generic[T]):
    """Iterator over the elements of a storage vector; knows its length."""

    def __init__(self, vec: "StorageVec[T]", reverse: bool) -> None:
        self._vec = vec
        self._begin = 0
        self._end = len(vec)
        self._reverse = reverse

    def __iter__(self) -> "_VecIter[T]":
        return self

    def __next__(self) -> T:
        if self._begin >= self._end:
            raise StopIteration
        if self._reverse:
            self._end -= 1
            index = self._end
        else:
            index = self._begin
            self._begin += 1
        item = self._vec._fetch(index)
        if item is _MISSING:
            raise StopIteration
        return item

    def __len__(self) -> int:
        return self._end - self._begin

    def __length_hint__(self) -> int:
        return len(self)


class StorageVec(Flush, Generic[T]):
    """A contiguous growable array of up to 2**32 - 1 elements.

    Elements are kept in cells indexed from zero. Cells changed since the
    last ``flush`` are handed to the ``on_flush`` callback together with the
    length, with ``None`` for a cell that was cleared.
    """

    def __init__(self, *, on_flush: Optional[FlushCallback] = None) -> None:
        self._len: Value[int] = Value(0)
        self._cells: Dict[int, T] = {}
        self._dirty_cells: set = set()
        self._on_flush = on_flush

    def __len__(self) -> int:
        return self._len.get()

    def is_empty(self) -> bool:
        """Return True if the vector holds no elements."""
        return len(self) == 0

    def _within_bounds(self, n: int) -> bool:
        return 0 <= n < len(self)

    def _fetch(self, n: int) -> Any:
        if not self._within_bounds(n):
            return _MISSING
        return self._cells.get(n, _MISSING)

    def _store(self, n: int, val: T) -> None:
        self._cells[n] = val
        self._dirty_cells.add(n)

    def _take(self, n: int) -> Any:
        self._dirty_cells.add(n)
        return self._cells.pop(n, _MISSING)

    def get(self, n: int) -> Optional[T]:
        """Return the n-th element, or None if n is out of bounds."""
        item = self._fetch(n)
        return None if item is _MISSING else item

    def __getitem__(self, n: int) -> T:
        item = self._fetch(n)
        if item is _MISSING:
            raise IndexError(f"index {n} out of bounds")
        return item

    def __setitem__(self, n: int, val: T) -> None:
        if not self._within_bounds(n):
            raise IndexError(f"index {n} out of bounds")
        self._store(n, val)

    def mutate(self, n: int, f: Callable[[T], Optional[T]]) -> Optional[T]:
        """Mutate the n-th element with f and return the result.

        f may change the element in place or return a new element to store.
        Returns None without calling f if n is out of bounds.
        """
        current = self._fetch(n)
        if current is _MISSING:
            return None
        result = f(current)
        if result is not None:
            current = result
        self._store(n, current)
        return current

    def push(self, val: T) -> None:
        """Append an element; raise OverflowError if the vector is full."""
        last_index = len(self)
        if last_index == MAX_LEN:
            raise OverflowError("cannot push more elements than 2**32 - 1")
        self._len.set(last_index + 1)
        self._store(last_index, val)

    def pop(self) -> Optional[T]:
        """Remove the last element and return it, or None if empty."""
        if self.is_empty():
            return None
        last_index = len(self) - 1
        self._len.set(last_index)
        item = self._take(last_index)
        return None if item is _MISSING else item

    def replace(self, n: int, f: Callable[[], T]) -> Optional[T]:
        """Replace the n-th element with f() and return the old one.

        Returns None without calling f if n is out of bounds.
        """
        old = self._fetch(n)
        if old is _MISSING:
            return None
        self._store(n, f())
        return old

    def swap(self, a: int, b: int) -> None:
        """Swap the a-th and b-th elements; raise IndexError if either is out of bounds."""
        if a == b:
            return
        if not self._within_bounds(a):
            raise IndexError(f"index a={a} out of bounds")
        if not self._within_bounds(b):
            raise IndexError(f"index b={b} out of bounds")
        item_a = self._cells[a]
        self._store(a, self._cells[b])
        self._store(b, item_a)

    def swap_remove(self, n: int) -> Optional[T]:
        """Remove the n-th element, filling its place with the last one.

        Does not preserve order. Returns None if n is out of bounds.
        """
        if self.is_empty() or not self._within_bounds(n):
            return None
        popped = self.pop()
        if n == len(self):
            return popped
        removed = self._cells[n]
        self._store(n, popped)
        return removed

    def __iter__(self) -> Iterator[T]:
        return _VecIter(self, reverse=False)

    def __reversed__(self) -> Iterator[T]:
        return _VecIter(self, reverse=True)

    def flush(self) -> None:
        """Hand the length and changed cells to the flush callback, if dirty."""
        if not self._len.dirty and not self._dirty_cells:
            return
        if self._on_flush is not None:
            changed = {
                index: self._cells.get(index)
                for index in sorted(self._dirty_cells)
            }
            self._on_flush(len(self), changed)
        self._len.flush()
        self._dirty_cells.clear()

    def __repr__(self) -> str:
        return f"StorageVec({list(self)!r})"