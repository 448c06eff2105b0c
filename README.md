# inkstore

Building blocks for programs that keep their state in a flat, key-addressed
contract storage. Every slot is named by a 256-bit key. On top of those keys
the package provides a cached, typed value and two collections that track
which of their cells have changed.

## Contents

- `inkstore.key`: `Key`, a 32-byte storage key. You can add an unsigned
  integer of up to 128 bits to it, or subtract one from it, with 256-bit
  wrap-around. Subtracting one `Key` from another gives a `KeyDiff`, which
  offers `try_to_u32`, `try_to_u64` and `try_to_u128`. Each returns `None`
  when the difference does not fit. `str(key)` gives the full hex form;
  `f"{key:#}"` gives a short form.
- `inkstore.bitpack`: `BitPack`, 32 bits held in one word. Bit 0 is the most
  significant bit. It offers `get`, `set`, `flip` and `first_set_position`.
  An index outside 0..31 raises `InvalidBitPackIndex`, a subclass of
  `IndexError`.
- `inkstore.value`: `Value`, one cached value that behaves like the value it
  wraps: arithmetic, bitwise and shift operators, comparison, hashing and
  indexing. In-place operators and `set`/`mutate_with` change the stored
  value and mark it dirty. `get` raises `LookupError` if no value was ever
  set. `Flush` is the abstract base for anything that caches state and
  writes it back.
- `inkstore.vec`: `StorageVec`, a growable array of at most 2**32 - 1
  elements. It offers `push`, `pop`, `get`, indexing, `mutate`, `replace`,
  `swap` and `swap_remove`, and can be iterated forwards and in reverse.
- `inkstore.stash`: `Stash`, a table with O(1) `put` and `take` that reuses
  the indices it has freed. Its indices always stay below `max_len()`.
  `iter()` returns a `StashIter` over `(index, value)` pairs. The iterator
  also offers `next_back()` and `len()`.

## Installation

```
pip install inkstore
```

For the tests:

```
pip install "inkstore[test]"
pytest
```

## A taste

```python
from inkstore.key import Key

base = Key(bytes(32))
slot = base + 5
assert (slot - base).try_to_u32() == 5
print(f"{slot:#}")   # short form: 0x0000_0000_……_0000_0005
```

```python
from inkstore.stash import Stash

stash = Stash()
a = stash.put("apple")
b = stash.put("pear")
stash.take(a)
assert stash.put("plum") == a    # a freed index is used again
assert list(stash.values()) == ["plum", "pear"]
```

```python
from inkstore.value import Value

counter = Value(10, on_flush=print)
counter += 5
assert counter == 15
counter.flush()          # prints 15 and marks the value clean
```

## Flushing

`Value`, `StorageVec` and `Stash` keep their data in memory and record
what has changed. `flush()` passes those changes to the `on_flush` callback
given to the constructor, if there is one, and then marks everything clean.
`Value` passes its value. `StorageVec` and `Stash` pass their length and a
dict from changed index to the new element, with `None` for a cleared slot.
Nothing is written anywhere unless that callback writes it.

## What it does not do

The package has no storage backend of its own. Keys are not bound to any
store, and the collections are not laid out at key offsets. Persistence is
whatever your `on_flush` callback does. There is no bit vector larger than a
single 32-bit `BitPack`. There is also no hash map collection.