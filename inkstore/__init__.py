"""Key-addressed storage primitives: keys, bit packs, cached values, vectors and stashes."""

__version__ = "0.1.0"
__all__ = ["bitpack", "key", "stash", "value", "vec"]