"""A pack of 32 bits addressed from the most significant bit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class InvalidBitPackIndex(IndexError):
    """Raised when a bit index lies outside a bit pack."""


@dataclass(eq=True)
class BitPack:
    """Thirty-two bits; bit 0 is the most significant one."""

    bits: int = 0

    BITS = 32

    def __post_init__(self) -> None:
        if not 0 <= self.bits < (1 << self.BITS):
            raise ValueError("bit pack value must fit in 32 unsigned bits")

    @staticmethod
    def validate_index(n: int) -> int:
        """Return n if it addresses a bit of a pack, else raise InvalidBitPackIndex."""
        if not 0 <= n < BitPack.BITS:
            raise InvalidBitPackIndex(f"bit index {n} out of bounds")
        return n

    def _mask(self, n: int) -> int:
        return 1 << (self.BITS - self.validate_index(n) - 1)

    def get(self, n: int) -> bool:
        """Return the value of the n-th bit."""
        return bool(self.bits & self._mask(n))

    def set(self, n: int, value: bool) -> None:
        """Set the n-th bit to value."""
        mask = self._mask(n)
        if value:
            self.bits |= mask
        else:
            self.bits &= ~mask

    def flip(self, n: int) -> None:
        """Invert the n-th bit."""
        self.bits ^= self._mask(n)

    def first_set_position(self) -> Optional[int]:
        """Return the position of the first set bit, or None if all are clear."""
        if self.bits == 0:
            return None
        return self.BITS - self.bits.bit_length()