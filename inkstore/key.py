"""Typeless 256-bit keys into contract storage and differences between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

KEY_BYTES = 32
_MODULUS = 1 << (8 * KEY_BYTES)
_MAX_OPERAND = (1 << 128) - 1

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


def _to_key_bytes(data: BytesLike) -> bytes:
    raw = bytes(data)
    if len(raw) != KEY_BYTES:
        raise ValueError(f"expected {KEY_BYTES} bytes, got {len(raw)}")
    return raw


def _check_operand(value: int) -> int:
    if not 0 <= value <= _MAX_OPERAND:
        raise ValueError("operand must be an unsigned integer of at most 128 bits")
    return value


@dataclass(frozen=True, order=True)
class Key:
    """A 32-byte storage key that supports wrapping offset arithmetic."""

    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _to_key_bytes(self.data))

    @classmethod
    def _from_int(cls, value: int) -> "Key":
        return cls((value % _MODULUS).to_bytes(KEY_BYTES, "big"))

    def _as_int(self) -> int:
        return int.from_bytes(self.data, "big")

    def as_bytes(self) -> bytes:
        """Return the raw bytes of this key."""
        return self.data

    def __add__(self, other: object) -> "Key":
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return Key._from_int(self._as_int() + _check_operand(other))

    def __sub__(self, other: object) -> Union["Key", "KeyDiff"]:
        if isinstance(other, Key):
            diff = (self._as_int() - other._as_int()) % _MODULUS
            return KeyDiff(diff.to_bytes(KEY_BYTES, "big"))
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return Key._from_int(self._as_int() - _check_operand(other))

    def _display(self, alternate: bool) -> str:
        b = self.data
        if alternate:
            return (
                f"0x{b[0]:02X}{b[1]:02X}_{b[2]:02X}{b[3]:02X}_……_"
                f"{b[28]:02X}{b[29]:02X}_{b[30]:02X}{b[31]:02X}"
            )
        parts = ["0x"]
        for n, byte in enumerate(b):
            parts.append(f"{byte:02X}")
            if n % 4 == 0 and n != KEY_BYTES:
                parts.append("_")
        return "".join(parts)

    def __str__(self) -> str:
        return self._display(alternate=False)

    def __repr__(self) -> str:
        return f"Key({self._display(alternate=False)})"

    def __format__(self, spec: str) -> str:
        if spec == "":
            return self._display(alternate=False)
        if spec == "#":
            return self._display(alternate=True)
        raise ValueError(f"unsupported format specifier for Key: {spec!r}")


@dataclass(frozen=True, order=True)
class KeyDiff:
    """The wrapping difference between two keys."""

    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _to_key_bytes(self.data))

    def as_bytes(self) -> bytes:
        """Return the raw bytes of this difference."""
        return self.data

    def _try_to_width(self, width: int) -> Optional[int]:
        if any(self.data[: KEY_BYTES - width]):
            return None
        return int.from_bytes(self.data[KEY_BYTES - width :], "big")

    def try_to_u32(self) -> Optional[int]:
        """Return the difference as an int if it fits 32 bits, else None."""
        return self._try_to_width(4)

    def try_to_u64(self) -> Optional[int]:
        """Return the difference as an int if it fits 64 bits, else None."""
        return self._try_to_width(8)

    def try_to_u128(self) -> Optional[int]:
        """Return the difference as an int if it fits 128 bits, else None."""
        return self._try_to_width(16)