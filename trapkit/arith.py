"""Fixed-width integer arithmetic and byte-level memory access.

Integers are taken modulo 2**32 or 2**64 and read back as signed or
unsigned values, the way a 32-bit machine sees them. Memory is a
little-endian ``bytearray``; words may sit at any byte offset.
"""

from __future__ import annotations

from typing import Union

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

Buffer = Union[bytes, bytearray, memoryview]


def sign_extend(value: int, bits: int) -> int:
    """Read the low ``bits`` bits of ``value`` as a signed number."""
    if bits <= 0:
        raise ValueError(f"bit width must be positive: {bits}")
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def to_int32(value: int) -> int:
    """Wrap into the signed 32-bit range."""
    return sign_extend(value, 32)


def to_uint32(value: int) -> int:
    """Wrap into the unsigned 32-bit range."""
    return value & _MASK32


def to_int64(value: int) -> int:
    """Wrap into the signed 64-bit range."""
    return sign_extend(value, 64)


def add32(a: int, b: int) -> int:
    """Signed 32-bit sum with wrap-around."""
    return to_int32(a + b)


def add64(a: int, b: int) -> int:
    """Signed 64-bit sum with wrap-around."""
    return to_int64(a + b)


def sub64(a: int, b: int) -> int:
    """Signed 64-bit difference with wrap-around."""
    return to_int64(a - b)


def mul64(a: int, b: int) -> int:
    """Signed 64-bit product with wrap-around."""
    return to_int64(to_int64(a) * to_int64(b))


def max32(x: int, y: int) -> int:
    """Larger of two signed 32-bit values."""
    return max(to_int32(x), to_int32(y))


def min3(x: int, y: int, z: int) -> int:
    """Smallest of three signed 32-bit values."""
    return min(to_int32(x), to_int32(y), to_int32(z))


def _check_shift(n: int) -> None:
    if not 0 <= n < 32:
        raise ValueError(f"shift amount out of range: {n}")


def shift_right_logical(x: int, n: int) -> int:
    """Unsigned 32-bit right shift."""
    _check_shift(n)
    return to_uint32(x) >> n


def shift_right_arith(x: int, n: int) -> int:
    """Signed 32-bit right shift; the sign bit is copied in."""
    _check_shift(n)
    return to_int32(x) >> n


def _byte_index(buf: Buffer, offset: int) -> tuple[int, int]:
    if offset < 0:
        raise IndexError(f"bit offset must not be negative: {offset}")
    byte, bit = divmod(offset, 8)
    if byte >= len(buf):
        raise IndexError(f"bit {offset} is past a {len(buf)}-byte buffer")
    return byte, bit


def getbit(buf: Buffer, offset: int) -> bool:
    """Bit ``offset`` of ``buf``, counting from bit 0 of byte 0."""
    byte, bit = _byte_index(buf, offset)
    return bool(buf[byte] & (1 << bit))


def setbit(buf: bytearray, offset: int, bit: bool) -> None:
    """Set or clear bit ``offset`` of ``buf`` in place."""
    byte, index = _byte_index(buf, offset)
    mask = 1 << index
    if bit:
        buf[byte] |= mask
    else:
        buf[byte] &= ~mask & 0xFF


def _check_word(buf: Buffer, offset: int) -> None:
    if offset < 0 or offset + 4 > len(buf):
        raise IndexError(f"word at {offset} is outside a {len(buf)}-byte buffer")


def read_word(buf: Buffer, offset: int) -> int:
    """Unsigned little-endian 32-bit word at any byte offset."""
    _check_word(buf, offset)
    return int.from_bytes(bytes(buf[offset : offset + 4]), "little")


def write_word(buf: bytearray, offset: int, value: int) -> None:
    """Store a little-endian 32-bit word at any byte offset, in place."""
    _check_word(buf, offset)
    buf[offset : offset + 4] = to_uint32(value).to_bytes(4, "little")