"""64-bit integer division helpers and 32-bit bit counting.

All arguments are taken modulo 2**64 (or 2**32 for the bit counters);
signed results are wrapped into the signed 64-bit range.
"""

from __future__ import annotations

_BITS64 = 64
_MASK64 = (1 << _BITS64) - 1
_MASK32 = 0xFFFFFFFF


def _u64(x: int) -> int:
    return x & _MASK64


def _s64(x: int) -> int:
    x &= _MASK64
    return x - (1 << _BITS64) if x >> (_BITS64 - 1) else x


def udivmoddi4(a: int, b: int) -> tuple[int, int]:
    """Unsigned 64-bit division: return ``(a // b, a % b)``."""
    n, d = _u64(a), _u64(b)
    if d == 0:
        raise ZeroDivisionError("64-bit division by zero")
    return divmod(n, d)


def udivdi3(a: int, b: int) -> int:
    """Unsigned 64-bit quotient."""
    return udivmoddi4(a, b)[0]


def umoddi3(a: int, b: int) -> int:
    """Unsigned 64-bit remainder."""
    return udivmoddi4(a, b)[1]


def divdi3(a: int, b: int) -> int:
    """Signed 64-bit quotient, truncated toward zero."""
    n, d = _s64(a), _s64(b)
    if d == 0:
        raise ZeroDivisionError("64-bit division by zero")
    q = abs(n) // abs(d)
    if (n < 0) != (d < 0):
        q = -q
    return _s64(q)


def moddi3(a: int, b: int) -> int:
    """Signed 64-bit remainder; it takes the sign of ``a``."""
    n, d = _s64(a), _s64(b)
    if d == 0:
        raise ZeroDivisionError("64-bit division by zero")
    r = abs(n) % abs(d)
    return _s64(-r if n < 0 else r)


def divmoddi4(a: int, b: int) -> tuple[int, int]:
    """Signed 64-bit quotient and remainder as a pair."""
    q = divdi3(a, b)
    return q, _s64(_s64(a) - q * _s64(b))


def clzsi2(a: int) -> int:
    """Number of leading zero bits of a 32-bit value (32 for zero)."""
    return 32 - (a & _MASK32).bit_length()


def ctzsi2(a: int) -> int:
    """Number of trailing zero bits of a 32-bit value (32 for zero)."""
    x = a & _MASK32
    if x == 0:
        return 32
    return (x & -x).bit_length() - 1