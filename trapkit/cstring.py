"""NUL-terminated byte strings and raw memory helpers.

Strings are bytes-like objects (``bytes``, ``bytearray``, ``memoryview``)
or ``str`` (encoded as Latin-1). A string ends at its first NUL byte, or
at the end of the data if there is none. Functions that write take a
``bytearray`` and return it. Functions that search return an index
instead of a pointer.
"""

from __future__ import annotations

from typing import Optional, Union

BytesLike = Union[bytes, bytearray, memoryview, str]


def _view(s: BytesLike) -> bytes:
    if isinstance(s, str):
        return s.encode("latin-1")
    return bytes(s)


def _cstr(s: BytesLike) -> bytes:
    """Return the bytes of ``s`` up to (not including) its first NUL."""
    data = _view(s)
    end = data.find(0)
    return data if end < 0 else data[:end]


def _check_size(n: int) -> None:
    if n < 0:
        raise ValueError(f"size must not be negative: {n}")


def strlen(s: BytesLike) -> int:
    """Length of the string before its terminating NUL."""
    return len(_cstr(s))


def strnlen(s: BytesLike, count: int) -> int:
    """Length of the string, but at most ``count``."""
    _check_size(count)
    return min(len(_cstr(s)), count)


def strcpy(dst: bytearray, src: BytesLike) -> bytearray:
    """Copy ``src`` and its terminating NUL to the start of ``dst``."""
    text = _cstr(src)
    dst[0 : len(text) + 1] = text + b"\0"
    return dst


def strncpy(dst: bytearray, src: BytesLike, n: int) -> bytearray:
    """Copy at most ``n`` characters of ``src``; no NUL is added or padded."""
    _check_size(n)
    text = _cstr(src)[:n]
    dst[0 : len(text)] = text
    return dst


def strcat(dst: bytearray, src: BytesLike) -> bytearray:
    """Append ``src`` to the string held in ``dst`` and terminate it."""
    start = strlen(dst)
    text = _cstr(src)
    dst[start : start + len(text) + 1] = text + b"\0"
    return dst


def strcmp(s1: BytesLike, s2: BytesLike) -> int:
    """Compare two strings bytewise (unsigned); return -1, 0 or 1."""
    a, b = _cstr(s1), _cstr(s2)
    return (a > b) - (a < b)


def strncmp(s1: BytesLike, s2: BytesLike, n: int) -> int:
    """Compare at most ``n`` characters; return -1, 0 or 1.

    When both strings end before ``n`` characters without a difference,
    the result is -1, matching the target runtime.
    """
    _check_size(n)
    a, b = _cstr(s1), _cstr(s2)
    for x, y in zip(a[:n], b[:n]):
        if x != y:
            return 1 if x > y else -1
    compared = min(n, len(a), len(b))
    if compared == n:
        return 0
    return 1 if len(a) > compared else -1


def strchr(s: BytesLike, c: int) -> Optional[int]:
    """Index of the first ``c`` in the string, or None.

    The terminating NUL is never matched.
    """
    if not 0 < c <= 0xFF:
        return None
    index = _cstr(s).find(c)
    return None if index < 0 else index


def strrchr(s: BytesLike, c: int) -> Optional[int]:
    """Index of the last ``c`` in the string, or None."""
    if not 0 < c <= 0xFF:
        return None
    index = _cstr(s).rfind(c)
    return None if index < 0 else index


def memset(buf: bytearray, c: int, n: int) -> bytearray:
    """Fill the first ``n`` bytes of ``buf`` with the low byte of ``c``."""
    _check_size(n)
    if n > len(buf):
        raise IndexError(f"memset of {n} bytes into a {len(buf)}-byte buffer")
    buf[:n] = bytes([c & 0xFF]) * n
    return buf


def memcpy(dst: bytearray, src: BytesLike, n: int) -> bytearray:
    """Copy the first ``n`` bytes of ``src`` into ``dst``."""
    _check_size(n)
    data = _view(src)
    if n > len(data) or n > len(dst):
        raise IndexError(f"memcpy of {n} bytes exceeds a buffer")
    dst[:n] = data[:n]
    return dst


def memmove(buffer: bytearray, dst: int, src: int, n: int) -> bytearray:
    """Move ``n`` bytes inside ``buffer`` from offset ``src`` to ``dst``.

    The regions may overlap.
    """
    _check_size(n)
    if dst < 0 or src < 0 or dst + n > len(buffer) or src + n > len(buffer):
        raise IndexError(f"memmove of {n} bytes exceeds the buffer")
    buffer[dst : dst + n] = bytes(buffer[src : src + n])
    return buffer


def memcmp(s1: BytesLike, s2: BytesLike, n: int) -> int:
    """Compare ``n`` bytes; return -1, 0 or 1.

    As on the target runtime, comparison stops at the first zero byte in
    either operand; the result is then 1 if the first operand's byte
    there is non-zero and -1 otherwise.
    """
    _check_size(n)
    p, q = _view(s1), _view(s2)
    if n > len(p) or n > len(q):
        raise IndexError(f"memcmp of {n} bytes exceeds a buffer")
    compared = 0
    for x, y in zip(p[:n], q[:n]):
        if not x or not y:
            break
        if x != y:
            return 1 if x > y else -1
        compared += 1
    if compared == n:
        return 0
    return 1 if p[compared] else -1