"""printf-style formatting as done by the target runtime.

The conversions follow the runtime's own formatter rather than Python's:
integers are 32-bit, ``%#x`` always uses a lower-case ``x``, ``%a`` formats
an IPv4 address and ``%la`` a MAC address, and ``%n`` stores the number of
characters written so far into ``slot[0]`` of the argument given for it.
"""

from __future__ import annotations

import re
from typing import Any, Iterator, Sequence

ZEROPAD = 1
SIGN = 2
PLUS = 4
SPACE = 8
LEFT = 16
SPECIAL = 32
LARGE = 64

_MASK32 = 0xFFFFFFFF
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_UPPER_DIGITS = _DIGITS.upper()
_FLAG_BITS = {"-": LEFT, "+": PLUS, " ": SPACE, "#": SPECIAL, "0": ZEROPAD}

_SPEC = re.compile(r"([-+ #0]*)(\d+|\*)?(\.(\d+|\*)?)?([hlL])?", re.ASCII)


def _to_digits(value: int, base: int, digits: str) -> str:
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, base)
        out.append(digits[rem])
    return "".join(reversed(out))


def _number(num: int, base: int, size: int, precision: int, flags: int) -> str:
    digits = _UPPER_DIGITS if flags & LARGE else _DIGITS
    if flags & LEFT:
        flags &= ~ZEROPAD
    pad = "0" if flags & ZEROPAD else " "

    value = num & _MASK32
    sign = ""
    if flags & SIGN:
        if value & 0x80000000:
            sign = "-"
            value = (-value) & _MASK32
        elif flags & PLUS:
            sign = "+"
        elif flags & SPACE:
            sign = " "
    size -= len(sign)

    prefix = ""
    if flags & SPECIAL:
        if base == 16:
            prefix = "0x"
        elif base == 8:
            prefix = "0"
    size -= len(prefix)

    text = _to_digits(value, base, digits)
    precision = max(precision, len(text))
    size -= precision

    out = []
    if not flags & (ZEROPAD | LEFT):
        out.append(" " * max(size, 0))
        size = 0
    out.append(sign)
    out.append(prefix)
    if not flags & LEFT:
        out.append(pad * max(size, 0))
        size = 0
    out.append("0" * (precision - len(text)))
    out.append(text)
    out.append(" " * max(size, 0))
    return "".join(out)


def _justify(text: str, size: int, flags: int) -> str:
    if flags & LEFT:
        return text.ljust(size)
    return text.rjust(size)


def _mac_address(addr: Any, size: int, flags: int) -> str:
    digits = _UPPER_DIGITS if flags & LARGE else _DIGITS
    octets = bytes(addr)[:6]
    if len(octets) < 6:
        raise ValueError("a MAC address needs 6 bytes")
    text = ":".join(digits[b >> 4] + digits[b & 0x0F] for b in octets)
    return _justify(text, size, flags)


def _ip_address(addr: Any, size: int, flags: int) -> str:
    octets = bytes(addr)[:4]
    if len(octets) < 4:
        raise ValueError("an IPv4 address needs 4 bytes")
    return _justify(".".join(str(b) for b in octets), size, flags)


def _string_arg(value: Any) -> str:
    if value is None:
        return "<NULL>"
    if isinstance(value, (bytes, bytearray, memoryview)):
        value = bytes(value).decode("latin-1")
    if not isinstance(value, str):
        raise TypeError(f"%s needs a string, not {type(value).__name__}")
    return value.split("\0", 1)[0]


def _int_arg(value: Any, conversion: str) -> int:
    if not isinstance(value, int):
        raise TypeError(f"%{conversion} needs an integer, not {type(value).__name__}")
    return value


def _take(supply: Iterator[Any]) -> Any:
    try:
        return next(supply)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def vsnprintf(n: int, fmt: str, args: Sequence[Any]) -> str:
    """Format ``args`` according to ``fmt`` and return the text.

    Nothing is produced when ``n`` is zero; otherwise, as on the target
    runtime, ``n`` does not shorten the result.
    """
    if n < 0:
        raise ValueError(f"size must not be negative: {n}")
    fmt = fmt.split("\0", 1)[0]
    if n == 0:
        return ""

    supply = iter(args)
    out: list[str] = []
    pos = 0
    end = len(fmt)
    while pos < end:
        ch = fmt[pos]
        if ch != "%":
            out.append(ch)
            pos += 1
            continue

        spec = _SPEC.match(fmt, pos + 1)
        assert spec is not None  # every part of the pattern is optional
        flag_text, width_text, dot, precision_text, qualifier = spec.groups()
        pos = spec.end()

        flags = 0
        for flag in flag_text:
            flags |= _FLAG_BITS[flag]

        width = -1
        if width_text == "*":
            width = _int_arg(_take(supply), "*")
            if width < 0:
                width = -width
                flags |= LEFT
        elif width_text:
            width = int(width_text)

        precision = -1
        if dot:
            if precision_text == "*":
                precision = _int_arg(_take(supply), "*")
            elif precision_text:
                precision = int(precision_text)
            precision = max(precision, 0)

        conversion = fmt[pos] if pos < end else ""
        if conversion:
            pos += 1
        base = 10

        if conversion == "c":
            char = chr(_int_arg(_take(supply), "c") & 0xFF)
            padding = " " * max(width - 1, 0)
            out.append(char + padding if flags & LEFT else padding + char)
            continue
        if conversion == "s":
            text = _string_arg(_take(supply))
            if precision >= 0:
                text = text[:precision]
            out.append(_justify(text, width, flags))
            continue
        if conversion == "p":
            if width == -1:
                width = 8
                flags |= ZEROPAD
            value = _int_arg(_take(supply), "p")
            out.append(_number(value, 16, width, precision, flags))
            continue
        if conversion == "n":
            slot = _take(supply)
            slot[0] = len("".join(out))
            continue
        if conversion in ("A", "a"):
            if conversion == "A":
                flags |= LARGE
            addr = _take(supply)
            if qualifier == "l":
                out.append(_mac_address(addr, width, flags))
            else:
                out.append(_ip_address(addr, width, flags))
            continue
        if conversion == "o":
            base = 8
        elif conversion in ("X", "x"):
            if conversion == "X":
                flags |= LARGE
            base = 16
        elif conversion in ("d", "i"):
            flags |= SIGN
        elif conversion != "u":
            if conversion != "%":
                out.append("%")
            out.append(conversion)
            continue

        value = _int_arg(_take(supply), conversion)
        out.append(_number(value, base, width, precision, flags))

    return "".join(out)


def vsprintf(fmt: str, args: Sequence[Any]) -> str:
    """Format ``args`` according to ``fmt``."""
    return vsnprintf(len(fmt.split("\0", 1)[0]), fmt, args)


def sprintf(fmt: str, *args: Any) -> str:
    """Format the arguments according to ``fmt``."""
    return vsprintf(fmt, args)


def snprintf(n: int, fmt: str, *args: Any) -> str:
    """Format the arguments according to ``fmt`` with a size hint ``n``."""
    return vsnprintf(n, fmt, args)