"""Small numeric and sorting routines run as self-checking programs.

Integer results wrap the way 32-bit ``int`` arithmetic does on the target
machine; the sorts work in place on Python lists.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from trapkit.arith import to_int32

_MASK32 = 0xFFFFFFFF
_CRC_POLY = 0xEDB88320


def bubble_sort(a: list) -> None:
    """Sort ``a`` in place by repeatedly swapping adjacent pairs."""
    n = len(a)
    for j in range(n):
        for i in range(n - 1 - j):
            if a[i] > a[i + 1]:
                a[i], a[i + 1] = a[i + 1], a[i]


def select_sort(a: list) -> None:
    """Sort ``a`` in place by moving the smallest remaining item forward."""
    n = len(a)
    for i in range(n - 1):
        k = min(range(i, n), key=a.__getitem__)
        a[i], a[k] = a[k], a[i]


def partition(a: list, p: int, q: int) -> int:
    """Partition ``a[p..q]`` around ``a[p]`` and return the pivot's index.

    Afterwards items left of the index are not greater than the pivot and
    items right of it are greater.
    """
    if not 0 <= p <= q < len(a):
        raise IndexError(f"bad partition bounds: {p}..{q} of {len(a)}")
    pivot = a[p]
    i, j = p, q
    while i < j:
        while i < j and a[j] > pivot:
            j -= 1
        a[i] = a[j]
        while i < j and a[i] <= pivot:
            i += 1
        a[j] = a[i]
    a[i] = pivot
    return i


def quick_sort(a: list) -> None:
    """Sort ``a`` in place with quicksort."""
    pending = [(0, len(a) - 1)]
    while pending:
        p, q = pending.pop()
        if p >= q:
            continue
        m = partition(a, p, q)
        pending.append((p, m - 1))
        pending.append((m + 1, q))


def _crc_table() -> tuple[int, ...]:
    table = []
    for i in range(256):
        rem = i
        for _ in range(8):
            rem = (rem >> 1) ^ _CRC_POLY if rem & 1 else rem >> 1
        table.append(rem)
    return tuple(table)


_CRC_TABLE = _crc_table()


def crc32(data: Union[bytes, bytearray, memoryview, str], crc: int = 0) -> int:
    """CRC-32 of ``data``, continuing from a previous value ``crc``."""
    if isinstance(data, str):
        data = data.encode("latin-1")
    value = ~crc & _MASK32
    for octet in bytes(data):
        value = (value >> 8) ^ _CRC_TABLE[(value ^ octet) & 0xFF]
    return ~value & _MASK32


def _div32(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return to_int32(-quotient if (a < 0) != (b < 0) else quotient)


def mul_div_roundtrip(values: Iterable[int], n: int = 10) -> list[int]:
    """Multiply each value by 1..n, then divide it by 1..n, in 32-bit ints."""
    if n < 0:
        raise ValueError(f"n must not be negative: {n}")
    result = []
    for value in values:
        x = to_int32(value)
        for j in range(1, n + 1):
            x = to_int32(x * j)
        for j in range(1, n + 1):
            x = _div32(x, j)
        result.append(x)
    return result


def factorial(n: int) -> int:
    """``n!`` as a wrapping 32-bit integer."""
    if n < 0:
        raise ValueError(f"factorial of a negative number: {n}")
    result = 1
    for k in range(2, n + 1):
        result = to_int32(result * k)
    return result


def fibonacci(count: int) -> list[int]:
    """The first ``count`` Fibonacci numbers, starting 1, 1."""
    if count < 0:
        raise ValueError(f"count must not be negative: {count}")
    seq: list[int] = []
    a, b = 1, 1
    for _ in range(count):
        seq.append(a)
        a, b = b, to_int32(a + b)
    return seq


def is_prime(n: int) -> bool:
    """Primality by trial division by every number below ``n``."""
    if n < 2:
        return False
    return all(n % i for i in range(2, n))


def goldbach(n: int) -> bool:
    """Whether ``n`` is the sum of two primes."""
    return any(is_prime(i) and is_prime(n - i) for i in range(2, n))


def cost_tier(n: int) -> int:
    """The cost charged for a quantity ``n``."""
    if n > 500:
        return 150
    if n > 300:
        return 100
    if n > 100:
        return 75
    if n > 50:
        return 50
    return 0


def is_leap_year(n: int) -> bool:
    """Gregorian leap-year rule."""
    return (n % 4 == 0 and n % 100 != 0) or n % 400 == 0


def matmul(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> list[list[int]]:
    """Matrix product with wrapping 32-bit sums."""
    if not a or not b:
        raise ValueError("matrices must not be empty")
    inner = len(b)
    width = len(b[0])
    if any(len(row) != inner for row in a):
        raise ValueError("rows of the left matrix must match the right matrix's height")
    if any(len(row) != width for row in b):
        raise ValueError("the right matrix is not rectangular")
    columns = list(zip(*b))
    return [
        [to_int32(sum(x * y for x, y in zip(row, column))) for column in columns]
        for row in a
    ]


def is_prime_6k(n: int) -> bool:
    """Primality test that tries divisors of the form 6k - 1 and 6k + 1.

    1 is reported as prime.
    """
    if n % 2 == 0:
        return n == 2
    if n % 3 == 0:
        return n == 3
    d = 5
    while d * d <= n:
        if n % d == 0:
            return False
        d += 2
        if n % d == 0:
            return False
        d += 4
    return True


def mersenne_factor(q: int) -> int:
    """Smallest factor of ``2**q - 1`` of the form ``2kq + 1``.

    ``q`` must be an odd prime.
    """
    if q == 2 or q < 2 or not is_prime_6k(q):
        raise ValueError(f"q must be an odd prime: {q}")
    d = 2 * q + 1
    while pow(2, q, d) != 1:
        d += 2 * q
    return d


def pascal_row(n: int) -> list[int]:
    """Row ``n`` of Pascal's triangle, ``n + 1`` entries."""
    if n < 0:
        raise ValueError(f"row number must not be negative: {n}")
    row = [1]
    for _ in range(n):
        row = [1] + [to_int32(x + y) for x, y in zip(row, row[1:])] + [1]
    return row


def primes_between(lo: int, hi: int) -> list[int]:
    """Primes ``p`` with ``lo <= p <= hi``."""
    return [m for m in range(lo, hi + 1) if is_prime(m)]


def mutual_recursion(n: int) -> tuple[int, int, int]:
    """Run four mutually recursive functions from ``f0(n)``.

    Return the result, the number of calls made and the deepest level.
    """
    calls = 0
    depth = 0

    def enter(level: int) -> None:
        nonlocal calls, depth
        depth = max(depth, level)
        calls += 1

    def f0(m: int, level: int) -> int:
        enter(level)
        return 1 if m <= 0 else f3(m // 3, level + 1)

    def f1(m: int, level: int) -> int:
        enter(level)
        return 1 if m <= 0 else f0(m - 1, level + 1)

    def f2(m: int, level: int) -> int:
        enter(level)
        return 1 if m <= 0 else to_int32(f1(m, level + 1) + 9)

    def f3(m: int, level: int) -> int:
        enter(level)
        if m <= 0:
            return 1
        return to_int32(f2(m // 2, level + 1) * 3 + f2(m // 2, level + 1) * 2)

    result = f0(n, 0)
    return result, calls, depth


def narcissistic_numbers(lo: int, hi: int) -> list[int]:
    """Numbers in ``[lo, hi)`` equal to the sum of the cubes of their digits."""
    if lo < 0:
        raise ValueError(f"lower bound must not be negative: {lo}")
    return [n for n in range(lo, hi) if sum(int(d) ** 3 for d in str(n)) == n]


def sum_to(n: int) -> int:
    """``1 + 2 + ... + n`` as a wrapping 32-bit integer."""
    return to_int32(sum(range(1, n + 1)))


_SWITCH = {
    0: 0,
    1: 2,
    2: 5, 3: 5,
    4: 8, 5: 8, 6: 8, 7: 8,
    8: 10, 9: 10, 10: 10, 11: 10,
    12: 15,
}


def switch_case(n: int) -> int:
    """Map ``n`` through a fixed case table; -1 for anything else."""
    return _SWITCH.get(n, -1)


def to_lower_case(c: Union[int, str]) -> Union[int, str]:
    """Lower-case an ASCII upper-case letter; anything else is unchanged.

    Takes a character code or a one-character string and returns the same kind.
    """
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError("to_lower_case takes exactly one character")
        return chr(to_lower_case(ord(c)))
    return c + 32 if ord("A") <= c <= ord("Z") else c


def perfect_numbers(limit: int) -> list[int]:
    """Numbers below ``limit`` equal to the sum of their proper divisors."""
    return [
        n for n in range(1, limit)
        if sum(i for i in range(1, n) if n % i == 0) == n
    ]