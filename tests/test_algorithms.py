import calendar
import math
import random
import zlib

import pytest

from trapkit import algorithms as alg

SORT_DATA = [2, 12, 14, 6, 13, 15, 16, 10, 0, 18, 11, 19, 9, 1, 7, 5, 4, 3, 8, 17]


@pytest.mark.parametrize("sort", [alg.bubble_sort, alg.select_sort, alg.quick_sort])
def test_sorts_source_data_twice(sort):
    data = list(SORT_DATA)
    sort(data)
    assert data == list(range(20))
    sort(data)
    assert data == list(range(20))


@pytest.mark.parametrize("sort", [alg.bubble_sort, alg.select_sort, alg.quick_sort])
def test_sorts_match_sorted(sort):
    rng = random.Random(7)
    for size in (0, 1, 2, 5, 33):
        data = [rng.randint(-50, 50) for _ in range(size)]
        expected = sorted(data)
        sort(data)
        assert data == expected


def test_bubble_sort_mytest_data():
    data = [1, 3, 5, 7, 9, 2, 4, 6, 8, 0]
    alg.bubble_sort(data)
    assert data == list(range(10))


def test_partition_invariant():
    data = list(SORT_DATA)
    m = alg.partition(data, 0, len(data) - 1)
    pivot = data[m]
    assert pivot == SORT_DATA[0]
    assert all(x <= pivot for x in data[:m])
    assert all(x > pivot for x in data[m + 1:])
    assert sorted(data) == sorted(SORT_DATA)


def test_partition_bad_bounds():
    with pytest.raises(IndexError):
        alg.partition([1, 2], 0, 5)


def test_crc32_source_value():
    assert alg.crc32("The quick brown fox jumps over the lazy dog") == 0x414FA339


def test_crc32_matches_zlib_and_chains():
    for data in (b"", b"a", bytes(range(256)), b"hello world"):
        assert alg.crc32(data) == zlib.crc32(data)
    assert alg.crc32(b"world", alg.crc32(b"hello ")) == alg.crc32(b"hello world")


def test_mul_div_roundtrip():
    assert alg.mul_div_roundtrip(range(10)) == list(range(10))


def test_mul_div_roundtrip_negative_n():
    with pytest.raises(ValueError):
        alg.mul_div_roundtrip([1], -1)


def test_factorial_source_answers():
    ans = [1, 1, 2, 6, 24, 120, 720, 5040, 40320, 362880, 3628800, 39916800, 479001600]
    assert [alg.factorial(i) for i in range(13)] == ans


def test_factorial_negative():
    with pytest.raises(ValueError):
        alg.factorial(-1)


def test_fibonacci_source_answers():
    ans = [1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89, 144, 233, 377, 610, 987, 1597,
           2584, 4181, 6765, 10946, 17711, 28657, 46368, 75025, 121393, 196418,
           317811, 514229, 832040, 1346269, 2178309, 3524578, 5702887, 9227465,
           14930352, 24157817, 39088169, 63245986, 102334155]
    assert alg.fibonacci(40) == ans
    assert alg.fibonacci(0) == []


def test_fibonacci_negative():
    with pytest.raises(ValueError):
        alg.fibonacci(-3)


def test_goldbach_even_numbers():
    assert all(alg.goldbach(n) for n in range(4, 31, 2))
    assert alg.goldbach(2) is False


def test_is_prime_agrees_with_6k_test():
    for n in range(2, 300):
        assert alg.is_prime(n) == alg.is_prime_6k(n)
    assert alg.is_prime(1) is False
    assert alg.is_prime(0) is False


@pytest.mark.parametrize(
    "n, cost",
    list(zip(
        [-1, 0, 49, 50, 51, 99, 100, 101, 299, 300, 301, 499, 500, 501],
        [0, 0, 0, 0, 50, 50, 50, 75, 75, 75, 100, 100, 100, 150],
    )),
)
def test_cost_tier(n, cost):
    assert alg.cost_tier(n) == cost


def test_leap_years_match_calendar():
    for year in range(1890, 2015):
        assert alg.is_leap_year(year) == calendar.isleap(year)


A = [
    [31, -73, -67, -28, 87, -17, -15, -35, -53, -54],
    [52, 36, 9, -91, -27, -78, 42, 82, 19, -6],
    [41, -56, 31, 32, -52, 74, 28, 20, 55, -72],
    [-59, 2, -79, -8, 44, 55, -83, -95, -45, 50],
    [-95, 61, -63, 62, -16, 52, 40, 92, -32, -26],
    [-99, 52, 96, 63, -75, -74, -82, 82, -95, 42],
    [11, -22, 27, -27, -27, -76, -71, 58, -40, -65],
    [91, -53, -67, 72, 36, -77, -3, 93, -24, 97],
    [-52, -11, -77, -93, -92, -24, 70, 18, 56, 88],
    [-43, -41, -26, 11, -84, -14, -41, 83, 27, -11],
]
B = [
    [-48, -70, -40, -82, -74, -63, -59, -72, -100, -72],
    [5, -84, 28, 56, 60, -33, -42, -50, -83, -83],
    [-5, 5, 48, 75, -78, -9, 9, 2, 88, 70],
    [69, 23, 66, 66, -11, 50, 67, 18, -58, 76],
    [30, 45, 32, 25, -73, 57, -67, -14, 53, -33],
    [98, -86, -63, 80, -45, -88, 80, -64, 58, -84],
    [-55, -39, -13, -27, -37, 8, -96, 84, -89, 31],
    [-82, 58, 81, -41, -58, 36, 76, -79, -29, 23],
    [86, -46, 16, -18, 81, 90, 35, -90, 43, 55],
    [-38, -19, -40, 82, -76, 57, -29, -2, 79, -48],
]
ANS = [
    [-1317, 10379, -5821, -14322, -4330, -3114, -9940, 7033, -1883, -6027],
    [-24266, -861, 4044, -19824, -223, 886, -11988, -6442, -13846, -1054],
    [9783, -7073, -918, -5911, -967, -7100, 14605, -7556, -3439, 9607],
    [15980, -520, -13297, 15043, 6185, -3654, 1325, 4193, 16925, -17761],
    [2566, 3187, 10248, 7925, 6318, 1421, 14648, 700, -12193, 1083],
    [-12603, 19006, 20952, 18599, -1539, 5184, 17408, 6740, 6264, 15114],
    [-12715, 15121, 9963, -13717, 2411, -2196, 6147, -1698, -3389, 8200],
    [-19007, 12417, 5723, -11309, -19242, 15740, -3791, -3949, -13130, -21],
    [-12557, -5970, -11570, -8905, 12227, 7814, -5094, 4532, 1071, -1309],
    [-2955, 9381, 6372, -6898, 9117, 5753, 20778, -5045, 1047, 12114],
]


def test_matmul_source_answers():
    assert alg.matmul(A, B) == ANS


def test_matmul_identity():
    identity = [[int(i == j) for j in range(10)] for i in range(10)]
    assert alg.matmul(A, identity) == A


def test_matmul_dimension_mismatch():
    with pytest.raises(ValueError):
        alg.matmul([[1, 2]], [[1, 2]])


def test_mersenne_factor_source_answer():
    d = alg.mersenne_factor(929)
    assert d == 13007
    assert (2 ** 929 - 1) % d == 0


@pytest.mark.parametrize("q", [2, 4, 1, 0])
def test_mersenne_factor_rejects_non_odd_primes(q):
    with pytest.raises(ValueError):
        alg.mersenne_factor(q)


def test_pascal_row_source_answers():
    ans = [1, 30, 435, 4060, 27405, 142506, 593775, 2035800, 5852925, 14307150,
           30045015, 54627300, 86493225, 119759850, 145422675, 155117520,
           145422675, 119759850, 86493225, 54627300, 30045015, 14307150,
           5852925, 2035800, 593775, 142506, 27405, 4060, 435, 30, 1]
    assert alg.pascal_row(30) == ans


def test_pascal_row_matches_comb():
    for n in range(12):
        assert alg.pascal_row(n) == [math.comb(n, k) for k in range(n + 1)]
    with pytest.raises(ValueError):
        alg.pascal_row(-1)


def test_primes_between_source_answers():
    assert alg.primes_between(101, 150) == [101, 103, 107, 109, 113, 127, 131, 137, 139, 149]


def test_mutual_recursion_source_answers():
    assert alg.mutual_recursion(14371) == (38270, 218, 20)


def test_narcissistic_numbers_source_answers():
    assert alg.narcissistic_numbers(100, 500) == [153, 370, 371, 407]


def test_sum_to_source_answer():
    assert alg.sum_to(100) == 5050


def test_switch_case_source_answers():
    ans = [-1, 0, 2, 5, 5, 8, 8, 8, 8, 10, 10, 10, 10, 15, -1]
    assert [alg.switch_case(i - 1) for i in range(15)] == ans


def test_to_lower_case_matches_ascii_lower():
    for code in range(128):
        assert alg.to_lower_case(code) == ord(chr(code).lower())
    assert alg.to_lower_case("Q") == "Q".lower()


def test_to_lower_case_rejects_long_string():
    with pytest.raises(ValueError):
        alg.to_lower_case("AB")


def test_perfect_numbers_source_answers():
    assert alg.perfect_numbers(30) == [6, 28]