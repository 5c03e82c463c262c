"""
numeric.py — Pure integer helpers behind POST /bfhl
===================================================
Fibonacci series, primality filtering and GCD/LCM folds. Callers
validate input first, so nothing here raises for bad values.
"""
from __future__ import annotations

from typing import List


def fibonacci(n: int) -> List[int]:
    """Return the first n Fibonacci numbers, starting 0, 1, 1, 2, ..."""
    if n == 0:
        return []
    if n == 1:
        return [0]
    out = [0, 1]
    while len(out) < n:
        out.append(out[-1] + out[-2])
    return out


def is_prime(x: int) -> bool:
    if isinstance(x, bool) or not isinstance(x, int) or x < 2:
        return False
    if x in (2, 3):
        return True
    if x % 2 == 0:
        return False
    i = 3
    while i * i <= x:
        if x % i == 0:
            return False
        i += 2
    return True


def primes_from_list(values: List[int]) -> List[int]:
    """Keep only the primes, preserving order."""
    return [v for v in values if is_prime(v)]


def gcd(a: int, b: int) -> int:
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def hcf(values: List[int]) -> int:
    result = values[0]
    for v in values[1:]:
        result = gcd(result, v)
    return abs(result)


def lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return abs(a // gcd(a, b) * b)


def lcm_list(values: List[int]) -> int:
    result = values[0]
    for v in values[1:]:
        result = lcm(result, v)
    return result
