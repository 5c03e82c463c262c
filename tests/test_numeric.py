"""
Tests for the pure numeric helpers behind POST /bfhl.

Run with: pytest tests/test_numeric.py -v
"""
from __future__ import annotations

import itertools

import pytest

from bfhl_service.numeric import (
    fibonacci,
    gcd,
    hcf,
    is_prime,
    lcm,
    lcm_list,
    primes_from_list,
)


# ---------------------------------------------------------------------------
# Fibonacci
# ---------------------------------------------------------------------------

def test_fibonacci_zero_is_empty():
    assert fibonacci(0) == []


def test_fibonacci_one():
    assert fibonacci(1) == [0]


def test_fibonacci_seven():
    assert fibonacci(7) == [0, 1, 1, 2, 3, 5, 8]


def test_fibonacci_large_is_exact():
    series = fibonacci(2000)
    assert len(series) == 2000
    assert series[-1] == series[-2] + series[-3]
    # F(100) = 354224848179261915075
    assert series[100] == 354224848179261915075


# ---------------------------------------------------------------------------
# Primes
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("x", [-7, -2, -1, 0, 1])
def test_is_prime_false_below_two(x):
    assert is_prime(x) is False


def test_is_prime_small_primes():
    assert is_prime(2) is True
    assert is_prime(3) is True


@pytest.mark.parametrize("x", [4, 6, 100, 1024])
def test_is_prime_false_for_even_numbers(x):
    assert is_prime(x) is False


def test_is_prime_odd_composites_and_primes():
    assert is_prime(9) is False
    assert is_prime(25) is False
    assert is_prime(97) is True
    assert is_prime(7919) is True


def test_is_prime_rejects_booleans():
    assert is_prime(True) is False


def test_primes_from_list_preserves_order():
    assert primes_from_list([4, 5, 6, 7, 8, 9, 10, 11]) == [5, 7, 11]
    assert primes_from_list([11, 2, 11]) == [11, 2, 11]


def test_primes_from_list_none_found():
    assert primes_from_list([0, 1, 4, -3]) == []


# ---------------------------------------------------------------------------
# GCD / HCF / LCM
# ---------------------------------------------------------------------------

def test_gcd_basic():
    assert gcd(12, 18) == 6


def test_gcd_with_zero_and_negatives():
    assert gcd(7, 0) == 7
    assert gcd(-7, 0) == 7
    assert gcd(-12, 18) == 6


def test_hcf_list():
    assert hcf([12, 18, 24]) == 6
    assert hcf([-8]) == 8


def test_lcm_pair():
    assert lcm(4, 6) == 12
    assert lcm(-4, 6) == 12


def test_lcm_with_zero_operand():
    assert lcm(0, 5) == 0
    assert lcm(5, 0) == 0
    assert lcm_list([3, 0, 4]) == 0


def test_lcm_list():
    assert lcm_list([4, 6, 3]) == 12


def test_hcf_and_lcm_order_independent():
    values = [12, 18, 30, 45]
    hcfs = {hcf(list(p)) for p in itertools.permutations(values)}
    lcms = {lcm_list(list(p)) for p in itertools.permutations(values)}
    assert hcfs == {3}
    assert lcms == {180}
