# tests/test_fmt.py
from __future__ import annotations

from decimal import Decimal

import gmpy2
import pytest

from numkernel.fmt import abbr_int_fast, dec_digits, format_factorization


def test_dec_digits():
    assert dec_digits(0) == 1
    assert dec_digits(999) == 3
    assert dec_digits(1000) == 4
    assert dec_digits(-12345) == 5
    assert dec_digits(10**100) == 101


@pytest.mark.parametrize("k", [1, 9, 17, 50, 309, 4301])
def test_dec_digits_at_power_of_ten_boundaries(k):
    assert dec_digits(10**k - 1) == k
    assert dec_digits(10**k) == k + 1
    assert dec_digits(gmpy2.mpz(10) ** k) == k + 1


def test_abbr_int_fast():
    assert abbr_int_fast(12345) == "12345"
    assert abbr_int_fast(10**40) == "1000000000…0000000000"
    assert abbr_int_fast(-(10**40) - 7) == "-1000000000…0000000007"
    assert abbr_int_fast(Decimal(10**40)) == "1000000000…0000000000"
    assert abbr_int_fast(Decimal("2.5")) == "2.5"


def test_format_factorization():
    assert format_factorization({}) == "1"
    assert format_factorization({Decimal(5): 1, Decimal(2): 3, Decimal(3): 2}) == "2^3 × 3^2 × 5"
    assert format_factorization({97: 1}) == "97"
