# tests/test_factor.py
"""
Prime factorization: native fast path (SymPy) and the mod-30 wheel used for
values at or above FACTORING.NATIVE_THRESHOLD.

Run: pytest -v
"""

from __future__ import annotations

from decimal import Decimal

import gmpy2
import pytest
from sympy import factorint

from numkernel.context import NumericContext
from numkernel.factor import NATIVE_SAFE_INTEGER, factor_power, prime_factors
from numkernel.runtime import APPLY

# ---------- helpers -----------------------------------------------------------


def _product(fac: dict[Decimal, int]) -> int:
    v = 1
    for p, e in fac.items():
        v *= int(p) ** e
    return v


def _as_int_map(fac: dict[Decimal, int]) -> dict[int, int]:
    return {int(p): e for p, e in fac.items()}


def _force_wheel() -> None:
    """Route every n >= 2 through the wheel factorizer."""
    APPLY({"FACTORING": {"NATIVE_THRESHOLD": 2}})


# ---------- known values ------------------------------------------------------

KNOWN = [
    (1, {}),
    (2, {2: 1}),
    (97, {97: 1}),
    (360, {2: 3, 3: 2, 5: 1}),
    (1001, {7: 1, 11: 1, 13: 1}),
    (2**20, {2: 20}),
    (9007199254740881, {9007199254740881: 1}),
]


@pytest.mark.parametrize("n,want", KNOWN, ids=[str(n) for n, _ in KNOWN])
def test_prime_factors_native_path(ctx, D, n, want):
    got = prime_factors(ctx, D(n))
    assert _as_int_map(got) == want
    assert all(isinstance(p, Decimal) for p in got)


@pytest.mark.parametrize("n,want", KNOWN, ids=[str(n) for n, _ in KNOWN])
def test_prime_factors_wheel_path(ctx, D, n, want):
    if n > 10**12:
        pytest.skip("prime near 2**53 takes ~10**7 wheel steps")
    _force_wheel()
    assert _as_int_map(prime_factors(ctx, D(n))) == want


def test_wheel_agrees_with_sympy(ctx, D):
    _force_wheel()
    for n in range(2, 1500):
        assert _as_int_map(prime_factors(ctx, D(n))) == factorint(n), n


BIG = [
    (2**60 * 3**2 * 5 * 7**2 * 1000003, {2: 60, 3: 2, 5: 1, 7: 2, 1000003: 1}),
    (2**54 * 10007**2, {2: 54, 10007: 2}),
    (3**40 * 5**3, {3: 40, 5: 3}),
    (NATIVE_SAFE_INTEGER + 1, {2: 53}),
    (2**55 * 11 * 13 * 29 * 31 * 99991, {2: 55, 11: 1, 13: 1, 29: 1, 31: 1, 99991: 1}),
]


@pytest.mark.parametrize("n,want", BIG, ids=[f"big{i}" for i in range(len(BIG))])
def test_prime_factors_big_integers(ctx, D, n, want):
    assert n >= NATIVE_SAFE_INTEGER
    got = prime_factors(ctx, D(n))
    assert _as_int_map(got) == want
    assert _product(got) == n
    assert all(gmpy2.is_prime(int(p)) for p in got)


def test_product_of_factors_restores_n(ctx, D):
    _force_wheel()
    for n in [2, 49, 121, 169 * 17, 30030, 65536, 999983, 720720, 7**5 * 11**3]:
        fac = prime_factors(ctx, D(n))
        assert _product(fac) == n
        assert all(gmpy2.is_prime(int(p)) for p in fac), fac
        assert len({int(p) for p in fac}) == len(fac)


def test_wheel_trace_when_debug(ctx, D, capsys):
    APPLY({"BEHAVIOUR": {"DEBUG": True}, "FACTORING": {"NATIVE_THRESHOLD": 2}})
    prime_factors(ctx, D(360))
    err = capsys.readouterr().err
    assert "[factor]" in err
    assert "2^3 × 3^2 × 5" in err


def test_prime_factors_beyond_precision(ctx):
    assert _as_int_map(prime_factors(ctx, Decimal("1E+150"))) == {2: 150, 5: 150}

    low = NumericContext(precision=20)
    n = Decimal("1.2E+30")  # 2**31 * 3 * 5**29, wider than 20 digits
    fac = prime_factors(low, n)
    assert _as_int_map(fac) == {2: 31, 3: 1, 5: 29}
    assert _product(fac) == int(n)


def test_factor_power_beyond_precision(ctx):
    f, r = factor_power(ctx, Decimal("1E+150"), 2)
    assert f == Decimal("1E+75")
    assert r == 1


def test_prime_factors_rejects_non_positive(ctx):
    with pytest.raises(AssertionError):
        prime_factors(ctx, ctx.ZERO)


# ---------- factor_power ------------------------------------------------------

POWER = [
    (75, 2, 5, 3),
    (72, 2, 6, 2),
    (1, 3, 1, 1),
    (2**10 * 3**3, 3, 24, 2),
    (360, 1, 360, 1),
    (97, 2, 1, 97),
    (2**60 * 3**7, 5, 2**12 * 3, 3**2),
]


@pytest.mark.parametrize(
    "n,exponent,factor,root", POWER, ids=[f"{n}^(1/{k})" for n, k, _, _ in POWER]
)
def test_factor_power(ctx, D, n, exponent, factor, root):
    f, r = factor_power(ctx, D(n), exponent)
    assert (f, r) == (factor, root)
    assert f**exponent * r == n
    for e in prime_factors(ctx, r).values():
        assert e < exponent


def test_factor_power_rejects_bad_exponent(ctx, D):
    with pytest.raises(AssertionError):
        factor_power(ctx, D(75), 0)
    with pytest.raises(AssertionError):
        factor_power(ctx, Decimal("7.5"), 2)
