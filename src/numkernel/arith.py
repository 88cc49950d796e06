# -----------------------------------------------------------------------------
#  arith.py
#  Integer GCD / LCM on Decimal values
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal

import gmpy2

from numkernel.context import NumericContext, is_integer


def _euclid(a: gmpy2.mpz, b: gmpy2.mpz) -> gmpy2.mpz:
    while b:
        a, b = b, a % b
    return abs(a)


def gcd(ctx: NumericContext, a: Decimal, b: Decimal) -> Decimal:
    """
    Greatest common divisor by the Euclidean algorithm; always >= 0.
    Both operands must be integers. The remainders are taken on exact
    gmpy2 integers, so operands wider than the context precision work too.
    """
    assert is_integer(a) and is_integer(b), (a, b)
    return ctx.bignum(int(_euclid(gmpy2.mpz(int(a)), gmpy2.mpz(int(b)))))


def lcm(ctx: NumericContext, a: Decimal, b: Decimal) -> Decimal:
    """a*b / gcd(a, b). Undefined (NaN) when both a and b are zero."""
    assert is_integer(a) and is_integer(b), (a, b)
    za, zb = gmpy2.mpz(int(a)), gmpy2.mpz(int(b))
    g = _euclid(za, zb)
    if not g:
        return ctx.NAN
    return ctx.bignum(int(za * zb // g))
