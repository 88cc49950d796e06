# -----------------------------------------------------------------------------
#  factorial.py
#  n! for Decimal integers
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal, localcontext

import gmpy2

from numkernel.context import NumericContext, is_integer
from numkernel.factor import NATIVE_SAFE_INTEGER
from numkernel.fmt import abbr_int_fast
from numkernel.runtime import trace

# 0! .. 9!
SMALL_FACTORIALS = (1, 1, 2, 6, 24, 120, 720, 5040, 40320, 362880)


def factorial(ctx: NumericContext, n: Decimal) -> Decimal:
    """
    n! for a non-negative integer n, rounded to the context precision.
    Returns ctx.NAN for negative or non-integer n.
    """
    if not is_integer(n) or n < 0:
        return ctx.NAN

    if n < len(SMALL_FACTORIALS):
        return ctx.bignum(SMALL_FACTORIALS[int(n)])

    if n > NATIVE_SAFE_INTEGER:
        return _iterated_factorial(ctx, n)

    if n % 2 == 1:
        with localcontext(ctx.decimal):
            return n * factorial(ctx, n - 1)

    return ctx.bignum(int(_telescoped_even_factorial(int(n))))


def _telescoped_even_factorial(m: int) -> gmpy2.mpz:
    """
    m! for even m. The running sums m, m+(m-2), m+(m-2)+(m-4), ... are
    k*(m-k+1) for k = 1..m/2, and their product is m!.
    """
    loop = m
    total = gmpy2.mpz(m)
    val = gmpy2.mpz(m)
    while loop > 2:
        loop -= 2
        total += loop
        val *= total
    return val


def _iterated_factorial(ctx: NumericContext, n: Decimal) -> Decimal:
    trace("factorial", f"term-by-term product up to {abbr_int_fast(n)}")
    with localcontext(ctx.decimal):
        val = ctx.ONE
        i = ctx.TWO
        while i <= n:
            val *= i
            i += 1
        return val
