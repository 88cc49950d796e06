# -----------------------------------------------------------------------------
#  factor.py
#  Prime factorization and perfect-power extraction on Decimal integers
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal, localcontext
from time import perf_counter

import gmpy2
from sympy import factorint

from numkernel.context import NumericContext, is_integer
from numkernel.fmt import abbr_int_fast, dec_digits, format_factorization
from numkernel.runtime import CFG, trace
from numkernel.runtime import current as _rt_current

# Largest integer a binary64 float holds exactly (2**53 - 1)
NATIVE_SAFE_INTEGER = 9007199254740991

# Gaps between the integers coprime to 30, starting at 7: 7, 11, 13, 17, 19, 23, 29, 31, 37, ...
PRIME_WHEEL_INC = (4, 2, 4, 2, 4, 6, 2, 6)


def native_prime_factors(m: int) -> dict[int, int]:
    """Return {prime: exponent} for a native int m >= 1 via sympy.factorint."""
    if m < 2:
        return {}
    return factorint(
        m,
        use_trial=True,
        use_rho=True,
        use_pm1=True,
        verbose=False,
    )


def _native_threshold() -> int:
    return int(CFG("FACTORING.NATIVE_THRESHOLD", NATIVE_SAFE_INTEGER))


def prime_factors(ctx: NumericContext, n: Decimal) -> dict[Decimal, int]:
    """
    Return the factorization of a positive integer ``n`` as {prime: exponent}.

    • **Native fast path**
      Below ``FACTORING.NATIVE_THRESHOLD`` (default 2**53 - 1) the value is
      converted to an int and handed to SymPy; primes are lifted back to
      Decimal keys.

    • **Wheel factorization**
      Larger values strip 2, 3 and 5, then trial-divide by the candidates
      coprime to 30 (7, 11, 13, 17, ...) while candidate² <= cofactor. A
      cofactor left over at the end is prime.

    The product of p**e over the result equals ``n``; ``prime_factors(1)`` is {}.

    Examples
    --------
    >>> prime_factors(ctx, Decimal(360))
    {Decimal('2'): 3, Decimal('3'): 2, Decimal('5'): 1}
    """
    assert is_integer(n) and n > 0, n

    if n < _native_threshold():
        return {ctx.bignum(p): e for p, e in native_prime_factors(int(n)).items()}

    return _wheel_factors(ctx, n)


def _wheel_factors(ctx: NumericContext, n: Decimal) -> dict[Decimal, int]:
    """Wheel trial division on an exact gmpy2 integer; keys are lifted back to Decimal."""
    debug = _rt_current().debug
    interval = float(CFG("FACTORING.PROGRESS_INTERVAL_S", 0.5))
    t0 = perf_counter()
    last_report = 0.0

    m = gmpy2.mpz(int(n))
    trace("factor", f"wheel factorization of {abbr_int_fast(int(m))} ({dec_digits(int(m))} digits)")

    acc: dict[int, int] = {}
    for p in (2, 3, 5):
        count = 0
        while m % p == 0:
            count += 1
            m //= p
        if count:
            acc[p] = count

    k = gmpy2.mpz(7)
    i = 0
    while k * k <= m:
        if m % k == 0:
            acc[int(k)] = acc.get(int(k), 0) + 1
            m //= k
            continue

        k += PRIME_WHEEL_INC[i]
        i = (i + 1) % len(PRIME_WHEEL_INC)

        if debug and i == 0:
            elapsed = perf_counter() - t0
            if elapsed - last_report >= interval:
                trace("factor", f"t={elapsed:5.2f}s k={int(k)} remaining≈{m.bit_length()} bits")
                last_report = elapsed

    # m == k**2 exits with m == k, whose first power is already counted
    if m != 1:
        acc[int(m)] = acc.get(int(m), 0) + 1

    trace("factor", f"done: {format_factorization(acc)}")
    return {ctx.bignum(p): e for p, e in acc.items()}


def factor_power(ctx: NumericContext, n: Decimal, exponent: int) -> tuple[Decimal, Decimal]:
    """
    Return ``(factor, root)`` such that n**(1/exponent) == factor * root**(1/exponent)
    and ``root`` has no exponent-th power divisor other than 1.

    factor_power(ctx, 75, 2) -> (5, 3)   since 75 = 5^2 * 3
    """
    assert is_integer(n) and n > 0, n
    assert isinstance(exponent, int) and exponent > 0, exponent

    f = ctx.ONE
    r = ctx.ONE
    with localcontext(ctx.decimal):
        for p, e in prime_factors(ctx, n).items():
            q, rem = divmod(e, exponent)
            f *= p ** q
            r *= p ** rem
    return f, r
