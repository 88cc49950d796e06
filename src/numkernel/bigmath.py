# -----------------------------------------------------------------------------
#  bigmath.py
#  Trigonometry on Decimal values. The decimal module ships sqrt, exp and ln
#  but no sin/acos; these are evaluated with mpmath at the context precision
#  plus guard digits and rounded back into the context.
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import mpmath

if TYPE_CHECKING:
    from numkernel.context import NumericContext

GUARD_DIGITS = 10


def _to_mpf(d: Decimal) -> mpmath.mpf:
    return mpmath.mpf(format(d, "e"))


def _from_mpf(ctx: NumericContext, x: mpmath.mpf) -> Decimal:
    return ctx.decimal.create_decimal(mpmath.nstr(x, ctx.precision, strip_zeros=False))


def sin(ctx: NumericContext, x: Decimal) -> Decimal:
    if not x.is_finite():
        return ctx.NAN
    with mpmath.workdps(ctx.precision + GUARD_DIGITS):
        return _from_mpf(ctx, mpmath.sin(_to_mpf(x)))


def acos(ctx: NumericContext, x: Decimal) -> Decimal:
    """Principal arccosine; NaN outside [-1, 1]."""
    if not x.is_finite() or abs(x) > 1:
        return ctx.NAN
    with mpmath.workdps(ctx.precision + GUARD_DIGITS):
        return _from_mpf(ctx, mpmath.acos(_to_mpf(x)))
