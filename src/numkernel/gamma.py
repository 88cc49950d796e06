# -----------------------------------------------------------------------------
#  gamma.py
#  Gamma and log-gamma on Decimal values
#
#  Two fixed-coefficient approximations are used:
#
#    • lngamma: 15-term series with g = 607/128 (Godfrey's coefficients).
#      A(z) = p0 + Σ p_i / (z + i) approximates Γ(z+1) / Stirling factor, so the
#      final ln(z) term turns it into ln Γ(z).
#    • gamma:   Lanczos with g = 7 and 9 coefficients (GSL specfunc/gamma.c),
#      evaluated on z - 1.
#
#  Both tables carry about 15 significant digits. At higher working precision
#  the results keep that accuracy, not the context's.
# -----------------------------------------------------------------------------

from __future__ import annotations

from decimal import Decimal, localcontext

from numkernel import bigmath
from numkernel.context import NumericContext, is_integer
from numkernel.runtime import trace

TABLE_DIGITS = 15

GAMMA_P_LN = (
    "0.99999999999999709182",
    "57.156235665862923517",
    "-59.597960355475491248",
    "14.136097974741747174",
    "-0.49191381609762019978",
    "0.33994649984811888699e-4",
    "0.46523628927048575665e-4",
    "-0.98374475304879564677e-4",
    "0.15808870322491248884e-3",
    "-0.21026444172410488319e-3",
    "0.2174396181152126432e-3",
    "-0.16431810653676389022e-3",
    "0.84418223983852743293e-4",
    "-0.2619083840158140867e-4",
    "0.36899182659531622704e-5",
)

LANCZOS_7_C = (
    "0.99999999999980993227684700473478",
    "676.520368121885098567009190444019",
    "-1259.13921672240287047156078755283",
    "771.3234287776530788486528258894",
    "-176.61502916214059906584551354",
    "12.507343278686904814458936853",
    "-0.13857109526572011689554707",
    "9.984369578019570859563e-6",
    "1.50563273514931155834e-7",
)

LANCZOS_G = 7

# Above this, gamma goes through exp(lngamma(z)).
LARGE_ARGUMENT = 100


def _table(ctx: NumericContext, key: str, coefficients: tuple[str, ...]) -> tuple[Decimal, ...]:
    def build() -> tuple[Decimal, ...]:
        if ctx.precision > TABLE_DIGITS:
            trace("gamma", f"{key}: coefficients good to ~{TABLE_DIGITS} digits, context has {ctx.precision}")
        return tuple(ctx.bignum(c) for c in coefficients)

    return ctx.cache(key, build)


def spouge_coefficients(ctx: NumericContext) -> tuple[Decimal, ...]:
    return _table(ctx, "gamma-p-ln", GAMMA_P_LN)


def lanczos_coefficients(ctx: NumericContext) -> tuple[Decimal, ...]:
    return _table(ctx, "lanczos-7-c", LANCZOS_7_C)


def lngamma(ctx: NumericContext, z: Decimal) -> Decimal:
    """ln Γ(z); NaN for negative z."""
    with localcontext(ctx.decimal):
        if z.is_nan() or z < 0:
            return ctx.NAN

        p = spouge_coefficients(ctx)
        x = p[0]
        for i in range(len(p) - 1, 0, -1):
            x += p[i] / (z + i)

        g = ctx.cache("gamma-g-ln", lambda: ctx.bignum(607) / 128)
        t = z + g + ctx.HALF
        half_ln_two_pi = ctx.HALF * (ctx.TWO * ctx.pi()).ln()
        return half_ln_two_pi + (z + ctx.HALF) * t.ln() - t + x.ln() - z.ln()


def gamma(ctx: NumericContext, z: Decimal) -> Decimal:
    """
    Γ(z). Reflection formula below 1/2, exp(lngamma) above 100, Lanczos
    in between. NaN at the poles (0, -1, -2, ...).
    """
    with localcontext(ctx.decimal):
        if z.is_nan():
            return ctx.NAN
        if z.is_infinite():
            return ctx.NAN if z.is_signed() else z
        if z <= 0 and is_integer(z):
            return ctx.NAN

        if z < ctx.HALF:
            trace("gamma", f"reflection at z={z}")
            pi = ctx.pi()
            return pi / (bigmath.sin(ctx, pi * z) * gamma(ctx, ctx.ONE - z))

        if z > LARGE_ARGUMENT:
            trace("gamma", f"exp(lngamma) at z={z}")
            return lngamma(ctx, z).exp()

        c = lanczos_coefficients(ctx)
        z = z - 1
        x = c[0]
        for i in range(1, LANCZOS_G + 2):
            x += c[i] / (z + i)

        t = z + LANCZOS_G + ctx.HALF
        return (ctx.TWO * ctx.pi()).sqrt() * (x * (-t).exp() * t ** (z + ctx.HALF))
