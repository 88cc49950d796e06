from __future__ import annotations

from decimal import Decimal

# binary64: 53 significant bits (~15.95 decimal digits), exponent range ~1e-307 .. 1e308
MAX_SIGNIFICANT_DIGITS = 16
# A 16-digit coefficient starting with 90.. or more exceeds 2**53 (9007199254740992).
MAX_LEADING_PAIR = 90
MAX_EXPONENT = 308
MIN_EXPONENT = -306


def is_in_machine_range(d: Decimal) -> bool:
    """
    True if ``d`` fits a native float without losing digits or range.
    Infinity and NaN count as in range: float has them too.
    """
    if not d.is_finite():
        return True
    # Any zero is exact, whatever exponent it carries (0E-400)
    if d.is_zero():
        return True

    # Are there too many significant digits?
    digits = d.normalize().as_tuple().digits
    if len(digits) > MAX_SIGNIFICANT_DIGITS:
        return False
    if len(digits) == MAX_SIGNIFICANT_DIGITS and digits[0] * 10 + digits[1] >= MAX_LEADING_PAIR:
        return False

    # Is the exponent (of the leading digit) within range?
    e = d.adjusted()
    return MIN_EXPONENT < e < MAX_EXPONENT


def as_machine_number(d: Decimal) -> float | None:
    """float(d) when is_in_machine_range(d), else None."""
    if not is_in_machine_range(d):
        return None
    return float(d)
