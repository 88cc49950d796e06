# src/numkernel/fmt.py
from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

import gmpy2


def dec_digits(n: int) -> int:
    """Decimal digit count of |n| without building str(n); dec_digits(0) == 1."""
    n = abs(n)
    if n == 0:
        return 1
    # num_digits(n, 10) is exact or one too large
    d = gmpy2.num_digits(n, 10)
    return d - 1 if n < 10 ** (d - 1) else d


def abbr_int_fast(n: int | Decimal, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if isinstance(n, Decimal):
        if not n.is_finite() or n != n.to_integral_value():
            return str(n)
        n = int(n)
    # Keep non-ints and small ints simple
    if not isinstance(n, int):
        return str(n)
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    # zero-pad last block to width 'tail'
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def format_factorization(fac: Mapping[int | Decimal, int]) -> str:
    """
    Turn {p: e, ...} into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, e in sorted(fac.items()):
        tok = abbr_int_fast(p)
        parts.append(f"{tok}^{e}" if e > 1 else tok)
    return " × ".join(parts) if parts else "1"
