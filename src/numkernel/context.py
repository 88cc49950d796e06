from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Context, Decimal
from typing import Any, TypeVar

from numkernel import bigmath
from numkernel.runtime import CFG, trace

T = TypeVar("T")

DEFAULT_PRECISION = 100


def is_integer(d: Decimal) -> bool:
    """True for finite decimals without a fractional part."""
    return d.is_finite() and d == d.to_integral_value()


@dataclass(eq=False)
class NumericContext:
    # --- configuration ---
    precision: int = DEFAULT_PRECISION   # significant digits of every value
    rounding: str = ROUND_HALF_UP

    # --- derived in __post_init__ ---
    decimal: Context = field(init=False, repr=False)
    ZERO: Decimal = field(init=False, repr=False)
    ONE: Decimal = field(init=False, repr=False)
    TWO: Decimal = field(init=False, repr=False)
    HALF: Decimal = field(init=False, repr=False)
    NEGATIVE_ONE: Decimal = field(init=False, repr=False)
    NAN: Decimal = field(init=False, repr=False)

    _cache: dict[str, Any] = field(init=False, repr=False, default_factory=dict)
    _lock: threading.RLock = field(init=False, repr=False, default_factory=threading.RLock)

    def __post_init__(self) -> None:
        assert isinstance(self.precision, int) and self.precision >= 1, self.precision
        # No traps: invalid operations give NaN, x/0 gives a signed infinity.
        self.decimal = Context(
            prec=self.precision,
            rounding=self.rounding,
            Emax=MAX_EMAX,
            Emin=MIN_EMIN,
            traps=[],
        )
        c = self.decimal.create_decimal
        self.ZERO = c(0)
        self.ONE = c(1)
        self.TWO = c(2)
        self.HALF = c("0.5")
        self.NEGATIVE_ONE = c(-1)
        self.NAN = c("NaN")

    @classmethod
    def from_runtime(cls) -> NumericContext:
        """Build a context from the active profile (NUMERIC.PRECISION / NUMERIC.ROUNDING)."""
        return cls(
            precision=int(CFG("NUMERIC.PRECISION", DEFAULT_PRECISION)),
            rounding=str(CFG("NUMERIC.ROUNDING", ROUND_HALF_UP)),
        )

    def bignum(self, value: int | float | str | Decimal) -> Decimal:
        """Construct a decimal rounded to this context's precision."""
        if isinstance(value, float):
            return self.decimal.create_decimal_from_float(value)
        return self.decimal.create_decimal(value)

    def cache(self, key: str, initializer: Callable[[], T]) -> T:
        """
        Return the value stored under key, computing it with initializer()
        on first use. Each key is built at most once; concurrent callers
        block on the lock until the value is stored.
        """
        try:
            return self._cache[key]
        except KeyError:
            pass
        with self._lock:
            if key not in self._cache:
                value = initializer()
                self._cache[key] = value
                size = len(value) if isinstance(value, (list, tuple)) else 1
                trace("cache", f"built {key!r} ({size} entries, prec={self.precision})")
            return self._cache[key]

    def cached_keys(self) -> tuple[str, ...]:
        return tuple(self._cache)

    def pi(self) -> Decimal:
        return self.cache("pi", lambda: bigmath.acos(self, self.NEGATIVE_ONE))
