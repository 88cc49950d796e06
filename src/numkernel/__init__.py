from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("numkernel")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .arith import gcd, lcm
from .config import UserInputError, load_settings
from .context import NumericContext, is_integer
from .factor import factor_power, prime_factors
from .factorial import factorial
from .gamma import gamma, lngamma
from .machine import as_machine_number, is_in_machine_range
from .runtime import APPLY, CFG

__all__ = [
    "APPLY",
    "CFG",
    "NumericContext",
    "UserInputError",
    "__version__",
    "as_machine_number",
    "factor_power",
    "factorial",
    "gamma",
    "gcd",
    "is_in_machine_range",
    "is_integer",
    "lcm",
    "lngamma",
    "load_settings",
    "prime_factors",
]
