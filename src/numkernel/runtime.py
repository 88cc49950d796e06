# runtime.py
from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import TYPE_CHECKING, Any

from colorama import Fore, Style

if TYPE_CHECKING:
    from numkernel.config import Settings

INLINE_PROFILE = "(inline)"


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # enables [tag] trace lines on stderr

    def apply(self, settings: Settings | dict[str, Any]) -> None:
        """
        Install a loaded profile or a plain {SECTION: {KEY: value}} dict.
        BEHAVIOUR.DEBUG, when it is a bool, also sets the debug flag.
        """
        if isinstance(settings, dict):
            self.profile_name = INLINE_PROFILE
            self.settings = dict(settings)
        else:
            self.profile_name = settings.name
            self.settings = dict(settings.as_dict())

        dbg = self.get("BEHAVIOUR.DEBUG")
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Dotted lookup into the profile, e.g. 'NUMERIC.PRECISION'."""
        if not key:
            return default
        cur: Any = self.settings
        for part in key.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("numkernel_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> None:
    """Drop the runtime of the current context; the next current() starts clean."""
    _current_runtime.set(None)


def APPLY(settings: Settings | dict[str, Any]) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


def trace(tag: str, msg: str) -> None:
    """Print a '[tag] msg' diagnostic line to stderr when debug is on."""
    if not current().debug:
        return
    print(f"{Style.DIM}[{tag}]{Style.RESET_ALL} {msg}", file=sys.stderr)


# ---- Dependency check --------------------------------------------------------

REQUIRED_MODULES = ("sympy", "gmpy2", "mpmath")


def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    Check that the kernel's numeric backends can be imported (find_spec only,
    nothing is imported here). On a miss, print which pip packages are needed
    and return `not strict`.
    """
    missing = [name for name in REQUIRED_MODULES if find_spec(name) is None]
    if not missing:
        return True

    print(
        f"{Fore.RED}{Style.BRIGHT}numkernel cannot run, missing:{Style.RESET_ALL} {', '.join(missing)}\n"
        f"Install with: {Fore.YELLOW}pip install {' '.join(missing)}{Style.RESET_ALL}"
    )
    return not strict
