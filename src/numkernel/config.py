from __future__ import annotations

import decimal
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomllib as toml  # py311+

from numkernel.dataio import data_path

PROFILE_ENV = "NUMKERNEL_PROFILE"
DEFAULT_PROFILE = "default.toml"

_ROUNDING_MODES = frozenset(
    name for name in dir(decimal) if name.startswith("ROUND_")
)


class UserInputError(Exception):
    pass


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

    Added fields:
      - name:        resolved profile name (FILE.stem if not provided in [_PROFILE_])
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except FileNotFoundError:
        raise UserInputError(f"profile {path} not found.") from None
    except Exception as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


# --- Metadata handling -----------------------------------------------------


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    if "_PROFILE_" in raw:
        raw = {k: v for k, v in raw.items() if k != "_PROFILE_"}

    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))

    return raw, name, description


def _check_numeric(data: dict[str, Any], source: str) -> None:
    num = data.get("NUMERIC", {}) or {}
    prec = num.get("PRECISION")
    if prec is not None and (isinstance(prec, bool) or not isinstance(prec, int) or prec < 1):
        raise UserInputError(f"{source}: NUMERIC.PRECISION must be a positive integer, got {prec!r}.")
    rounding = num.get("ROUNDING")
    if rounding is not None and rounding not in _ROUNDING_MODES:
        raise UserInputError(
            f"{source}: NUMERIC.ROUNDING must be one of {', '.join(sorted(_ROUNDING_MODES))}, got {rounding!r}."
        )


# --- Public API ------------------------------------------------------------


def profile_path(path: str | Path | None = None) -> Path:
    """
    Resolution order:
      1) explicit path argument
      2) $NUMKERNEL_PROFILE
      3) packaged numkernel/data/default.toml
    """
    if path:
        return Path(path).expanduser()
    env = os.environ.get(PROFILE_ENV)
    if env:
        return Path(env).expanduser()
    return data_path(DEFAULT_PROFILE)


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load a profile, strip the [_PROFILE_] metadata, validate the NUMERIC
    section and return Settings(data=..., name=..., description=..., _source=path).
    """
    p = profile_path(path)
    raw = _load_toml(p)

    data, resolved_name, description = _split_profile_data(raw, p.stem)
    _check_numeric(data, p.name)

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=p,
    )
