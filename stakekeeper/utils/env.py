"""Typed readers over os.environ for the keeper's settings."""

from __future__ import annotations

import os
from typing import Callable, TypeVar

from dotenv import load_dotenv

# .env values never override variables already exported by the supervisor.
load_dotenv(override=False)

_N = TypeVar("_N", int, float)

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = _env_str(name)
    if not raw:
        return default
    return raw.lower() in _TRUTHY


def _env_number(name: str, default: _N, cast: Callable[[str], _N]) -> _N:
    """Parse a numeric var; an unparsable value stops the process instead of raising ValueError."""
    raw = _env_str(name)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise SystemExit(f"[stakekeeper] {name} must be a {cast.__name__}. Got: {raw!r}") from None


def _env_int(name: str, default: int = 0) -> int:
    return _env_number(name, default, int)


def _env_float(name: str, default: float = 0.0) -> float:
    return _env_number(name, default, float)
