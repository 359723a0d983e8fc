"""Environment-variable overrides with fail-open coercion.

Operators can override built-in defaults through environment variables
without risking a crash: a value that fails coercion is ignored and the
default is used instead.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from typing import TypeVar

T = TypeVar("T")

Coercer = Callable[[str, T], T]
"""Signature of a coercion function: ``(raw, default) -> value``."""


def env_override(
    name: str,
    default: T,
    coerce: Coercer[T] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> T | str:
    """Return the value of environment variable *name*, or *default*.

    Parameters
    ----------
    name:
        Environment variable to consult.
    default:
        Value used when the variable is unset or empty, or when
        *coerce* raises.
    coerce:
        Optional ``(raw, default) -> value`` transform.  Without it the
        raw string is returned as-is.
    environ:
        Mapping to read from.  Defaults to :data:`os.environ`.
    """
    env = os.environ if environ is None else environ
    raw = env.get(name)
    if not raw:
        return default

    if coerce is None:
        return raw

    try:
        return coerce(raw, default)
    except Exception:  # noqa: BLE001
        return default


# ---------------------------------------------------------------------------
# Stock coercers
# ---------------------------------------------------------------------------

def coerce_int(raw: str, _default: int) -> int:
    """Parse *raw* as a base-10 integer."""
    return int(raw.strip(), 10)


def coerce_bool(raw: str, _default: bool) -> bool:
    """Parse common truthy/falsy spellings; raise on anything else."""
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {raw!r}")
