"""Console URL construction.

The console origin defaults to :data:`DEFAULT_CONSOLE_ORIGIN` and may be
pointed elsewhere (e.g. a staging console) with the
``PROJCTX_CONSOLE_ORIGIN`` environment variable.  A malformed override
is ignored.
"""

from __future__ import annotations

from projctx.core.env import env_override
from projctx.utils import ENV_PREFIX

DEFAULT_CONSOLE_ORIGIN: str = "https://console.projctx.dev"

CONSOLE_ORIGIN_ENV: str = f"{ENV_PREFIX}CONSOLE_ORIGIN"


def _coerce_origin(raw: str, _default: str) -> str:
    """Accept only ``http(s)://`` origins, without a trailing slash."""
    value = raw.strip()
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"unsupported console origin: {raw!r}")
    return value.rstrip("/")


def console_origin() -> str:
    """Return the console origin, honouring the environment override."""
    return env_override(CONSOLE_ORIGIN_ENV, DEFAULT_CONSOLE_ORIGIN, _coerce_origin)


def console_url(project: str, path: str, *, origin: str | None = None) -> str:
    """Build the console URL for *path* within *project*.

    *path* is appended verbatim and should start with ``/``.
    """
    base = console_origin() if origin is None else origin
    return f"{base}/project/{project}{path}"


def add_subdomain(origin: str, subdomain: str) -> str:
    """Insert *subdomain* into an HTTP origin.

    ``add_subdomain("https://example.com", "api")`` returns
    ``"https://api.example.com"``.
    """
    return origin.replace("//", f"//{subdomain}.", 1)
