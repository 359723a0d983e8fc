"""Shared utilities — constants and cross-cutting helpers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from __future__ import annotations

import sys

ENV_PREFIX: str = "PROJCTX_"
"""Prefix shared by every environment variable the tool reads."""


def is_windows() -> bool:
    """Return ``True`` when running on Windows.

    Evaluated on each call so tests can patch :data:`sys.platform`.
    """
    return sys.platform == "win32"
