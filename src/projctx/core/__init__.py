"""Core layer — configuration resolution logic.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Environment reads happen only through :func:`env_override`.
"""

from projctx.core.active_projects import ACTIVE_PROJECTS_KEY, ActiveProjectStore
from projctx.core.env import coerce_bool, coerce_int, env_override
from projctx.core.options import OptionBag, get_inherited_option
from projctx.core.protocols import KeyValueStore
from projctx.core.urls import add_subdomain, console_origin, console_url

__all__: list[str] = [
    "ACTIVE_PROJECTS_KEY",
    "ActiveProjectStore",
    "KeyValueStore",
    "OptionBag",
    "add_subdomain",
    "coerce_bool",
    "coerce_int",
    "console_origin",
    "console_url",
    "env_override",
    "get_inherited_option",
]
