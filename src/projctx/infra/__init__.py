"""Infrastructure layer — external system integration.

This layer owns all filesystem access.  Every raw ``OSError`` or
decoding error must be caught here and re-raised as a
:class:`~projctx.exceptions.ProjctxError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from projctx.infra.config_store import JsonConfigStore, default_store_path

__all__: list[str] = [
    "JsonConfigStore",
    "default_store_path",
]
