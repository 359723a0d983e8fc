"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so tests can substitute an in-memory store.
"""

from __future__ import annotations

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Contract for a durable string-keyed store.

    Values must survive process restarts.  Implementations map every
    backend failure to :class:`~projctx.exceptions.ConfigStoreError`.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under *key*, or *default* if unset.

        Raises
        ------
        ConfigStoreError
            When the backing storage cannot be read.
        """
        ...  # pragma: no cover

    def set(self, key: str, value: Any) -> None:
        """Replace the value stored under *key* with *value*.

        Raises
        ------
        ConfigStoreError
            When the backing storage cannot be written.
        """
        ...  # pragma: no cover
