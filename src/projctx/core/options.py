"""Parent-linked option bags and inherited option lookup.

An :class:`OptionBag` holds the options supplied at one layer (command
flags, environment, built-in defaults) and points at the layer it
falls back to.  :func:`get_inherited_option` walks that chain and
returns the first value it finds; values are never merged across
layers.

The chain must not be cyclic.  Cycles are not detected; a cyclic chain
makes the lookup loop forever.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class OptionBag:
    """Options defined at one layer, plus an optional fallback layer.

    Only keys present in :attr:`values` count as defined.  A key mapped
    to ``None``, ``0``, ``""`` or ``False`` is still defined.
    """

    values: dict[str, Any] = field(default_factory=dict)
    """Options set explicitly at this layer."""

    parent: OptionBag | None = None
    """Layer consulted when a key is not defined here."""

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, Any],
        parent: OptionBag | None = None,
    ) -> OptionBag:
        """Build a bag from *values*, copying them."""
        return cls(values=dict(values), parent=parent)

    def child(self, **values: Any) -> OptionBag:
        """Return a new bag layered on top of this one."""
        return OptionBag(values=dict(values), parent=self)

    def defines(self, key: str) -> bool:
        """Return ``True`` if *key* is set at this layer (ignoring parents)."""
        return key in self.values


def get_inherited_option(
    options: OptionBag | None,
    key: str,
    default: Any = None,
) -> Any:
    """Return the value of *key* from the nearest bag that defines it.

    Parameters
    ----------
    options:
        The bag to start from.  ``None`` is treated as an empty chain.
    key:
        Option name to look up.
    default:
        Returned when no bag in the chain defines *key*.

    Returns
    -------
    Any
        The first matching value walking ``options -> options.parent -> …``,
        or *default*.
    """
    target = options
    while target is not None:
        if target.defines(key):
            return target.values[key]
        target = target.parent
    return default
