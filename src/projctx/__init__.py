"""projctx — per-directory active project tracking for the command line.

Resolves configuration through flags, environment overrides and a
small persisted store, and builds console URLs for the active project.
"""

from projctx.version import __version__

__all__: list[str] = ["__version__"]
