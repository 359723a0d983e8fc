"""Exit-code constants used by the CLI layer.

Every exit path maps to one of these values.  A
:class:`~projctx.exceptions.ProjctxError` may carry its own
``exit_code``, which takes precedence over :data:`GENERAL_ERROR`.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed without error."""

GENERAL_ERROR: int = 1
"""A known ProjctxError was caught and it did not name its own exit code."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
