"""Custom exception hierarchy for projctx.

All exceptions that cross layer boundaries must inherit from
:class:`ProjctxError`.  Raw ``OSError`` and ``json`` errors from the
persistent store must NEVER propagate beyond the infrastructure layer —
they must be caught and re-raised as :class:`ConfigStoreError`.

Hierarchy
---------
ProjctxError
├── ConfigStoreError
├── NoActiveProjectError
├── ProjectSelectionError
├── InvalidInputError
├── StdinUnavailableError
└── EnvironmentError
"""

from __future__ import annotations


class ProjctxError(Exception):
    """Base exception for all projctx errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        exit_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""
        self.exit_code: int | None = exit_code
        """Process exit code requested by the raiser, if any."""


# --- Persistence -----------------------------------------------------------

class ConfigStoreError(ProjctxError):
    """Raised when the persistent key-value store cannot be read or written."""


# --- Project resolution ----------------------------------------------------

class NoActiveProjectError(ProjctxError):
    """Raised when no project is selected for the working directory."""


class ProjectSelectionError(ProjctxError):
    """Raised when an interactive project selection is cancelled or impossible."""


# --- Input -----------------------------------------------------------------

class InvalidInputError(ProjctxError):
    """Raised when user-supplied data (e.g. imported JSON) is malformed."""


class StdinUnavailableError(ProjctxError):
    """Raised when STDIN cannot be used as an input source."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ProjctxError):
    """Raised when an optional runtime dependency is not available."""


def append_use_suggestion(hint: str | None) -> str:
    """Append ``projctx use`` guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Select a project with:"
    if hint and marker in hint:
        return hint
    lines = [hint] if hint else []
    lines.extend((marker, "    projctx use <alias>"))
    return "\n".join(lines)
