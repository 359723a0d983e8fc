"""Allow ``python -m projctx`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m projctx`` behaves identically to the ``projctx``
console script.
"""

from __future__ import annotations

from projctx.cli.app import cli

if __name__ == "__main__":
    cli()
