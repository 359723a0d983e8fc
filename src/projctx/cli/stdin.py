"""Helpers for commands that read their payload from STDIN."""

from __future__ import annotations

import io
import sys
from typing import TextIO

from projctx.cli.logger import logger
from projctx.exceptions import StdinUnavailableError
from projctx.utils import is_windows


def explain_stdin(stream: TextIO | None = None) -> None:
    """Tell an interactive user how to finish typing STDIN input.

    Raises
    ------
    StdinUnavailableError
        On Windows, where piping JSON through STDIN is not supported.
    """
    if is_windows():
        raise StdinUnavailableError(
            "STDIN input is not available on Windows.",
            hint="Pass the data with --data instead.",
            exit_code=1,
        )

    source = sys.stdin if stream is None else stream
    if source.isatty():
        logger.info("[bold]Note:[/bold]", "Reading STDIN. Type JSON data and then press Ctrl-D")


def string_to_stream(text: str | None) -> io.StringIO | None:
    """Wrap *text* in a readable stream, or return ``None`` when empty."""
    if not text:
        return None
    return io.StringIO(text)
