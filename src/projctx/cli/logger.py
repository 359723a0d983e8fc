"""Leveled logger and terminal decorations for CLI messages.

Messages are routed through the stdlib ``projctx`` logger.  When Rich is
installed the handler is a :class:`rich.logging.RichHandler` with markup
enabled; otherwise a plain stream handler strips the markup so the
output stays readable.

The decorations (:func:`log_success`, :func:`log_bullet`,
:func:`log_warning`) prefix a coloured glyph.  Windows consoles get
ASCII glyphs.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from projctx.cli.console import get_rich_console, strip_markup
from projctx.utils import is_windows

LOGGER_NAME: str = "projctx"

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_installed_handler: logging.Handler | None = None


class _PlainFormatter(logging.Formatter):
    """Formatter for the no-Rich fallback: drops markup tags."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_markup(super().format(record))


def _build_handler() -> logging.Handler:
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_PlainFormatter("%(message)s"))
        return handler

    return RichHandler(
        console=get_rich_console(),
        markup=True,
        show_time=False,
        show_path=False,
        show_level=False,
        rich_tracebacks=False,
    )


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Install the CLI handler on the ``projctx`` logger.

    Calling it again replaces the handler installed by the previous
    call rather than stacking a second one.
    """
    global _installed_handler

    base = logging.getLogger(LOGGER_NAME)
    if _installed_handler is not None:
        base.removeHandler(_installed_handler)

    _installed_handler = _build_handler()
    base.addHandler(_installed_handler)
    base.setLevel(logging.DEBUG if verbose else logging.INFO)
    return base


# ---------------------------------------------------------------------------
# Leveled logger
# ---------------------------------------------------------------------------

class CliLogger:
    """Level-named logging methods that accept message fragments.

    ``logger.info("[bold]Note:[/bold]", "Reading STDIN.")`` logs the
    fragments joined by a single space.
    """

    def __init__(self, name: str = LOGGER_NAME) -> None:
        self._logger = logging.getLogger(name)

    def log(self, level: str, *fragments: Any) -> None:
        """Log *fragments* at the level called *level*.

        Raises
        ------
        ValueError
            If *level* is not one of ``debug``, ``info``, ``warn``, ``error``.
        """
        try:
            levelno = _LEVELS[level]
        except KeyError:
            raise ValueError(f"unknown log level: {level!r}") from None
        self._logger.log(levelno, " ".join(str(f) for f in fragments))

    def debug(self, *fragments: Any) -> None:
        self.log("debug", *fragments)

    def info(self, *fragments: Any) -> None:
        self.log("info", *fragments)

    def warn(self, *fragments: Any) -> None:
        self.log("warn", *fragments)

    def error(self, *fragments: Any) -> None:
        self.log("error", *fragments)


logger = CliLogger()


# ---------------------------------------------------------------------------
# Decorations
# ---------------------------------------------------------------------------

def log_success(message: str, level: str = "info") -> None:
    """Log *message* behind a green check mark."""
    glyph = "+" if is_windows() else "✔"
    logger.log(level, f"[green]{glyph}[/green] ", message)


def log_bullet(message: str, level: str = "info") -> None:
    """Log *message* behind a bold cyan ``i`` bullet."""
    logger.log(level, "[bold cyan]i[/bold cyan] ", message)


def log_warning(message: str, level: str = "warn") -> None:
    """Log *message* behind a bold yellow warning sign."""
    glyph = "!" if is_windows() else "⚠"
    logger.log(level, f"[bold yellow]{glyph}[/bold yellow] ", message)
