"""``projctx doctor`` — environment diagnostics command.

Gathers runtime and configuration information and renders a Rich
table summarising whether projctx can work in this environment.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  It only collects and displays
diagnostic data.
"""

from __future__ import annotations

import importlib
import platform
import sys

from projctx.cli import exit_codes
from projctx.cli.console import console, escape_markup
from projctx.core.urls import CONSOLE_ORIGIN_ENV, DEFAULT_CONSOLE_ORIGIN, console_origin
from projctx.exceptions import ConfigStoreError
from projctx.infra.config_store import JsonConfigStore, default_store_path
from projctx.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _projctx_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the projctx version row."""
    return "projctx", __version__, "[green]OK[/green]"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _module_check(label: str, module_name: str) -> tuple[str, str, str]:
    """Return (label, value, status) for an optional UI dependency."""
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return label, "NOT INSTALLED", "[yellow]WARN[/yellow]"
    version = getattr(module, "__version__", None) or "installed"
    return label, str(version), "[green]OK[/green]"


def _config_store_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the persistent store row."""
    path = default_store_path()
    try:
        JsonConfigStore(path).get("activeProjects")
    except ConfigStoreError:
        return "Config store", str(path), "[red]FAIL[/red]"
    if not path.exists():
        return "Config store", f"{path} (not created yet)", "[green]OK[/green]"
    return "Config store", str(path), "[green]OK[/green]"


def _console_origin_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the console origin row."""
    origin = console_origin()
    if origin == DEFAULT_CONSOLE_ORIGIN:
        return "Console", origin, "[green]OK[/green]"
    return "Console", f"{origin} (via {CONSOLE_ORIGIN_ENV})", "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nprojctx doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def collect_checks() -> list[tuple[str, str, str]]:
    """Run every diagnostic collector in display order."""
    return [
        _projctx_version_check(),
        _python_version_check(),
        _module_check("rich", "rich"),
        _module_check("questionary", "questionary"),
        _config_store_check(),
        _console_origin_check(),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Missing optional
        UI packages only warn.
    """
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
    else:
        table = Table(
            title="projctx doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=14)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, escape_markup(value), status)

        console.print()
        console.print(table)
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
