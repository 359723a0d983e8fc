"""CLI application entry point and command routing for projctx.

This module is the **sole error boundary** for the entire application.
It catches :class:`~projctx.exceptions.ProjctxError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Option precedence
-----------------
Options are layered as an :class:`~projctx.core.options.OptionBag` chain
and read with :func:`~projctx.core.options.get_inherited_option`:

1. command-line flags (only those actually given),
2. ``PROJCTX_*`` environment variables,
3. built-in defaults.

The project for a command is the ``project`` option if any layer sets
it, else the active project recorded for the working directory.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from projctx.cli import exit_codes
from projctx.cli.console import console, escape_markup
from projctx.cli.logger import configure_logging, log_bullet, log_success, log_warning, logger
from projctx.core.active_projects import ActiveProjectStore
from projctx.core.env import coerce_bool, env_override
from projctx.core.options import OptionBag, get_inherited_option
from projctx.exceptions import (
    InvalidInputError,
    NoActiveProjectError,
    ProjctxError,
    append_use_suggestion,
)
from projctx.utils import ENV_PREFIX
from projctx.version import __version__

Handler = Callable[[OptionBag, ActiveProjectStore], int]

_SUPPRESS = argparse.SUPPRESS


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Global flags default to ``SUPPRESS`` so that only flags the user
    actually typed land in the command-line option layer.
    """
    parser = argparse.ArgumentParser(
        prog="projctx",
        description="Track the active project for each working directory.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-P",
        "--project",
        default=_SUPPRESS,
        help="Project alias or id to use, overriding the active project.",
    )
    parser.add_argument(
        "--cwd",
        default=_SUPPRESS,
        help="Directory to resolve the active project for (default: current).",
    )
    parser.add_argument(
        "--non-interactive",
        dest="non_interactive",
        action="store_true",
        default=_SUPPRESS,
        help="Never prompt; fail instead.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=_SUPPRESS,
        help="Show debug output.",
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    use = sub.add_parser("use", help="Set or clear the active project for a directory.")
    use.add_argument("alias", nargs="?", default=None, help="Project alias or id.")
    use.add_argument("--clear", action="store_true", help="Forget the active project.")
    use.set_defaults(handler=_handle_use)

    active = sub.add_parser("active", help="Print the project in effect for a directory.")
    active.set_defaults(handler=_handle_active)

    listing = sub.add_parser("list", help="Show every directory with an active project.")
    listing.set_defaults(handler=_handle_list)

    open_ = sub.add_parser("open", help="Print the console URL for a path in the project.")
    open_.add_argument("path", nargs="?", default="/overview", help="Console path.")
    open_.set_defaults(handler=_handle_open)

    import_ = sub.add_parser(
        "import",
        help="Apply a JSON object of {directory: alias} from --data or STDIN.",
    )
    import_.add_argument("--data", default=None, help="JSON text; STDIN is read when omitted.")
    import_.set_defaults(handler=_handle_import)

    doctor = sub.add_parser("doctor", help="Run environment diagnostics.")
    doctor.set_defaults(handler=_handle_doctor)

    return parser


# ---------------------------------------------------------------------------
# Option layering
# ---------------------------------------------------------------------------

def build_options(
    args: argparse.Namespace,
    *,
    environ: dict[str, str] | None = None,
) -> OptionBag:
    """Layer parsed flags over environment overrides over defaults."""
    defaults = OptionBag.from_mapping(
        {
            "cwd": os.getcwd(),
            "non_interactive": False,
            "verbose": False,
        }
    )

    env_values: dict[str, Any] = {}
    for key, coerce in (("project", None), ("cwd", None), ("non_interactive", coerce_bool)):
        value = env_override(f"{ENV_PREFIX}{key.upper()}", None, coerce, environ=environ)
        if value is not None:
            env_values[key] = value

    flags = {k: v for k, v in vars(args).items() if k != "handler"}
    return defaults.child(**env_values).child(**flags)


def project_dir(options: OptionBag) -> str:
    """Return the absolute directory the command operates on."""
    return str(Path(get_inherited_option(options, "cwd")).expanduser().resolve())


def resolve_project(options: OptionBag, store: ActiveProjectStore) -> str:
    """Return the project in effect, or raise :class:`NoActiveProjectError`."""
    project = get_inherited_option(options, "project")
    if project:
        logger.debug("Using project from flags/environment:", escape_markup(project))
        return project

    directory = project_dir(options)
    active = store.get_active(directory)
    if active:
        return active

    raise NoActiveProjectError(
        f"No active project for {directory}.",
        hint=append_use_suggestion(f"Or pass --project <alias> or set {ENV_PREFIX}PROJECT."),
    )


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_use(options: OptionBag, store: ActiveProjectStore) -> int:
    """Set, clear, or interactively choose the active project."""
    directory = project_dir(options)
    alias: str | None = get_inherited_option(options, "alias")
    clear: bool = get_inherited_option(options, "clear", False)

    if clear and alias:
        raise InvalidInputError("Pass either an alias or --clear, not both.")

    if not clear and not alias:
        if get_inherited_option(options, "non_interactive"):
            raise InvalidInputError(
                "A project alias is required in non-interactive mode.",
                hint="projctx use <alias>",
            )
        from projctx.cli.project_prompt import prompt_project_selection

        alias = prompt_project_selection(directory, store.known_aliases(), store.all_active())
        clear = alias is None

    if clear:
        store.clear_active(directory)
        log_success(f"Cleared active project for {escape_markup(directory)}")
        return exit_codes.SUCCESS

    store.set_active(directory, alias)
    log_success(
        f"Now using project [bold]{escape_markup(alias)}[/bold] in {escape_markup(directory)}",
    )
    return exit_codes.SUCCESS


def _handle_active(options: OptionBag, store: ActiveProjectStore) -> int:
    console.out(resolve_project(options, store))
    return exit_codes.SUCCESS


def _handle_list(options: OptionBag, store: ActiveProjectStore) -> int:
    mapping = store.all_active()
    if not mapping:
        log_bullet("No active projects recorded yet.")
        return exit_codes.SUCCESS

    from projctx.cli.project_prompt import render_active_table

    render_active_table(mapping)
    return exit_codes.SUCCESS


def _handle_open(options: OptionBag, store: ActiveProjectStore) -> int:
    from projctx.core.urls import console_url

    project = resolve_project(options, store)
    path: str = get_inherited_option(options, "path", "/")
    if not path.startswith("/"):
        path = f"/{path}"
    console.out(console_url(project, path))
    return exit_codes.SUCCESS


def _parse_import_payload(text: str) -> dict[str, str | None]:
    """Decode an import document, validating its shape."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(
            f"Import data is not valid JSON: {exc.msg} (line {exc.lineno})",
        ) from exc

    if not isinstance(payload, dict):
        raise InvalidInputError(
            "Import data must be a JSON object of {directory: alias}.",
        )
    for directory, alias in payload.items():
        if alias is not None and not isinstance(alias, str):
            raise InvalidInputError(
                f"Alias for {directory!r} must be a string or null, "
                f"got {type(alias).__name__}.",
            )
    return payload


def _handle_import(options: OptionBag, store: ActiveProjectStore) -> int:
    from projctx.cli.stdin import explain_stdin, string_to_stream

    stream = string_to_stream(get_inherited_option(options, "data"))
    if stream is None:
        explain_stdin()
        stream = sys.stdin

    payload = _parse_import_payload(stream.read())
    if not payload:
        log_warning("Nothing to import.")
        return exit_codes.SUCCESS

    base = Path(project_dir(options))
    for directory, alias in payload.items():
        key = str((base / Path(directory).expanduser()).resolve())
        store.set_active(key, alias)
        logger.debug("Imported", escape_markup(key), "->", escape_markup(alias or "(cleared)"))

    noun = "entry" if len(payload) == 1 else "entries"
    log_success(f"Imported {len(payload)} {noun}")
    return exit_codes.SUCCESS


def _handle_doctor(options: OptionBag, store: ActiveProjectStore) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from projctx.cli.doctor import run_doctor

    return run_doctor()


def _open_store() -> ActiveProjectStore:
    from projctx.infra.config_store import JsonConfigStore

    return ActiveProjectStore(JsonConfigStore())


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the projctx CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    handler: Handler = args.handler
    options = build_options(args)
    configure_logging(verbose=bool(get_inherited_option(options, "verbose")))

    return handler(options, _open_store())


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ProjctxError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exc.exit_code if exc.exit_code is not None else exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
