"""Interactive project selection for ``projctx use``.

This module is responsible for:

* Rendering a Rich table of the aliases already known to the store.
* Prompting the user to pick one via questionary arrow keys.
* Returning the chosen alias, or ``None`` when the user picks "clear".
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from projctx.cli.console import console, escape_markup
from projctx.exceptions import EnvironmentError, ProjectSelectionError

CLEAR_CHOICE: str = "__clear__"


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for mapping rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers
# ---------------------------------------------------------------------------

def _usage_count(alias: str, mapping: Mapping[str, str]) -> int:
    return sum(1 for value in mapping.values() if value == alias)


def _build_choice_label(alias: str, mapping: Mapping[str, str], current: str | None) -> str:
    """Build the label shown in the selector, e.g. ``"staging  (2 dirs) *"``."""
    count = _usage_count(alias, mapping)
    noun = "dir" if count == 1 else "dirs"
    marker = " *" if alias == current else ""
    return f"{alias:<24} ({count} {noun}){marker}"


def render_active_table(mapping: Mapping[str, str], *, title: str = "Active projects") -> None:
    """Print a Rich table of directory → alias pairs."""
    table_class = _import_rich_table()
    table = table_class(
        title=title,
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Directory", justify="left", min_width=20)
    table.add_column("Project", justify="left", style="bold", min_width=10)

    for directory in sorted(mapping):
        table.add_row(escape_markup(directory), escape_markup(mapping[directory]))

    console.print(table)


# ---------------------------------------------------------------------------
# Public prompt function
# ---------------------------------------------------------------------------

def prompt_project_selection(
    project_dir: str,
    aliases: Sequence[str],
    mapping: Mapping[str, str],
) -> str | None:
    """Prompt the user to choose the active project for *project_dir*.

    Returns
    -------
    str | None
        The chosen alias, or ``None`` if the user chose to clear the
        directory's active project.

    Raises
    ------
    ProjectSelectionError
        If no aliases are known, or the prompt is cancelled.
    """
    if not aliases:
        raise ProjectSelectionError(
            "No known projects to choose from.",
            hint="Pass an alias explicitly: projctx use <alias>",
        )

    questionary = _import_questionary()
    current = mapping.get(project_dir)

    choices = [
        questionary.Choice(
            title=_build_choice_label(alias, mapping, current),
            value=alias,
        )
        for alias in aliases
    ]
    choices.append(questionary.Choice(title="(clear active project)", value=CLEAR_CHOICE))

    selected: str | None = questionary.select(
        f"Active project for {project_dir}:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None:
        raise ProjectSelectionError(
            "No project selected.",
            hint="Use arrow keys to pick a project, then press Enter.",
        )
    if selected == CLEAR_CHOICE:
        return None
    return selected
