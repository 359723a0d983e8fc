"""Regression tests for optional CLI UI dependencies (rich/questionary).

Bootstrap commands and plain-text output keep working when the UI
packages are missing; commands that need them fail with a clean
:class:`EnvironmentError`.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from projctx.cli import exit_codes
from projctx.cli.app import main
from projctx.exceptions import EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_use_with_alias_works_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    code = main(["--cwd", str(tmp_path), "use", "proj1"])
    assert code == exit_codes.SUCCESS
    err = capsys.readouterr().err
    assert "Now using project proj1" in err
    assert "[bold]" not in err


def test_doctor_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    code = main(["doctor"])
    assert code in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)


def test_list_errors_cleanly_when_rich_missing(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    main(["--cwd", str(tmp_path), "use", "proj1"])
    _hide_rich(monkeypatch)

    with pytest.raises(EnvironmentError, match="rich is not installed"):
        main(["--cwd", str(tmp_path), "list"])


def test_interactive_use_errors_cleanly_when_questionary_missing(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    main(["--cwd", str(tmp_path), "use", "proj1"])
    _hide_questionary(monkeypatch)

    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        main(["--cwd", str(tmp_path), "use"])
