"""Shared pytest fixtures and configuration for the projctx test suite.

Guidelines
----------
* No network access in any test.
* Never touch the real user config directory — every test gets a
  private ``PROJCTX_CONFIG_DIR`` under ``tmp_path``.
* Core tests use :class:`MemoryStore` instead of the JSON file store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

_PROJCTX_ENV = (
    "PROJCTX_PROJECT",
    "PROJCTX_CWD",
    "PROJCTX_NON_INTERACTIVE",
    "PROJCTX_CONSOLE_ORIGIN",
)


class MemoryStore:
    """In-memory stand-in for :class:`~projctx.core.protocols.KeyValueStore`.

    Records every ``set`` call so tests can assert on write patterns.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(initial or {})
        self.writes: list[tuple[str, Any]] = []

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.writes.append((key, value))
        self.data[key] = value


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point the config store at a temp dir and clear PROJCTX_* overrides."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("PROJCTX_CONFIG_DIR", str(config_dir))
    for name in _PROJCTX_ENV:
        monkeypatch.delenv(name, raising=False)
    return config_dir


@pytest.fixture(autouse=True)
def reset_cli_logging() -> Iterator[None]:
    """Drop the handler ``configure_logging`` installed during a test."""
    yield
    from projctx.cli import logger as logger_module

    if logger_module._installed_handler is not None:
        logging.getLogger(logger_module.LOGGER_NAME).removeHandler(
            logger_module._installed_handler,
        )
        logger_module._installed_handler = None
