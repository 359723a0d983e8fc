"""Infrastructure: JSON-file backed key-value store.

The store is a single JSON object on disk.  Every :meth:`get` reads the
file and every :meth:`set` rewrites it in full, so state is never cached
between calls.  Writes go to a temporary file in the same directory and
are moved into place with :func:`os.replace`.

Rules
-----
* Every ``OSError`` or JSON decoding failure is re-raised as
  :class:`~projctx.exceptions.ConfigStoreError`.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from projctx.core.env import env_override
from projctx.exceptions import ConfigStoreError
from projctx.utils import ENV_PREFIX

CONFIG_DIR_ENV: str = f"{ENV_PREFIX}CONFIG_DIR"
STORE_FILENAME: str = "configstore.json"


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "projctx"


def _coerce_dir(raw: str, _default: Path) -> Path:
    return Path(raw).expanduser()


def default_store_path() -> Path:
    """Return the store file path, honouring ``PROJCTX_CONFIG_DIR``."""
    config_dir = env_override(CONFIG_DIR_ENV, _default_config_dir(), _coerce_dir)
    return Path(config_dir) / STORE_FILENAME


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class JsonConfigStore:
    """Durable ``get``/``set`` store persisted as one JSON document.

    Parameters
    ----------
    path:
        Location of the JSON file.  Parent directories are created on
        the first write.  Defaults to :func:`default_store_path`.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path if path is not None else default_store_path()

    def __repr__(self) -> str:
        return f"JsonConfigStore(path={str(self.path)!r})"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under *key*, or *default*."""
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, rewriting the whole document."""
        document = self._read()
        document[key] = value
        self._write(document)

    # ------------------------------------------------------------------
    # File handling
    # ------------------------------------------------------------------

    def _read(self) -> dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as exc:
            raise ConfigStoreError(
                f"Config store {self.path} is not valid UTF-8: {exc.reason} "
                f"(byte {exc.start})",
                hint="Fix or delete the file to start over.",
            ) from exc
        except OSError as exc:
            raise ConfigStoreError(
                f"Cannot read config store {self.path}: {exc.strerror or exc}",
                hint="Check the file permissions or set PROJCTX_CONFIG_DIR.",
            ) from exc

        if not text.strip():
            return {}

        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigStoreError(
                f"Config store {self.path} is not valid JSON: {exc.msg} "
                f"(line {exc.lineno}, column {exc.colno})",
                hint="Fix or delete the file to start over.",
            ) from exc

        if not isinstance(document, dict):
            raise ConfigStoreError(
                f"Config store {self.path} must contain a JSON object, "
                f"found {type(document).__name__}.",
                hint="Fix or delete the file to start over.",
            )
        return document

    def _write(self, document: dict[str, Any]) -> None:
        payload = json.dumps(document, indent=2, sort_keys=True) + "\n"
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=".configstore-",
                suffix=".tmp",
                dir=self.path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise ConfigStoreError(
                f"Cannot write config store {self.path}: {exc.strerror or exc}",
                hint="Check the directory permissions or set PROJCTX_CONFIG_DIR.",
            ) from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
