"""Persisted mapping from project directory to active project alias.

The whole mapping lives under a single store key.  Every call reads it
fresh from the store and, for mutations, writes the complete mapping
back.  There is no in-memory cache and no locking.  Two processes
updating different directories at the same moment may lose one of the
updates; run one invocation at a time per store.

Store failures are not caught here.  A stored mapping that is not a JSON
object raises :class:`~projctx.exceptions.ConfigStoreError`.
"""

from __future__ import annotations

from projctx.core.protocols import KeyValueStore
from projctx.exceptions import ConfigStoreError

ACTIVE_PROJECTS_KEY: str = "activeProjects"


class ActiveProjectStore:
    """Read-modify-write access to the active-project mapping.

    Parameters
    ----------
    store:
        Any object satisfying the :class:`KeyValueStore` protocol.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store: KeyValueStore = store

    def _load(self) -> dict[str, str]:
        value = self._store.get(ACTIVE_PROJECTS_KEY)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ConfigStoreError(
                f"Stored {ACTIVE_PROJECTS_KEY!r} must be a JSON object, "
                f"found {type(value).__name__}.",
                hint="Fix or delete the config store file to start over.",
            )
        return dict(value)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_active(self, project_dir: str, project_alias: str | None) -> None:
        """Make *project_alias* the active project for *project_dir*.

        An empty or ``None`` alias removes *project_dir* from the
        mapping instead of storing a blank entry.
        """
        active_projects = self._load()
        if project_alias:
            active_projects[project_dir] = project_alias
        else:
            active_projects.pop(project_dir, None)

        self._store.set(ACTIVE_PROJECTS_KEY, active_projects)

    def clear_active(self, project_dir: str) -> None:
        """Forget the active project for *project_dir*."""
        self.set_active(project_dir, None)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_active(self, project_dir: str) -> str | None:
        """Return the active alias for *project_dir*, or ``None``."""
        return self._load().get(project_dir)

    def all_active(self) -> dict[str, str]:
        """Return a copy of the full directory-to-alias mapping."""
        return self._load()

    def known_aliases(self) -> list[str]:
        """Return every distinct alias in the mapping, sorted."""
        return sorted(set(self._load().values()))
