"""
Storage Manager - Orchestrates remote and local project storage.

Strategy:
- Signed in and remote configured: remote is the source of truth, a
  per-user local file is kept as cache and as fallback
- Not signed in: everything lives in the local projects file
- A remote failure disables remote for that user for the rest of the
  process; the operation continues against the local copy and a warning
  is recorded for that user only
- Writes that never reached the remote are queued in the per-user cache
  ("pendingSync" / "pendingDeletes") and pushed on the next successful load

Writes are whole-record: the last save of a project wins.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, TYPE_CHECKING

from services.repositories import ProjectRepository
from services.utils import get_data_dir, get_logger, get_secret, slugify

from .local_storage import LocalStorage
from .remote_storage import RemoteStorage, RemoteStorageError

if TYPE_CHECKING:
    from services.auth import Session

logger = get_logger(__name__)

PENDING_SYNC_KEY = "pendingSync"
PENDING_DELETES_KEY = "pendingDeletes"


class StorageManager:
    """Coordinates remote and local storage with fallback logic."""

    def __init__(
        self,
        local_path: Optional[Path] = None,
        remote: Optional[RemoteStorage] = None,
    ):
        """
        Initialize storage manager.

        Args:
            local_path: Path to the anonymous projects file. If None, uses default.
            remote: Remote backend. If None, configured from settings.
        """
        self.local_path = local_path or self._get_default_path()
        self.remote = remote or RemoteStorage()
        self.local = LocalStorage(self.local_path)
        self._remote_disabled_for: Set[str] = set()
        self._warnings: Dict[str, str] = {}

    @staticmethod
    def _get_default_path() -> Path:
        """Get default projects path from settings or fallback."""
        env_path = get_secret("PROJECTS_PATH")
        if env_path:
            return Path(env_path).expanduser().resolve()
        return (get_data_dir() / "projects.json").resolve()

    @staticmethod
    def _owner_key(session: Optional["Session"]) -> str:
        return session.user_id if session is not None else ""

    def get_last_warning(self, session: Optional["Session"] = None) -> Optional[str]:
        """Get last warning message of this user (for UI display)."""
        return self._warnings.get(self._owner_key(session))

    def _set_warning(self, session: Optional["Session"], message: str) -> None:
        logger.warning(message)
        self._warnings[self._owner_key(session)] = message

    def _uses_remote(self, session: Optional["Session"]) -> bool:
        return (
            session is not None
            and session.user_id not in self._remote_disabled_for
            and self.remote.is_available()
        )

    def local_for(self, session: Optional["Session"]) -> LocalStorage:
        """Local file for this session: the shared anonymous file or a per-user cache."""
        if session is None:
            return self.local
        cache_name = f"{self.local_path.stem}_{slugify(session.user_id)}.json"
        return LocalStorage(self.local_path.with_name(cache_name))

    def _remote_call(
        self,
        session: Optional["Session"],
        action: str,
        call: Callable[[], Any],
    ) -> Tuple[bool, Any]:
        """
        Run a remote call; on failure disable remote for this user and record a warning.

        Returns:
            (succeeded, result)
        """
        if not self._uses_remote(session):
            return False, None
        try:
            result = call()
        except RemoteStorageError as e:
            self._remote_disabled_for.add(session.user_id)
            self._set_warning(session, f"Cloud storage {action} failed: {e}. Using local copy.")
            return False, None
        self._warnings.pop(session.user_id, None)
        return True, result

    def _upsert_remote(self, session: "Session", record: Dict[str, Any]) -> None:
        """Write a whole record; insert it when the remote has no such row."""
        found = self.remote.update(
            session.user_id,
            session.access_token,
            record["id"],
            record.get("updatedAt") or "",
            name=record.get("name"),
            state=record.get("state"),
        )
        if not found:
            self.remote.create(session.user_id, session.access_token, record)

    @staticmethod
    def _track_pending(
        document: Dict[str, Any],
        session: Optional["Session"],
        project_id: str,
        synced: bool,
        deleted: bool = False,
    ) -> None:
        """Queue a change that did not reach the remote (signed-in users only)."""
        if session is None:
            return
        pending = document.setdefault(PENDING_SYNC_KEY, [])
        deletes = document.setdefault(PENDING_DELETES_KEY, [])

        if project_id in pending:
            pending.remove(project_id)
        if synced:
            return
        if deleted:
            if project_id not in deletes:
                deletes.append(project_id)
        else:
            pending.append(project_id)

    def _sync(self, session: "Session", document: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Push queued local changes, then fetch the remote list."""
        deletes = document.get(PENDING_DELETES_KEY) or []
        pending = document.get(PENDING_SYNC_KEY) or []
        cached = {p.get("id"): p for p in document["projects"]}

        for project_id in deletes:
            self.remote.delete(session.user_id, session.access_token, project_id)
        for project_id in pending:
            if project_id in cached:
                self._upsert_remote(session, cached[project_id])

        if deletes or pending:
            logger.info(
                "Pushed %d offline changes and %d deletions for %s",
                len(pending), len(deletes), session.user_id,
            )
        return self.remote.load(session.user_id, session.access_token)

    def load(self, session: Optional["Session"] = None) -> List[Dict[str, Any]]:
        """
        Load project records.

        Remote first for signed-in users: queued offline changes are pushed,
        then the local cache is refreshed from the remote list. Local file
        otherwise or on failure.
        """
        local = self.local_for(session)
        document = local.load()

        ok, projects = self._remote_call(session, "load", lambda: self._sync(session, document))
        if ok:
            document["projects"] = projects
            document[PENDING_SYNC_KEY] = []
            document[PENDING_DELETES_KEY] = []
            local.save(document)

        return ProjectRepository.list_all(document["projects"])

    def create(self, session: Optional["Session"], record: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new project record and return it."""
        local = self.local_for(session)
        document = local.load()
        document["projects"] = ProjectRepository.add(document["projects"], record)

        synced, _ = self._remote_call(
            session,
            "save",
            lambda: self.remote.create(session.user_id, session.access_token, record),
        )
        self._track_pending(document, session, record["id"], synced)
        local.save(document)
        logger.info("Created project %s (%s)", record.get("id"), record.get("name"))
        return record

    def update(
        self,
        session: Optional["Session"],
        project_id: str,
        updated_at: str,
        name: Optional[str] = None,
        state: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Update a project record; returns the stored record or None if unknown."""
        local = self.local_for(session)
        document = local.load()
        projects = ProjectRepository.update(document["projects"], project_id, updated_at, name=name, state=state)
        stored = ProjectRepository.get_by_id(projects, project_id)
        if stored is None:
            return None

        document["projects"] = projects
        synced, _ = self._remote_call(session, "save", lambda: self._upsert_remote(session, stored))
        self._track_pending(document, session, project_id, synced)
        local.save(document)
        logger.info("Updated project %s", project_id)
        return stored

    def delete(self, session: Optional["Session"], project_id: str) -> None:
        """Delete a project record."""
        local = self.local_for(session)
        document = local.load()

        synced, _ = self._remote_call(
            session,
            "delete",
            lambda: self.remote.delete(session.user_id, session.access_token, project_id),
        )
        document["projects"] = ProjectRepository.delete(document["projects"], project_id)
        if document.get("activeProjectId") == project_id:
            document["activeProjectId"] = None
        self._track_pending(document, session, project_id, synced, deleted=True)
        local.save(document)
        logger.info("Deleted project %s", project_id)

    def get_active_project_id(self, session: Optional["Session"] = None) -> Optional[str]:
        return self.local_for(session).load().get("activeProjectId")

    def set_active_project_id(self, session: Optional["Session"], project_id: Optional[str]) -> None:
        local = self.local_for(session)
        document = local.load()
        document["activeProjectId"] = project_id
        local.save(document)

    def get_path(self) -> Path:
        """Get path to local projects file."""
        return self.local_path
