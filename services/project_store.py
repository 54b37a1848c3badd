"""
Project store - Facade over the storage layer.

Translates between Project values used by the calculator and the
plain dicts the storage layer persists.
"""

from __future__ import annotations
from typing import List, Optional

from calculator.models import CalculatorState, Project
from calculator.serialization import project_from_dict, project_to_dict, state_to_dict

from .auth import Session
from .storage import StorageManager
from .utils import new_project_id, now_iso


# ============================================================================
# Module-level storage instance (singleton pattern)
# ============================================================================
_storage: Optional[StorageManager] = None


def _get_storage() -> StorageManager:
    """Get or create storage manager instance."""
    global _storage
    if _storage is None:
        _storage = StorageManager()
    return _storage


def configure(storage: Optional[StorageManager]) -> None:
    """Replace the storage manager (None resets to the default on next use)."""
    global _storage
    _storage = storage


# ============================================================================
# Public API
# ============================================================================

def load_projects(session: Optional[Session] = None) -> List[Project]:
    """Load the user's projects (local projects when not signed in)."""
    return [project_from_dict(record) for record in _get_storage().load(session)]


def get_project(session: Optional[Session], project_id: str) -> Optional[Project]:
    for project in load_projects(session):
        if project.id == project_id:
            return project
    return None


def create_project(
    session: Optional[Session],
    name: str,
    state: CalculatorState,
) -> Project:
    """Create and persist a new project from a snapshot."""
    timestamp = now_iso()
    project = Project(
        id=new_project_id(),
        name=(name or "").strip() or "Untitled",
        created_at=timestamp,
        updated_at=timestamp,
        state=state,
    )
    _get_storage().create(session, project_to_dict(project))
    set_active_project_id(session, project.id)
    return project


def update_project(
    session: Optional[Session],
    project_id: str,
    name: Optional[str] = None,
    state: Optional[CalculatorState] = None,
) -> Optional[Project]:
    """Rename and/or overwrite the snapshot of a project."""
    record = _get_storage().update(
        session,
        project_id,
        now_iso(),
        name=name.strip() if name is not None else None,
        state=state_to_dict(state) if state is not None else None,
    )
    return project_from_dict(record) if record else None


def delete_project(session: Optional[Session], project_id: str) -> None:
    _get_storage().delete(session, project_id)


def get_active_project_id(session: Optional[Session] = None) -> Optional[str]:
    return _get_storage().get_active_project_id(session)


def set_active_project_id(session: Optional[Session], project_id: Optional[str]) -> None:
    _get_storage().set_active_project_id(session, project_id)


def get_last_warning(session: Optional[Session] = None) -> Optional[str]:
    """Get the last storage warning of this user (for UI display)."""
    return _get_storage().get_last_warning(session)
