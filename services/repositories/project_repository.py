"""Project repository - handles all project CRUD operations on a project list."""

from __future__ import annotations
import json
from typing import Any, Dict, List, Optional


class ProjectRepository:
    """
    Manages project records stored as plain dicts:

        {"id", "name", "createdAt", "updatedAt", "state"}

    Every operation returns new data; the input list is never modified.
    """

    @staticmethod
    def _copy(projects: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        # Deep copy to avoid mutations
        return json.loads(json.dumps(projects))

    @staticmethod
    def list_all(projects: Any) -> List[Dict[str, Any]]:
        """Get all valid projects, most recently updated first."""
        if not isinstance(projects, list):
            return []

        items = [p for p in projects if isinstance(p, dict) and p.get("id")]
        return sorted(items, key=lambda p: str(p.get("updatedAt") or ""), reverse=True)

    @staticmethod
    def get_by_id(projects: List[Dict[str, Any]], project_id: str) -> Optional[Dict[str, Any]]:
        """Get project by ID."""
        for p in ProjectRepository.list_all(projects):
            if str(p.get("id")) == str(project_id):
                return p
        return None

    @staticmethod
    def add(projects: List[Dict[str, Any]], record: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Append a project record. Raises ValueError on a duplicate ID."""
        if ProjectRepository.get_by_id(projects, record.get("id", "")) is not None:
            raise ValueError(f"Project '{record.get('id')}' already exists.")

        updated = ProjectRepository._copy(ProjectRepository.list_all(projects))
        updated.append(json.loads(json.dumps(record)))
        return updated

    @staticmethod
    def update(
        projects: List[Dict[str, Any]],
        project_id: str,
        updated_at: str,
        name: Optional[str] = None,
        state: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Update name and/or state of a project.

        Returns:
            Updated project list (unchanged if the ID is unknown)
        """
        updated = ProjectRepository._copy(ProjectRepository.list_all(projects))
        for p in updated:
            if str(p.get("id")) == str(project_id):
                if name is not None:
                    p["name"] = name
                if state is not None:
                    p["state"] = json.loads(json.dumps(state))
                p["updatedAt"] = updated_at
                break
        return updated

    @staticmethod
    def delete(projects: List[Dict[str, Any]], project_id: str) -> List[Dict[str, Any]]:
        """Delete project by ID."""
        return [
            p for p in ProjectRepository._copy(ProjectRepository.list_all(projects))
            if str(p.get("id")) != str(project_id)
        ]
