"""
Supabase storage implementation.
Handles all PostgREST calls for the `projects` table.

Table columns: id, user_id, name, state (jsonb), created_at, updated_at.
Rows are mapped to the same project dicts the local file uses:
{"id", "name", "createdAt", "updatedAt", "state"}.
"""

from __future__ import annotations
import json
from typing import Any, Dict, List, Optional

import requests

from services.utils import get_logger, get_secret, is_flag_set

logger = get_logger(__name__)

TABLE = "projects"


class RemoteStorageError(Exception):
    """Raised when remote project operations fail."""
    pass


class RemoteStorage:
    """Handles Supabase REST operations on the projects table."""

    def __init__(
        self,
        url: Optional[str] = None,
        anon_key: Optional[str] = None,
        timeout: float = 15,
    ):
        self.url = (url or get_secret("SUPABASE_URL") or "").rstrip("/")
        self.anon_key = anon_key or get_secret("SUPABASE_ANON_KEY")
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check if remote storage is configured and not switched off."""
        if is_flag_set("DISABLE_REMOTE"):
            return False
        return bool(self.url and self.anon_key)

    def _endpoint(self) -> str:
        return f"{self.url}/rest/v1/{TABLE}"

    def _headers(self, access_token: str) -> Dict[str, str]:
        """Build headers for PostgREST requests."""
        return {
            "apikey": self.anon_key or "",
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _request(
        self,
        method: str,
        access_token: str,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        headers = self._headers(access_token)
        if extra_headers:
            headers.update(extra_headers)

        try:
            response = requests.request(
                method,
                self._endpoint(),
                headers=headers,
                params=params,
                data=json.dumps(body) if body is not None else None,
                timeout=self.timeout,
            )

            if response.status_code in (401, 403):
                raise RemoteStorageError(
                    f"Projects {method} unauthorized (HTTP {response.status_code})"
                )

            response.raise_for_status()

        except requests.RequestException as e:
            raise RemoteStorageError(f"Projects {method} error: {e}") from e

        return response

    @staticmethod
    def _row_to_project(row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": str(row.get("id", "")),
            "name": row.get("name") or "",
            "createdAt": row.get("created_at") or "",
            "updatedAt": row.get("updated_at") or row.get("created_at") or "",
            "state": row.get("state"),
        }

    def load(self, owner_id: str, access_token: str) -> List[Dict[str, Any]]:
        """
        Load all projects of a user, most recently updated first.

        Raises:
            RemoteStorageError: If fetch fails
        """
        response = self._request(
            "GET",
            access_token,
            params={
                "select": "*",
                "user_id": f"eq.{owner_id}",
                "order": "updated_at.desc",
            },
        )

        try:
            rows = response.json()
        except ValueError as e:
            raise RemoteStorageError(f"Projects GET returned invalid JSON: {e}") from e

        if not isinstance(rows, list):
            raise RemoteStorageError("Projects GET returned an unexpected payload")

        projects = [self._row_to_project(r) for r in rows if isinstance(r, dict)]
        logger.info("Loaded %d remote projects for %s", len(projects), owner_id)
        return projects

    def create(self, owner_id: str, access_token: str, project: Dict[str, Any]) -> None:
        """Insert a project row."""
        self._request(
            "POST",
            access_token,
            body={
                "id": project["id"],
                "user_id": owner_id,
                "name": project.get("name", ""),
                "state": project.get("state"),
                "created_at": project.get("createdAt"),
                "updated_at": project.get("updatedAt"),
            },
            extra_headers={"Prefer": "return=minimal"},
        )

    def update(
        self,
        owner_id: str,
        access_token: str,
        project_id: str,
        updated_at: str,
        name: Optional[str] = None,
        state: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Update name and/or state of one of the user's projects.

        Returns:
            False when no row matched (the project is not stored remotely)
        """
        body: Dict[str, Any] = {"updated_at": updated_at}
        if name is not None:
            body["name"] = name
        if state is not None:
            body["state"] = state

        response = self._request(
            "PATCH",
            access_token,
            params={"id": f"eq.{project_id}", "user_id": f"eq.{owner_id}", "select": "id"},
            body=body,
            extra_headers={"Prefer": "return=representation"},
        )

        try:
            rows = response.json()
        except ValueError as e:
            raise RemoteStorageError(f"Projects PATCH returned invalid JSON: {e}") from e

        return isinstance(rows, list) and len(rows) > 0

    def delete(self, owner_id: str, access_token: str, project_id: str) -> None:
        """Delete one of the user's projects."""
        self._request(
            "DELETE",
            access_token,
            params={"id": f"eq.{project_id}", "user_id": f"eq.{owner_id}"},
        )
