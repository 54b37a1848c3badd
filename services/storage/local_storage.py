"""
Local file storage implementation.
Handles project persistence to a local JSON file.
"""

from __future__ import annotations
import json
import os
from pathlib import Path
from typing import Any, Dict

from services.utils import get_logger

logger = get_logger(__name__)


def empty_document() -> Dict[str, Any]:
    return {"projects": [], "activeProjectId": None}


class LocalStorage:
    """Handles local file operations for the projects document."""

    def __init__(self, file_path: Path):
        """
        Initialize local storage.

        Args:
            file_path: Path to the projects JSON file
        """
        self.file_path = file_path

    def load(self) -> Dict[str, Any]:
        """
        Load projects document from local file.

        Returns:
            Dict with 'projects' and 'activeProjectId' keys
        """
        if not self.file_path.exists():
            return empty_document()

        try:
            with self.file_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s: %s", self.file_path, e)
            return empty_document()

        if not isinstance(data, dict):
            return empty_document()

        if not isinstance(data.get("projects"), list):
            data["projects"] = []
        data.setdefault("activeProjectId", None)

        return data

    def save(self, data: Dict[str, Any]) -> Path:
        """
        Save projects document to local file with atomic write.

        Args:
            data: Dict with 'projects' and 'activeProjectId'

        Returns:
            Path to saved file

        Raises:
            OSError: If write fails
        """
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

        # Atomic write: write to temp file first
        tmp_path = self.file_path.with_suffix(".json.tmp")

        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, self.file_path)
        logger.debug("Saved %d projects to %s", len(data.get("projects", [])), self.file_path)

        return self.file_path
