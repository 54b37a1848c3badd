"""ID and timestamp utilities."""

from __future__ import annotations
import re
import uuid
from datetime import datetime, timezone


def slugify(text: str) -> str:
    """
    Convert text to a file-name-safe slug.

    Examples:
        'My Project' -> 'my_project'
        'Office 3rd floor!' -> 'office_3rd_floor'
    """
    text = (text or "").strip().lower()
    text = re.sub(r"[^a-z0-9]+", "_", text)
    text = re.sub(r"_+", "_", text).strip("_")
    return text or "project"


def new_project_id() -> str:
    """Random UUID, accepted as primary key by the remote projects table."""
    return str(uuid.uuid4())


def now_iso() -> str:
    """Current UTC time in ISO format with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
