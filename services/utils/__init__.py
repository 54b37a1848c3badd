"""Utility functions."""

from .id_generator import new_project_id, now_iso, slugify
from .logger import get_logger
from .path_utils import get_data_dir, get_project_root
from .secrets import get_secret, is_flag_set

__all__ = [
    "new_project_id",
    "now_iso",
    "slugify",
    "get_logger",
    "get_data_dir",
    "get_project_root",
    "get_secret",
    "is_flag_set",
]
