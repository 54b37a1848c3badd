"""Repository layer for data operations."""

from .project_repository import ProjectRepository

__all__ = ["ProjectRepository"]
