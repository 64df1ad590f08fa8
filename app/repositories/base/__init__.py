"""
Base repositories package.
"""

from app.repositories.base.base_repository import BaseRepository, RepositoryError

__all__ = [
    "BaseRepository",
    "RepositoryError",
]
