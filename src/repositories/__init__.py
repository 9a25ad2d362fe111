"""Repository layer for Firestore data access.

This module exports all repository classes for data persistence.
"""

from src.repositories.admin_config_repo import AdminConfigRepository
from src.repositories.base import BaseRepository
from src.repositories.user_repo import UserRepository

__all__ = [
    "AdminConfigRepository",
    "BaseRepository",
    "UserRepository",
]
