"""User entity package."""

from .entity import PublicUser, User, UserRole, sanitize_user
from .repository import UserRepository
from .table import UserTable

__all__ = [
    "PublicUser",
    "User",
    "UserRepository",
    "UserRole",
    "UserTable",
    "sanitize_user",
]
