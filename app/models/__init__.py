"""Database models."""

from app.models.profiles import profiles
from app.models.users import metadata, users

__all__ = [
    "metadata",
    "profiles",
    "users",
]
