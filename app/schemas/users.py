"""User schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    """Schema for signing up a new user."""

    model_config = ConfigDict(extra="ignore")

    username: str = ""
    password: str = ""
    email: str = ""


class UserResponse(BaseModel):
    """
    User schema for API responses.

    The defaults form the zero-valued record returned for unknown ids.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = 0
    username: str = ""
    password: str = ""
    email: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class StorageErrorResponse(BaseModel):
    """Storage failure serialized into the signup response body."""

    error: str
    message: str
