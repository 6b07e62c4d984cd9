"""Profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ProfileResponse(BaseModel):
    """Profile schema for API responses; defaults form the zero-valued record."""

    model_config = ConfigDict(from_attributes=True)

    id: int = 0
    first_name: str = ""
    last_name: str = ""
    profile_picture: str = ""
    phone_number: str = ""
    user_id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
