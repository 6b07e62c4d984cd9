"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
    """Login credentials."""

    model_config = ConfigDict(extra="ignore")

    username: str = ""
    password: str = ""


class TokenPair(BaseModel):
    """Access and refresh tokens with their RFC 3339 expiries."""

    access_token: str
    refresh_token: str
    access_token_expires: str
    refresh_token_expires: str
