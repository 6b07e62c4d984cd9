"""Authentication service for username/password login."""

from datetime import timedelta

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import InvalidCredentialsException
from app.core.security import TokenCodec, format_expiry
from app.schemas.auth import LoginRequest, TokenPair
from app.services.user_service import UserService

logger = structlog.get_logger(__name__)


class AuthService:
    """Authentication service for handling credential checks and JWT issuance."""

    def __init__(self, token_codec: TokenCodec, user_service: UserService | None = None):
        """Initialize auth service with the token codec."""
        self.codec = token_codec
        self.users = user_service or UserService()

    async def login(self, db: AsyncSession, credentials: LoginRequest) -> TokenPair:
        """
        Check credentials and issue a token pair.

        Args:
            db: Database session
            credentials: Submitted username and password

        Returns:
            Access and refresh tokens

        Raises:
            InvalidCredentialsException: If no user matches the username and password
        """
        user = await self.users.get_user_by_username(db, credentials.username)

        # Plaintext comparison, matching how passwords are stored
        if (
            user is None
            or user["username"] != credentials.username
            or user["password"] != credentials.password
        ):
            logger.info("login_failed", username=credentials.username)
            raise InvalidCredentialsException()

        tokens = self.create_tokens(credentials.username)
        logger.info("login_succeeded", user_id=user["id"], username=credentials.username)
        return tokens

    def create_tokens(self, username: str) -> TokenPair:
        """
        Create access and refresh tokens for a user.

        Both tokens carry the same claims; only their lifetimes differ.
        """
        access = self.codec.issue(
            username,
            timedelta(minutes=settings.access_token_expire_minutes),
        )
        refresh = self.codec.issue(
            username,
            timedelta(days=settings.refresh_token_expire_days),
        )

        return TokenPair(
            access_token=access.token,
            refresh_token=refresh.token,
            access_token_expires=format_expiry(access.expires_at),
            refresh_token_expires=format_expiry(refresh.expires_at),
        )
