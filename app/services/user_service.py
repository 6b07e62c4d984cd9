"""Account store: user and profile persistence."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profiles import profiles
from app.models.users import users
from app.schemas.users import UserCreate

logger = structlog.get_logger(__name__)

# Placeholder phone number given to every new profile
DEFAULT_PHONE_NUMBER = "07123456789"


class UserService:
    """Service for user and profile operations."""

    async def create_user(self, db: AsyncSession, user_data: UserCreate) -> dict:
        """
        Insert a new user.

        Raises:
            SQLAlchemyError: If the insert fails, e.g. on a duplicate username or email
        """
        query = (
            users.insert()
            .values(
                username=user_data.username,
                password=user_data.password,
                email=user_data.email,
            )
            .returning(users)
        )

        try:
            result = await db.execute(query)
            user = result.mappings().first()
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.warning("user_create_failed", username=user_data.username, error=str(e))
            raise

        if not user:
            raise ValueError("Failed to create user")

        logger.info("user_created", user_id=user["id"], username=user["username"])
        return dict(user)

    async def create_profile(self, db: AsyncSession, user_id: int) -> dict:
        """Insert the placeholder profile for a newly created user."""
        query = (
            profiles.insert()
            .values(
                first_name="",
                last_name="",
                profile_picture="",
                phone_number=DEFAULT_PHONE_NUMBER,
                user_id=user_id,
            )
            .returning(profiles)
        )

        try:
            result = await db.execute(query)
            profile = result.mappings().first()
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("profile_create_failed", user_id=user_id, error=str(e))
            raise

        if not profile:
            raise ValueError("Failed to create profile")

        logger.info("profile_created", profile_id=profile["id"], user_id=user_id)
        return dict(profile)

    async def get_user_by_id(self, db: AsyncSession, user_id: int) -> dict | None:
        """Get user by primary key."""
        query = select(users).where(users.c.id == user_id)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_user_by_username(self, db: AsyncSession, username: str) -> dict | None:
        """Get user by username."""
        query = select(users).where(users.c.username == username)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_profile_by_id(self, db: AsyncSession, profile_id: int) -> dict | None:
        """Get profile by primary key."""
        query = select(profiles).where(profiles.c.id == profile_id)
        result = await db.execute(query)
        profile = result.mappings().first()
        return dict(profile) if profile else None
