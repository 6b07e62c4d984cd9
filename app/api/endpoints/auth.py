"""Signup and login endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.dependencies import DatabaseSession, TokenCodecDep, UserServiceDep, json_body
from app.schemas.auth import LoginRequest, TokenPair
from app.schemas.users import StorageErrorResponse, UserCreate, UserResponse
from app.services.auth_service import AuthService

router = APIRouter()


def _storage_error(exc: SQLAlchemyError) -> JSONResponse:
    """Serialize a failed insert into a 200 response body."""
    kind = "UniquenessViolation" if isinstance(exc, IntegrityError) else "StorageError"
    message = str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc)
    body = StorageErrorResponse(error=kind, message=message)
    return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump())


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Register a new user",
)
async def sign_up(
    user_data: Annotated[UserCreate, Depends(json_body(UserCreate))],
    db: DatabaseSession,
    user_service: UserServiceDep,
) -> UserResponse | JSONResponse:
    """
    Create a user and its placeholder profile.

    Storage failures are reported in the body with status 200; clients
    distinguish them by the ``error`` field.

    Args:
        user_data: Username, password and email; an unreadable body is treated as empty
        db: Database session
        user_service: Account store

    Returns:
        The created user, including its password, or the storage error
    """
    try:
        user = await user_service.create_user(db, user_data)
    except SQLAlchemyError as e:
        return _storage_error(e)

    # No transaction spans both inserts; a failure here leaves the user in place
    try:
        await user_service.create_profile(db, user["id"])
    except SQLAlchemyError as e:
        return _storage_error(e)

    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=TokenPair,
    status_code=status.HTTP_200_OK,
    summary="Exchange username and password for tokens",
)
async def login(
    credentials: Annotated[LoginRequest, Depends(json_body(LoginRequest))],
    db: DatabaseSession,
    codec: TokenCodecDep,
    user_service: UserServiceDep,
) -> TokenPair:
    """
    Issue an access token and a refresh token.

    Raises:
        InvalidCredentialsException: If the username or password does not match
    """
    auth_service = AuthService(codec, user_service)
    return await auth_service.login(db, credentials)
