"""FastAPI dependencies."""

from collections.abc import Awaitable, Callable
from typing import Annotated, TypeVar

import structlog
from fastapi import Depends, Header, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    InvalidTokenException,
    MalformedTokenError,
    MalformedTokenException,
)
from app.core.security import TokenCodec, get_token_codec
from app.database import get_db
from app.services.user_service import UserService

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "Bearer "

ModelT = TypeVar("ModelT", bound=BaseModel)


async def require_bearer_token(
    request: Request,
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """
    Verify the bearer token on a protected route.

    The principal is also stored on ``request.state`` for request logging.

    Args:
        request: Incoming request
        codec: Token codec holding the signing secret
        authorization: Raw Authorization header value

    Returns:
        Principal the token was issued for

    Raises:
        InvalidTokenException: If the header is missing, the signature is wrong
            or the token has expired
        MalformedTokenException: If the token cannot be decoded
    """
    if not authorization:
        logger.info("token_rejected", reason="missing")
        raise InvalidTokenException()

    # Case-sensitive prefix, no whitespace trimming
    token = authorization.removeprefix(BEARER_PREFIX)

    try:
        principal = codec.verify(token)
    except (InvalidSignatureError, ExpiredTokenError) as e:
        logger.info("token_rejected", reason=e.__class__.__name__, error=str(e))
        raise InvalidTokenException() from e
    except MalformedTokenError as e:
        logger.info("token_rejected", reason="MalformedTokenError", error=str(e))
        raise MalformedTokenException(detail=str(e)) from e

    request.state.principal = principal
    return principal


def json_body(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """
    Build a dependency that decodes the request body into ``model``.

    Decode errors are ignored. When a field has the wrong type only that
    field falls back to its default; the other string fields are kept.
    """

    async def decode(request: Request) -> ModelT:
        try:
            payload = await request.json()
        except ValueError:
            payload = {}

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.debug(
                "request_body_fields_ignored",
                model=model.__name__,
                errors=e.error_count(),
            )

        if not isinstance(payload, dict):
            return model()

        return model(
            **{
                name: value
                for name, value in payload.items()
                if name in model.model_fields and isinstance(value, str)
            }
        )

    return decode


def get_user_service() -> UserService:
    """Get the account store service."""
    return UserService()


async def record_id(id: str) -> int:
    """
    Parse the numeric record id from the path.

    Record ids are 32-bit integer columns; anything outside that range or
    not numeric parses as 0, which matches no row.
    """
    try:
        value = int(id)
    except ValueError:
        return 0
    if not -(2**31) <= value < 2**31:
        return 0
    return value


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
TokenCodecDep = Annotated[TokenCodec, Depends(get_token_codec)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CurrentPrincipal = Annotated[str, Depends(require_bearer_token)]
RecordId = Annotated[int, Depends(record_id)]
