"""User endpoints."""

from fastapi import APIRouter

from app.dependencies import CurrentPrincipal, DatabaseSession, RecordId, UserServiceDep
from app.schemas.users import UserResponse

router = APIRouter(tags=["Users"])


@router.get("/user/{id}", response_model=UserResponse)
async def get_user(
    _principal: CurrentPrincipal,
    id: RecordId,
    db: DatabaseSession,
    user_service: UserServiceDep,
) -> UserResponse:
    """
    Get a user by id.

    An unknown id yields the zero-valued record with status 200.
    """
    user = await user_service.get_user_by_id(db, id)
    if user is None:
        return UserResponse()

    return UserResponse.model_validate(user)
