"""Profile endpoints."""

from fastapi import APIRouter

from app.dependencies import CurrentPrincipal, DatabaseSession, RecordId, UserServiceDep
from app.schemas.profiles import ProfileResponse

router = APIRouter(tags=["Profiles"])


@router.get("/profile/{id}", response_model=ProfileResponse)
async def get_profile(
    _principal: CurrentPrincipal,
    id: RecordId,
    db: DatabaseSession,
    user_service: UserServiceDep,
) -> ProfileResponse:
    """Get a profile by id; unknown ids yield the zero-valued record."""
    profile = await user_service.get_profile_by_id(db, id)
    if profile is None:
        return ProfileResponse()

    return ProfileResponse.model_validate(profile)
