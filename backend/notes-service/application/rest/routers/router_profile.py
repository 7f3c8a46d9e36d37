from application.rest.schemas.input.profile_input import ProfileUpdate
from application.rest.schemas.output.common_output import ErrorResponse
from application.rest.schemas.output.profile_output import ProfileResponse
from domain.services.user_profile_service import UserProfileService
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from utils.dependencies import get_current_user_id, get_db, get_user_profile_service

router = APIRouter()


@router.get(
    path="/user/profile",
    description="Retrieve the current user's GitHub settings.",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": ProfileResponse,
            "description": "The user's profile; empty when nothing is configured yet.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
    },
)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    profile_service: UserProfileService = Depends(get_user_profile_service),
) -> ProfileResponse:
    """Get the current user's profile.

    Returns:
        ProfileResponse: Profile without the token itself.
    """
    profile = await profile_service.get_profile(db, user_id)
    return ProfileResponse.from_entity(profile)


@router.put(
    path="/user/profile",
    description="Update the current user's GitHub username and personal access token.",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": ProfileResponse,
            "description": "Profile updated successfully.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - profile could not be saved.",
        },
    },
)
async def update_profile(
    profile_data: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    profile_service: UserProfileService = Depends(get_user_profile_service),
) -> ProfileResponse:
    """Update the current user's GitHub settings.

    Blank fields keep their stored value, so the token can be left out
    when only the username changes.

    Args:
        profile_data (ProfileUpdate): New GitHub settings.
        user_id (str): Identifier of the authenticated user.
        db (Session): Fresh database session for this request.
        profile_service (UserProfileService): Domain service.

    Returns:
        ProfileResponse: The stored profile.
    """
    profile = await profile_service.update_profile(
        db,
        user_id,
        github_username=profile_data.github_username,
        github_token=profile_data.github_token,
    )
    return ProfileResponse.from_entity(profile)
