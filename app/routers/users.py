# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path

from app.dependencies import UserServiceDep
from core.models.user import UserProfile

router = APIRouter()


@router.get("/{user_id}", response_model=UserProfile)
def get_user(
    user_id: Annotated[str, Path(description="User id")],
    service: UserServiceDep,
):
    """
    Get a user's profile.

    The password hash is never included; owned posts are joined with their
    title and body.
    """
    return service.get_profile(user_id)
