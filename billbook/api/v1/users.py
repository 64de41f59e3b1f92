"""User API routes."""

from fastapi import APIRouter, Depends

from billbook.api.deps import AuthUser, get_current_user
from billbook.schemas.user import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_profile(current_user: AuthUser = Depends(get_current_user)):
    """Get current user profile, as known to the identity provider."""
    return current_user
