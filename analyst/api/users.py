"""
User API endpoints
"""

from fastapi import APIRouter, Depends

from analyst.api.deps import get_current_user
from analyst.models.user import User
from analyst.schemas.user import UserResponse

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Current user, created on first request"""
    return current_user
