"""
Auth & Reference Routes

GET /auth/me - Current user with role and edit permission
GET /statuses - Placement statuses with their badge presentation
"""

from fastapi import APIRouter, Depends
from typing import List

from placement_tracker.core.auth import get_current_user
from placement_tracker.schemas.schemas import PlacementStatus, StatusOption, UserResponse
from placement_tracker.services.status_badge import status_presentation

router = APIRouter(tags=["Meta"])


@router.get("/auth/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Identity comes from the bearer token, the role from user_roles."""
    return UserResponse(**user)


@router.get("/statuses", response_model=List[StatusOption])
async def list_statuses():
    """Options for the status filter and the company form."""
    return [StatusOption(value=s, badge=status_presentation(s)) for s in PlacementStatus]
