from __future__ import annotations

from fastapi import APIRouter, Depends

from salesboard.api.dependencies import get_users_service
from salesboard.schemas.users import UserProfileResponse
from salesboard.services.users_service import UsersService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}")
def user_profile(
    user_id: str,
    service: UsersService = Depends(get_users_service),
) -> ResponseEnvelope[UserProfileResponse]:
    data = service.get_profile(user_id)
    return ResponseEnvelope(data=data, meta=build_meta("users,sales,accolades", "all_time"))
