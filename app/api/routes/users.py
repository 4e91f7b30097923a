"""User management routes (admin only)"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_unit_of_work, require_admin
from ...application.dtos.user_dtos import UserDto, UserListResponse, UserResponse, UserStatusRequest
from ...application.use_cases.manage_users import ListUsersUseCase, SetUserStatusUseCase
from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork

router = APIRouter()


@router.get("/", response_model=UserListResponse)
async def list_users(
    role: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    admin: User = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    users = await ListUsersUseCase(unit_of_work).execute(role=role, status=status)
    return UserListResponse(users=[UserDto.from_entity(u) for u in users], total=len(users))


@router.patch("/{user_id}/status", response_model=UserResponse)
async def set_user_status(
    user_id: str,
    request: Optional[UserStatusRequest] = None,
    admin: User = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Activate or deactivate a user; an empty body toggles"""
    new_status = request.status if request else None
    user = await SetUserStatusUseCase(unit_of_work).execute(admin, user_id, new_status)
    return UserResponse(message=f"User status updated to {user.status.value}", user=UserDto.from_entity(user))
