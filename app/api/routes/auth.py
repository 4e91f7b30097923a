"""Authentication and user directory routes"""

from fastapi import APIRouter, Depends, HTTPException, status

from ...api.dependencies import (
    get_current_user, get_registering_identity, get_unit_of_work, require_admin
)
from ...application.dtos.user_dtos import (
    DevLoginRequest, DevLoginResponse, RegisterAdminRequest, RegisterArtistRequest,
    RegisterFirstAdminRequest, UpdateProfileRequest, UserDto, UserResponse
)
from ...application.use_cases.dev_login import DevLoginUseCase
from ...application.use_cases.register_user import (
    RegisterAdminUseCase, RegisterArtistUseCase, RegisterFirstAdminUseCase
)
from ...application.use_cases.user_profile import RecordSessionUseCase, UpdateUserProfileUseCase
from ...core.config import settings
from ...domain.entities.user import User
from ...domain.enums import AuthMode
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.identity_service import Identity

router = APIRouter()


@router.post("/register/artist", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_artist(
    request: RegisterArtistRequest,
    identity: Identity = Depends(get_registering_identity),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Create the artist profile for a freshly signed-up identity"""
    user = await RegisterArtistUseCase(unit_of_work).execute(identity, request)
    return UserResponse(message="Artist registered successfully", user=UserDto.from_entity(user))


@router.post("/register/first-admin", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_first_admin(
    request: RegisterFirstAdminRequest,
    identity: Identity = Depends(get_registering_identity),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Bootstrap the first admin; refused once any admin exists"""
    user = await RegisterFirstAdminUseCase(unit_of_work).execute(identity, request)
    return UserResponse(message="First admin created successfully", user=UserDto.from_entity(user))


@router.post("/register/admin", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_admin(
    request: RegisterAdminRequest,
    admin: User = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    user = await RegisterAdminUseCase(unit_of_work).execute(admin, request)
    return UserResponse(message="Admin registered successfully", user=UserDto.from_entity(user))


@router.post("/login", response_model=UserResponse)
async def login(
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Record the sign-in and return the profile"""
    user = await RecordSessionUseCase(unit_of_work).login(current_user)
    return UserResponse(message="Login successful", user=UserDto.from_entity(user))


@router.post("/logout", response_model=UserResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    user = await RecordSessionUseCase(unit_of_work).logout(current_user)
    return UserResponse(message="Logout successful", user=UserDto.from_entity(user))


@router.get("/profile", response_model=UserDto)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get current user profile"""
    return UserDto.from_entity(current_user)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    user = await UpdateUserProfileUseCase(unit_of_work).execute(current_user, request)
    return UserResponse(message="Profile updated successfully", user=UserDto.from_entity(user))


@router.post("/dev-login", response_model=DevLoginResponse)
async def dev_login(
    request: DevLoginRequest,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Self-issued token for local development"""
    if settings.AUTH_MODE != AuthMode.DEV:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    token, user = await DevLoginUseCase(unit_of_work).execute(request.email)
    return DevLoginResponse(
        token=token,
        registered=user is not None,
        user=UserDto.from_entity(user) if user else None
    )
