"""User routes: registration, login, current user, profile, admin listing.

Endpoints:
- POST /api/users/register: Create an account and return a token
- POST /api/users/login: Exchange credentials for a token
- GET /api/users/me: Current user (bearer token required)
- PUT /api/users/profile: Update the current user's profile
- GET /api/users: Active users (admin only)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from api.dependencies import get_password_hasher, get_settings, get_token_issuer, get_user_repo
from api.models import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    UpdateProfileRequest,
    UserListResponse,
    UserResponse,
)
from api.security import get_current_user_required, require_admin
from domain.model.user import User
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository
from services import auth_service
from services.password_hasher import PasswordHasher
from utils.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
):
    """Register a new user.

    Returns:
        JWT token and user info (never the password)

    Raises:
        400 Validation Error on malformed input, 400 "User already exists" on duplicate email
    """
    profile = request.profile.model_dump() if request.profile else None

    # bcrypt is CPU-bound; keep it off the event loop
    result = await run_in_threadpool(
        auth_service.register,
        repo,
        hasher,
        tokens,
        username=request.username,
        email=request.email,
        password=request.password,
        profile=profile,
        password_min_length=settings.password_min_length,
    )

    return AuthResponse(
        message="User registered successfully",
        token=result.token,
        user=UserResponse.from_domain(result.user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """Login user and return JWT token.

    Raises:
        401 "Invalid credentials" for unknown email or wrong password,
        401 "Account deactivated" for a deactivated account
    """
    result = await run_in_threadpool(
        auth_service.authenticate,
        repo,
        hasher,
        tokens,
        email=request.email,
        password=request.password,
    )

    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=UserResponse.from_domain(result.user),
    )


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(current_user: User = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return CurrentUserResponse(user=UserResponse.from_domain(current_user))


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Update first name, last name, or avatar of the current user."""
    patch = request.profile.model_dump(exclude_unset=True)
    user = auth_service.update_profile(repo, current_user, patch)

    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserResponse.from_domain(user),
    )


@router.get("", response_model=UserListResponse)
async def list_active_users(
    admin: User = Depends(require_admin),
    repo: UserRepository = Depends(get_user_repo),
):
    """List active users (admin only)."""
    users = auth_service.list_active_users(repo)
    logger.info("Listed active users", extra={"adminId": admin.id, "count": len(users)})
    return UserListResponse(users=[UserResponse.from_domain(u) for u in users], count=len(users))
