"""Auth API routes for registration, login, token refresh and profile."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr, Field

from teamhub.core.auth.service import AuthResult, AuthService
from teamhub.core.auth.types import User
from teamhub.core.unset import UNSET
from teamhub.entrypoints.api.deps import get_auth_service
from teamhub.entrypoints.api.middleware.jwt_auth import CurrentUser

router = APIRouter(prefix="/auth", tags=["auth"])


# Request/Response models
class RegisterRequest(BaseModel):
    """Registration request body."""

    email: EmailStr
    password: str
    name: str = Field(..., min_length=1, max_length=255)


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    """Token refresh request body."""

    refresh_token: str


class LogoutRequest(BaseModel):
    """Logout request body."""

    refresh_token: str
    logout_all: bool = False


class UpdateProfileRequest(BaseModel):
    """Profile update body. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    avatar_url: str | None = None


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetConfirm(BaseModel):
    token: str
    new_password: str


class UserResponse(BaseModel):
    """Public user profile."""

    id: str
    email: str
    name: str
    avatar_url: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id.value,
            email=user.email.value,
            name=user.name,
            avatar_url=user.avatar_url.value if user.avatar_url else None,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(BaseModel):
    """Token pair with the authenticated user."""

    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        return cls(
            user=UserResponse.from_user(result.user),
            access_token=result.tokens.access_token,
            refresh_token=result.tokens.refresh_token,
        )


class SuccessResponse(BaseModel):
    success: bool


class MessageResponse(BaseModel):
    message: str


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, service: AuthServiceDep) -> AuthResponse:
    """Register a new user and sign them in.

    Args:
        body: Registration info.
        service: Auth service.

    Returns:
        Access and refresh tokens with user info.
    """
    result = await service.register(email=body.email, password=body.password, name=body.name)
    return AuthResponse.from_result(result)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, service: AuthServiceDep) -> AuthResponse:
    """Authenticate user and return tokens."""
    result = await service.login(email=body.email, password=body.password)
    return AuthResponse.from_result(result)


@router.post("/refresh", response_model=AuthResponse)
async def refresh(body: RefreshRequest, service: AuthServiceDep) -> AuthResponse:
    """Rotate a refresh token into a new token pair."""
    result = await service.refresh(body.refresh_token)
    return AuthResponse.from_result(result)


@router.post("/logout", response_model=SuccessResponse)
async def logout(body: LogoutRequest, service: AuthServiceDep) -> SuccessResponse:
    """Revoke the refresh token, or all of the user's sessions."""
    return SuccessResponse(**await service.logout(body.refresh_token, body.logout_all))


@router.get("/me", response_model=UserResponse)
async def get_me(auth: CurrentUser, service: AuthServiceDep) -> UserResponse:
    """Get current authenticated user."""
    return UserResponse.from_user(await service.get_current_user(auth.user_id))


@router.patch("/me", response_model=UserResponse)
async def update_me(
    body: UpdateProfileRequest,
    auth: CurrentUser,
    service: AuthServiceDep,
) -> UserResponse:
    """Update the current user's name and/or avatar.

    Sending ``"avatar_url": null`` removes the avatar; omitting it keeps it.
    """
    avatar_url = body.avatar_url if "avatar_url" in body.model_fields_set else UNSET
    user = await service.update_my_profile(auth.user_id, name=body.name, avatar_url=avatar_url)
    return UserResponse.from_user(user)


# Password reset endpoints


@router.post("/password-reset/request", response_model=MessageResponse)
async def request_password_reset(
    body: PasswordResetRequest, service: AuthServiceDep
) -> MessageResponse:
    """Request a password reset token.

    The response is the same whether or not the email is registered.
    """
    await service.request_password_reset(body.email)
    return MessageResponse(message="If an account exists, a reset link has been sent.")


@router.post("/password-reset/confirm", response_model=SuccessResponse)
async def confirm_password_reset(
    body: PasswordResetConfirm, service: AuthServiceDep
) -> SuccessResponse:
    """Set a new password using a reset token."""
    return SuccessResponse(**await service.reset_password(body.token, body.new_password))
