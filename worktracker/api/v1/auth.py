"""Authentication API endpoints."""
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from worktracker.database import get_db
from worktracker.dependencies import get_current_user, get_locale
from worktracker.localization.helpers import get_translation
from worktracker.models.user import User, UserRole
from worktracker.services.auth_service import AuthService
from worktracker.services.user_service import user_service
from worktracker.schemas.auth import RegisterResponse, TokenResponse, RefreshTokenRequest, RefreshTokenResponse
from worktracker.schemas.user import UserCreate, UserRegister, UserResponse
from worktracker.core.exceptions import UnauthorizedError

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserRegister,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
):
    """Self-service registration; new accounts are always employees."""
    new_user = await user_service.create_user(
        db,
        user_in=UserCreate(**payload.model_dump(), role=UserRole.EMPLOYEE),
        locale=locale,
    )
    tokens = await AuthService.create_tokens(new_user)
    return RegisterResponse(user=UserResponse.model_validate(new_user), **tokens)


@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
):
    """Login endpoint - returns access and refresh tokens.

    Supports OAuth2 password flow (form data) where username is the email.
    """
    user = await AuthService.authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise UnauthorizedError(get_translation("auth.bad_credentials", locale))

    tokens = await AuthService.create_tokens(user)
    return TokenResponse(**tokens)


@router.post("/refresh", response_model=RefreshTokenResponse)
async def refresh_token(
    request: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db),
    locale: str = Depends(get_locale),
):
    """Exchange a refresh token for a new access token."""
    tokens = await AuthService.refresh_access_token(db, request.refresh_token, locale)
    return RefreshTokenResponse(**tokens)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """Get current authenticated user information."""
    return current_user
