from fastapi import APIRouter, Depends, Request
from passlib.context import CryptContext
from slowapi import Limiter
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.settings import Settings
from shared.schemas import Message
from shared.security import (
    Principal,
    get_current_user,
    get_password_context,
    get_settings,
)

from .schemas import TokenResponse, UserCreate, UserLogin, UserResponse
from .service import AuthService


def build_router(limiter: Limiter, rate_limit: str) -> APIRouter:
    """Auth routes, with register and login throttled by the app's own limiter."""
    router = APIRouter(prefix="/auth", tags=["Authentication"])

    @router.post(
        "/register",
        response_model=Message,
        summary="Register a new user account",
    )
    @limiter.limit(rate_limit)
    async def register(
        request: Request,
        payload: UserCreate,
        db: AsyncSession = Depends(get_db),
        pwd_context: CryptContext = Depends(get_password_context),
    ):
        await AuthService.register(db, pwd_context, payload)
        return Message(msg="User registered")

    @router.post(
        "/login",
        response_model=TokenResponse,
        summary="Authenticate and receive a JWT access token",
    )
    @limiter.limit(rate_limit)
    async def login(
        request: Request,
        payload: UserLogin,
        db: AsyncSession = Depends(get_db),
        pwd_context: CryptContext = Depends(get_password_context),
        settings: Settings = Depends(get_settings),
    ):
        return await AuthService.login(db, pwd_context, settings, payload)

    @router.get(
        "/me",
        response_model=UserResponse,
        summary="Get the current authenticated user's profile",
    )
    async def get_me(
        principal: Principal = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await AuthService.get_user_by_id(db, principal.user_id)

    return router
