import asyncio

import structlog
from fastapi import status
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.settings import Settings
from shared.errors import BadRequest, Conflict, NotFound
from shared.security.jwt_handler import create_access_token

from .models import User
from .repository import UserRepository
from .schemas import TokenResponse, UserCreate, UserLogin

logger = structlog.get_logger(__name__)


class AuthService:

    # bcrypt is CPU-bound; run it off the event loop.
    @staticmethod
    async def _hash_password(pwd_context: CryptContext, password: str) -> str:
        return await asyncio.to_thread(pwd_context.hash, password)

    @staticmethod
    async def _verify_password(pwd_context: CryptContext, plain: str, hashed: str) -> bool:
        return await asyncio.to_thread(pwd_context.verify, plain, hashed)

    @staticmethod
    async def register(db: AsyncSession, pwd_context: CryptContext, data: UserCreate) -> User:
        # Duplicate usernames are reported as 400, matching the public contract.
        duplicate = Conflict("User exists", status_code=status.HTTP_400_BAD_REQUEST)

        existing = await UserRepository.get_by_username(db, data.username)
        if existing:
            raise duplicate

        user = User(
            username=data.username,
            hashed_password=await AuthService._hash_password(pwd_context, data.password),
            role=data.role,
        )
        try:
            user = await UserRepository.create(db, user)
        except IntegrityError:
            # lost a race against a concurrent registration of the same name
            await db.rollback()
            raise duplicate

        logger.info("user_registered", user_id=user.id, role=user.role.value)
        return user

    @staticmethod
    async def login(
        db: AsyncSession,
        pwd_context: CryptContext,
        settings: Settings,
        data: UserLogin,
    ) -> TokenResponse:
        user = await UserRepository.get_by_username(db, data.username)
        if not user or not await AuthService._verify_password(pwd_context, data.password, user.hashed_password):
            raise BadRequest("Invalid credentials")

        token = create_access_token(data={"sub": str(user.id), "role": user.role.value}, settings=settings)
        logger.info("user_logged_in", user_id=user.id)
        return TokenResponse(token=token, role=user.role)

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
        user = await UserRepository.get_by_id(db, user_id)
        if not user:
            raise NotFound("User not found")
        return user
