from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .settings import Settings

Base = declarative_base()


def build_engine(settings: Settings) -> AsyncEngine:
    """Creates the async engine with bounded store timeouts."""
    url = settings.database_url
    kwargs = {"echo": settings.db_echo}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"timeout": settings.db_timeout_seconds}
    else:
        kwargs["pool_pre_ping"] = True
        kwargs["pool_timeout"] = settings.db_timeout_seconds
        if url.startswith("postgresql+asyncpg"):
            kwargs["connect_args"] = {
                "timeout": settings.db_timeout_seconds,
                "command_timeout": settings.db_timeout_seconds,
            }

    return create_async_engine(url, **kwargs)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_db(request: Request):
    async with request.app.state.sessionmaker() as session:
        yield session
