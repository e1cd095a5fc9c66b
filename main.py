from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shared.config.database import Base, build_engine, build_sessionmaker
from shared.config.settings import Settings
from shared.errors import install_exception_handlers
from shared.observability import setup_observability
from shared.security import build_limiter, build_password_context

# IMPORTANT: import models so they register with Base
from services.auth_service import models as auth_models  # noqa: F401
from services.product_service import models as product_models  # noqa: F401
from services.cart_service import models as cart_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401

from services.auth_service.router import build_router as build_auth_router
from services.product_service.router import router as product_router
from services.cart_service.router import router as cart_router
from services.order_service.router import router as order_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("startup_complete", tables=sorted(Base.metadata.tables.keys()))
    yield
    await engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Storefront API", version="1.0.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.sessionmaker = build_sessionmaker(app.state.engine)
    app.state.pwd_context = build_password_context(settings.bcrypt_rounds)

    # --- OBSERVABILITY BOOTSTRAP ---
    setup_observability(app, settings)

    # --- SECURITY SETUP ---
    app.state.limiter = build_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    install_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", include_in_schema=False)
    async def health_check():
        return {"service": settings.service_name, "status": "running"}

    app.include_router(build_auth_router(app.state.limiter, settings.auth_rate_limit))
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
