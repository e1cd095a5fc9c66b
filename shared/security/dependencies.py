from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from shared.config.settings import Settings
from shared.errors import Forbidden, Unauthorized

from .jwt_handler import verify_access_token
from .roles import Role

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


@dataclass(frozen=True)
class Principal:
    user_id: int
    role: Role


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_current_user(
    request: Request,
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> Principal:
    """Dependency to validate the JWT and return the calling principal."""
    if not token:
        raise Unauthorized("No token provided")

    payload = verify_access_token(token, settings)
    if payload is None:
        raise Unauthorized("Invalid token")

    try:
        principal = Principal(user_id=int(payload["sub"]), role=Role(payload["role"]))
    except (KeyError, TypeError, ValueError):
        raise Unauthorized("Invalid token")

    # Store in request state for downstream use (like rate limiting)
    request.state.user_id = principal.user_id
    return principal


def require_role(role: Role):
    """Dependency factory: lets the request through only for the given role."""

    async def _checker(principal: Principal = Depends(get_current_user)) -> Principal:
        if principal.role is not role:
            raise Forbidden()
        return principal

    return _checker
