from .jwt_handler import create_access_token, verify_access_token
from .passwords import build_password_context, get_password_context
from .dependencies import Principal, get_current_user, get_settings, require_role
from .rate_limiter import build_limiter, user_id_or_ip
from .roles import Role

__all__ = [
    "create_access_token",
    "verify_access_token",
    "build_password_context",
    "get_password_context",
    "Principal",
    "get_current_user",
    "get_settings",
    "require_role",
    "build_limiter",
    "user_id_or_ip",
    "Role",
]
