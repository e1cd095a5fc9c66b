import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Process configuration, built once at startup and passed to create_app()."""

    database_url: str
    jwt_secret_key: str
    port: int = 5000
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    db_timeout_seconds: float = 10.0
    db_echo: bool = False
    bcrypt_rounds: int = 12
    log_level: str = "INFO"
    auth_rate_limit: str = "10/minute"
    rate_limit_enabled: bool = True
    metrics_enabled: bool = True
    otlp_endpoint: Optional[str] = None
    service_name: str = "storefront"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise ValueError("FATAL ERROR: DATABASE_URL is not set in the environment!")

        secret_key = os.getenv("JWT_SECRET_KEY")
        if not secret_key:
            raise ValueError("FATAL ERROR: JWT_SECRET_KEY is not set in the environment!")

        return cls(
            database_url=database_url,
            jwt_secret_key=secret_key,
            port=int(os.getenv("PORT", "5000")),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24))),
            db_timeout_seconds=float(os.getenv("DB_TIMEOUT_SECONDS", "10")),
            db_echo=_env_bool("DB_ECHO", False),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            auth_rate_limit=os.getenv("AUTH_RATE_LIMIT", "10/minute"),
            rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", True),
            metrics_enabled=_env_bool("METRICS_ENABLED", True),
            otlp_endpoint=os.getenv("OTLP_ENDPOINT") or None,
            service_name=os.getenv("SERVICE_NAME", "storefront"),
        )
