"""Runtime configuration for the app, read from the environment once at startup."""
import os
from typing import NamedTuple, Tuple

from dotenv import load_dotenv

DEFAULT_SECRET = "dev-secret"
DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
)


class Settings(NamedTuple):
    database_url: str = "sqlite:///./wedding.db"
    jwt_secret: str = DEFAULT_SECRET
    token_ttl_seconds: int = 60 * 60 * 24  # 24h
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 5000


def _split_origins(value: str | None) -> Tuple[str, ...]:
    if not value:
        return DEFAULT_CORS_ORIGINS
    return tuple(o.strip() for o in value.split(",") if o.strip())


def load_settings(env_file: str | None = None) -> Settings:
    # .env is optional; real environment variables win over it
    load_dotenv(env_file)
    defaults = Settings()
    return Settings(
        database_url=os.getenv("DATABASE_URL", defaults.database_url),
        jwt_secret=os.getenv("JWT_SECRET", DEFAULT_SECRET),
        token_ttl_seconds=int(os.getenv("TOKEN_TTL_SECONDS", defaults.token_ttl_seconds)),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", defaults.host),
        port=int(os.getenv("PORT", defaults.port)),
    )
