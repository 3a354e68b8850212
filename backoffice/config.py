# backoffice/config.py
import os
import sys
from dataclasses import dataclass, field
from typing import List

from loguru import logger

# Use DATABASE_URL env var when available (makes containerized runs configurable)
# Fallback to the compose Postgres service.
DEFAULT_DATABASE_URL = "postgresql+asyncpg://postgres:postgres@db:5432/store_backoffice"


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    db_echo: bool = False
    title: str = "Store Back-office API"
    version: str = "1.0.0"
    server_url: str = "http://localhost:8000"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            db_echo=_as_bool(os.getenv("DB_ECHO", "false")),
            title=os.getenv("APP_TITLE", "Store Back-office API"),
            server_url=os.getenv("SERVER_URL", "http://localhost:8000"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level)
