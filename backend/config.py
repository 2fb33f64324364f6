"""
Runtime settings, read from the environment (and backend/.env if present).
"""
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(key: str, default: str) -> list[str]:
    raw = os.getenv(key) or default
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    database_url: str = field(
        default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///focus.db")
    )
    database_echo: bool = field(default_factory=lambda: _env_bool("DATABASE_ECHO", False))
    cors_origins: list[str] = field(
        default_factory=lambda: _env_list("CORS_ORIGINS", "http://localhost:3000")
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    default_timezone: str = field(default_factory=lambda: os.getenv("DEFAULT_TIMEZONE", "UTC"))
    # Active sessions untouched for longer than this are force-closed at startup.
    stale_session_hours: float = field(
        default_factory=lambda: float(os.getenv("STALE_SESSION_HOURS", "24"))
    )
    archive_replaced_sessions: bool = field(
        default_factory=lambda: _env_bool("ARCHIVE_REPLACED_SESSIONS", False)
    )


settings = Settings()
