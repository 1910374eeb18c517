"""
Application Settings

Centralized configuration for the scorekeeping backend.
All values are loaded from environment variables (a local .env is honoured).
"""
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def get_bool_env(key: str, default: bool = False) -> bool:
    """Get a boolean value from environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ('true', '1', 'yes', 'on', 'enabled')


def get_int_env(key: str, default: int) -> int:
    """Get an integer value from environment variable, falling back on garbage."""
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_list_env(key: str) -> List[str]:
    """Comma separated list, empty items dropped."""
    return [item.strip() for item in os.getenv(key, "").split(",") if item.strip()]


class Settings:
    """
    Runtime settings for the application.

    To add a new setting:
    1. Add it here as a class attribute
    2. Load it from an environment variable
    3. Import `settings` where you need it
    """

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./scorekeeper.db")

    # Server
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = get_int_env("PORT", 8000)
    ALLOWED_ORIGINS: List[str] = get_list_env("ALLOWED_ORIGINS")

    # Activity codes
    ACTIVITY_CODE_LENGTH: int = get_int_env("ACTIVITY_CODE_LENGTH", 6)
    ACTIVITY_CODE_MAX_ATTEMPTS: int = get_int_env("ACTIVITY_CODE_MAX_ATTEMPTS", 5)

    # Startup
    SEED_TEAMS_ON_STARTUP: bool = get_bool_env("SEED_TEAMS_ON_STARTUP", False)

    # Admin
    FEATURE_ADMIN_RESET: bool = get_bool_env("FEATURE_ADMIN_RESET", True)

    # Rate limiting (judge score submission)
    RATE_LIMIT_ENABLED: bool = get_bool_env("RATE_LIMIT_ENABLED", True)
    SCORE_RATE_LIMIT: str = os.getenv("SCORE_RATE_LIMIT", "120/minute")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @classmethod
    def get_all(cls) -> dict:
        """Get all settings as a dictionary (database URL credentials masked)."""
        values = {
            key: value
            for key, value in cls.__dict__.items()
            if key.isupper() and not key.startswith('_')
        }
        url = values.get("DATABASE_URL", "")
        if "@" in url:
            scheme, _, rest = url.partition("://")
            values["DATABASE_URL"] = f"{scheme}://***@{rest.split('@', 1)[1]}"
        return values


# Singleton instance for easy importing
settings = Settings()
