"""
Application configuration with environment-specific secrets management.

Supported environment files (loaded in order of precedence):
1. .env.{ENVIRONMENT} (e.g., .env.production, .env.development)
2. .env (fallback)

Required secrets for production:
- DATABASE_URL (the team_mappings / match_failures store)
"""
import os
import logging
from pathlib import Path
from typing import Optional, Literal
from pydantic_settings import BaseSettings
from pydantic import ConfigDict

# Get the project root directory (3 levels up from this file)
PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_DATABASE_URL = "sqlite:///./event_matching.db"

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings with environment-specific configuration."""

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    model_config = ConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Allow extra fields from .env
    )

    # Application
    APP_NAME: str = "Event Matching API"
    APP_VERSION: str = "1.3.0"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8001

    # Database holding user-curated team mappings and match failures
    DATABASE_URL: str = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

    # Team mapping cache
    TEAM_MAPPING_CACHE_TTL: int = 300  # 5 minutes

    # Poly-to-book matching windows (hours)
    MATCH_WINDOW_HOURS: float = 36.0
    PLACEHOLDER_WINDOW_HOURS: float = 48.0
    EXACT_MATCH_HOURS: float = 24.0
    # Near-tie threshold for MULTIPLE_GAMES_AMBIGUOUS; None disables it
    AMBIGUITY_EPSILON_HOURS: Optional[float] = None

    # Fuzzy matcher
    FUZZY_MATCH_THRESHOLD: float = 0.7

    # Discard matches whose teams don't appear in the market title
    VALIDATE_MATCHED_TEAMS: bool = True

    # CORS - comma-separated string for env var parsing
    CORS_ORIGINS_STR: str = ""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @property
    def CORS_ORIGINS(self) -> list[str]:
        """Get CORS origins with environment-aware defaults."""
        if self.CORS_ORIGINS_STR:
            origins = [o.strip() for o in self.CORS_ORIGINS_STR.split(",") if o.strip()]
            if origins:
                if self.is_production() and "*" in origins:
                    logger.warning(
                        "Wildcard CORS origins (*) are not allowed in production. "
                        "Please set explicit origins in CORS_ORIGINS_STR environment variable."
                    )
                    return []
                return origins

        if self.is_production():
            logger.warning(
                "CORS_ORIGINS_STR not set in production. "
                "Please set CORS_ORIGINS_STR environment variable with explicit origins."
            )
            return []

        return [
            "http://localhost:3000",
            "http://localhost:8001",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:8001",
        ]

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    def validate_required_secrets(self) -> list[str]:
        """
        Validate that required secrets are set for the current environment.

        Returns:
            List of missing secret names (empty if all present)
        """
        missing = []

        # The local SQLite default is only acceptable outside production
        if not self.DATABASE_URL or self.DATABASE_URL == DEFAULT_DATABASE_URL:
            if self.is_production():
                missing.append("DATABASE_URL")

        return missing

    def get_match_window_hours(self, is_placeholder_time: bool = False) -> float:
        """
        Get the half-width of the poly-to-book time window.

        Placeholder dates (midnight / end-of-day defaults) get the wider window.
        """
        if is_placeholder_time:
            return self.PLACEHOLDER_WINDOW_HOURS
        return self.MATCH_WINDOW_HOURS


def _load_env_file() -> Path:
    """
    Load the appropriate environment file based on ENVIRONMENT variable.

    Loads in order of precedence:
    1. .env.{ENVIRONMENT} (e.g., .env.production, .env.development)
    2. .env (fallback)
    """
    environment = os.getenv("ENVIRONMENT", "development")

    env_file = PROJECT_ROOT / f".env.{environment}"
    if env_file.exists():
        logger.info(f"Loading environment from {env_file.name}")
        return env_file

    default_env = PROJECT_ROOT / ".env"
    if default_env.exists():
        logger.info(f"Loading environment from .env (environment: {environment})")
        return default_env

    logger.debug(f"No environment file found for '{environment}' (checked .env.{environment}, .env)")
    return default_env


# Auto-detect and load environment file
_env_file = _load_env_file()


class _SettingsWithEnvFile(Settings):
    model_config = ConfigDict(
        env_file=str(_env_file),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )


settings = _SettingsWithEnvFile()

# Validate secrets on startup
missing_secrets = settings.validate_required_secrets()
if missing_secrets:
    logger.warning(f"Missing required secrets for {settings.ENVIRONMENT}: {', '.join(missing_secrets)}")
    if settings.is_production():
        raise ValueError(
            f"Cannot start in production with missing secrets: {', '.join(missing_secrets)}. "
            f"Please set these environment variables in .env.production"
        )
