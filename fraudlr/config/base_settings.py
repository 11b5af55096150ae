"""
Base settings class for environment configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from fraudlr.config import BaseAppSettings

    class Settings(BaseAppSettings):
        SENDGRID_API_KEY: str = ""

    settings = Settings()
    settings.validate_required()
    codec = TokenCodec(settings.resolve_jwt_secret(), ttl=settings.get_token_ttl())
"""

import logging
from datetime import timedelta
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from fraudlr.auth.cookies import cookie_name_for
from fraudlr.auth.errors import ConfigurationError
from fraudlr.utils.durations import parse_duration

logger = logging.getLogger(__name__)

# Placeholder secrets that must never sign tokens outside development
DEVELOPMENT_JWT_SECRET = "fallback-secret-change-in-production"
MIN_JWT_SECRET_LENGTH = 32


class BaseAppSettings(BaseSettings):
    """
    Base settings class with common configuration options.

    Automatically loads values from environment variables.
    Extend this class for application-specific settings.
    """

    # ==========================================================================
    # Application
    # ==========================================================================
    APP_NAME: str = "fraudlr"

    # ==========================================================================
    # Database Settings
    # ==========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "fraudlr"

    # ==========================================================================
    # Authentication Settings
    # ==========================================================================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = "7d"  # e.g. "7d", "12h", "3600"

    # bcrypt work factor (2^10 iterations by default)
    BCRYPT_ROUNDS: int = 10

    RESET_TOKEN_EXPIRES_IN: str = "1h"
    PASSWORD_MIN_LENGTH: int = 8

    # ==========================================================================
    # Server Settings
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # development, staging, production

    # CORS Settings
    CORS_ORIGINS: str = "*"  # Comma-separated origins or "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",  # Allow app-specific settings
        case_sensitive=True,
    )

    def get_cors_origins(self) -> list:
        """Parse CORS_ORIGINS into a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"

    def cookie_secure(self) -> bool:
        """Session cookies are HTTPS-only everywhere except local development."""
        return not self.is_development()

    def auth_cookie_name(self) -> str:
        return cookie_name_for(self.APP_NAME)

    def get_token_ttl(self) -> timedelta:
        """Parse JWT_EXPIRES_IN."""
        return self._parse_duration("JWT_EXPIRES_IN", self.JWT_EXPIRES_IN)

    def get_reset_token_ttl(self) -> timedelta:
        """Parse RESET_TOKEN_EXPIRES_IN."""
        return self._parse_duration("RESET_TOKEN_EXPIRES_IN", self.RESET_TOKEN_EXPIRES_IN)

    def resolve_jwt_secret(self) -> str:
        """
        Return the token signing secret.

        Outside development a missing, placeholder or short secret is fatal.
        In development a missing secret falls back to a fixed placeholder,
        with a warning, so every restart keeps existing sessions valid.

        Raises:
            ConfigurationError: If the secret is unusable in this environment
        """
        secret = self.JWT_SECRET or ""

        if self.is_development():
            if not secret:
                logger.warning(
                    "JWT_SECRET is not set; using the development placeholder. "
                    "Never run like this outside development."
                )
                return DEVELOPMENT_JWT_SECRET
            if secret == DEVELOPMENT_JWT_SECRET or len(secret) < MIN_JWT_SECRET_LENGTH:
                logger.warning("JWT_SECRET is weak; acceptable only in development")
            return secret

        if not secret:
            raise ConfigurationError(f"JWT_SECRET is required in {self.ENVIRONMENT}")
        if secret == DEVELOPMENT_JWT_SECRET:
            raise ConfigurationError("JWT_SECRET is set to the development placeholder")
        if len(secret) < MIN_JWT_SECRET_LENGTH:
            raise ConfigurationError(
                f"JWT_SECRET must be at least {MIN_JWT_SECRET_LENGTH} characters"
            )
        return secret

    def validate_required(self) -> None:
        """
        Validate that required settings are configured.

        Raises:
            ConfigurationError: If any setting is missing or unusable
        """
        errors = []

        try:
            self.resolve_jwt_secret()
        except ConfigurationError as e:
            errors.append(e.message)

        if self.JWT_ALGORITHM != "HS256":
            errors.append(f"JWT_ALGORITHM {self.JWT_ALGORITHM} is not supported (use HS256)")

        for parse in (self.get_token_ttl, self.get_reset_token_ttl):
            try:
                parse()
            except ConfigurationError as e:
                errors.append(e.message)

        if not 4 <= self.BCRYPT_ROUNDS <= 31:
            errors.append("BCRYPT_ROUNDS must be between 4 and 31")

        if errors:
            raise ConfigurationError("Configuration errors:\n- " + "\n- ".join(errors))

    @staticmethod
    def _parse_duration(name: str, value: str) -> timedelta:
        try:
            return parse_duration(value)
        except ValueError as e:
            raise ConfigurationError(f"{name}: {e}") from e
