"""
Fraudlr application settings.

Extends the base settings with Fraudlr-specific configuration.
"""

from fraudlr.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Fraudlr-specific settings."""

    # ==========================================================================
    # Password reset
    # ==========================================================================
    # Frontend page that accepts ?token=... and asks for a new password
    PASSWORD_RESET_URL: str = "http://localhost:3000/reset-password"


settings = Settings()
