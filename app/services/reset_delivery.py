"""
Delivery of password reset tokens.

The auth subsystem stops at producing the raw token; getting it to the
user is a separate collaborator. No mail provider is wired up yet, so the
default sender only logs the token, and only in development.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime

logger = logging.getLogger(__name__)


class ResetTokenSender(ABC):
    """Delivers a raw reset token to the account owner."""

    @abstractmethod
    async def send(self, email: str, raw_token: str, expires_at: datetime) -> None:
        """Deliver the token. Called at most once per issued token."""


class LogResetTokenSender(ResetTokenSender):
    """
    Development stand-in for an email sender.
    """

    def __init__(self, reset_url: str = "/reset-password", development: bool = True):
        """
        Args:
            reset_url: Page the user opens to choose a new password
            development: Log the full reset link (never enable in production)
        """
        self._reset_url = reset_url
        self._development = development

    async def send(self, email: str, raw_token: str, expires_at: datetime) -> None:
        if self._development:
            logger.info(
                f"Password reset link for {email}: {self._reset_url}?token={raw_token} "
                f"(expires {expires_at.isoformat()})"
            )
            return

        logger.warning(
            f"No reset token delivery configured; reset requested for {email} was not delivered"
        )
