"""
Password reset tokens.

A reset token is a random secret shown to the user exactly once. Only its
bcrypt hash and an expiry are stored, so reading the database is not
enough to mint a working reset link. Delivering the raw token (email,
on-screen display) is the caller's job.
"""

import enum
import logging
import secrets
from datetime import timedelta
from typing import Optional, Tuple

from fraudlr.auth.errors import ConfigurationError
from fraudlr.auth.models import ResetTokenRecord
from fraudlr.auth.passwords import PasswordHasher
from fraudlr.utils.clock import Clock, ensure_utc, utc_now

logger = logging.getLogger(__name__)

DEFAULT_RESET_TOKEN_TTL = timedelta(hours=1)
# 32 random bytes = 256 bits, rendered as 64 hex characters
RESET_TOKEN_BYTES = 32


class ResetTokenStatus(str, enum.Enum):
    VALID = "valid"
    MISSING = "missing"
    MISMATCH = "mismatch"
    EXPIRED = "expired"


class ResetTokenIssuer:
    """
    Generates reset tokens and checks candidates against stored records.
    """

    def __init__(
        self,
        hasher: PasswordHasher,
        ttl: timedelta = DEFAULT_RESET_TOKEN_TTL,
        token_bytes: int = RESET_TOKEN_BYTES,
        clock: Clock = utc_now,
    ):
        if ttl <= timedelta(0):
            raise ConfigurationError("Reset token lifetime must be positive")
        if token_bytes < RESET_TOKEN_BYTES:
            raise ConfigurationError(
                f"Reset tokens need at least {RESET_TOKEN_BYTES} random bytes"
            )
        self._hasher = hasher
        self.ttl = ttl
        self._token_bytes = token_bytes
        self._clock = clock

    def issue(self, user_id: str) -> Tuple[str, ResetTokenRecord]:
        """
        Create a new reset token for a user.

        Returns:
            tuple of (raw_token, record). Persist the record, hand the raw
            token to the delivery channel, and keep it nowhere else.
        """
        raw_token = secrets.token_hex(self._token_bytes)
        record = ResetTokenRecord(
            hashed_token=self._hasher.hash(raw_token),
            expires_at=self._clock() + self.ttl,
        )
        logger.info(f"Issued password reset token for user {user_id}, expires {record.expires_at.isoformat()}")
        return raw_token, record

    def inspect(self, candidate: str, record: Optional[ResetTokenRecord]) -> ResetTokenStatus:
        """
        Classify a candidate token against a stored record.

        EXPIRED is only reported for a token that matches; the caller should
        ask the user to request a new one rather than retry.
        """
        if record is None or not record.hashed_token or not candidate:
            return ResetTokenStatus.MISSING

        if not self._hasher.verify(candidate, record.hashed_token):
            return ResetTokenStatus.MISMATCH

        if self._clock() >= ensure_utc(record.expires_at):
            return ResetTokenStatus.EXPIRED

        return ResetTokenStatus.VALID

    def validate(self, candidate: str, record: Optional[ResetTokenRecord]) -> bool:
        """True only for the exact issued token, before its expiry."""
        return self.inspect(candidate, record) is ResetTokenStatus.VALID
