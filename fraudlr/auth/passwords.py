"""
bcrypt password hashing.

Passwords are pre-hashed with SHA-256 before bcrypt, which removes
bcrypt's 72-byte input limit. Credentials in this format carry a
``sha256:`` marker in front of the bcrypt string. Unmarked credentials are
older plain-bcrypt hashes over the raw password; they still verify, but
only ever through the plain-bcrypt check.

Example:
    hasher = PasswordHasher(rounds=10)
    credential = hasher.hash("correct horse battery staple")  # "sha256:$2b$10$..."
    hasher.verify("correct horse battery staple", credential)  # True
    hasher.verify("wrong", credential)                         # False
    hasher.verify("anything", "not-a-bcrypt-hash")              # False
"""

import base64
import hashlib
import logging
from typing import Optional

import bcrypt as bcrypt_lib

from fraudlr.auth.errors import ConfigurationError

logger = logging.getLogger(__name__)

MIN_ROUNDS = 4
MAX_ROUNDS = 31

# Marks credentials whose bcrypt input is base64(sha256(password))
PREHASH_MARKER = "sha256:"


class PasswordHasher:
    """
    Salted, adaptive one-way hashing of secrets.

    Used for account passwords and for password-reset tokens at rest.
    """

    DEFAULT_ROUNDS = 10

    def __init__(self, rounds: int = DEFAULT_ROUNDS, accept_legacy: bool = True):
        """
        Args:
            rounds: bcrypt work factor (log2 of the iteration count)
            accept_legacy: Also accept unmarked credentials hashed without
                the SHA-256 pre-hash step
        """
        if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
            raise ConfigurationError(
                f"bcrypt rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}, got {rounds}"
            )
        self.rounds = rounds
        self.accept_legacy = accept_legacy

    def _prehash_password(self, password: str) -> bytes:
        """
        Pre-hash password with SHA-256 before bcrypt.

        This handles bcrypt's 72-byte limit and ensures consistent
        behavior across all password lengths.
        """
        sha256_hash = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(sha256_hash)

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt."""
        salt = bcrypt_lib.gensalt(rounds=self.rounds)
        hashed = bcrypt_lib.hashpw(self._prehash_password(password), salt).decode("utf-8")
        return PREHASH_MARKER + hashed

    def verify(self, password: str, hashed: Optional[str]) -> bool:
        """
        Check a password against a stored credential.

        Malformed or missing credentials never raise; they simply do not
        match, so callers cannot tell them apart from a wrong password.
        """
        if not isinstance(password, str) or not isinstance(hashed, str) or not hashed:
            return False

        try:
            if hashed.startswith(PREHASH_MARKER):
                return self._checkpw(
                    self._prehash_password(password), hashed[len(PREHASH_MARKER):]
                )

            if not self.accept_legacy:
                return False

            # Legacy credential: the raw password is the bcrypt input
            return self._checkpw(password.encode("utf-8"), hashed)
        except UnicodeError:
            return False

    @staticmethod
    def _checkpw(candidate: bytes, hashed: str) -> bool:
        try:
            return bcrypt_lib.checkpw(candidate, hashed.encode("utf-8"))
        except ValueError:
            # Not a bcrypt hash, or a legacy password past bcrypt's input limit
            logger.debug("Stored credential could not be checked as bcrypt")
            return False
