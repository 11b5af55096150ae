"""
Account authentication workflows.

Signup, login, password reset request and completion, on top of the
fraudlr.auth components and a UserRepository. bcrypt work is pushed to
the threadpool so it never blocks the event loop.
"""

import logging
import secrets
from typing import Optional

from starlette.concurrency import run_in_threadpool

from app.repositories.users import UserRecord, UserRepository
from app.services.reset_delivery import ResetTokenSender
from fraudlr.auth.errors import (
    AuthenticationFailure,
    ConflictError,
    NotFoundNeutralized,
    ValidationError,
)
from fraudlr.auth.passwords import PasswordHasher
from fraudlr.auth.reset_tokens import ResetTokenIssuer, ResetTokenStatus
from fraudlr.utils.clock import Clock, utc_now
from fraudlr.utils.password import validate_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
INVALID_RESET_TOKEN_MESSAGE = "Invalid or expired reset token"


class AuthService:
    """
    Handles account credential operations.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        reset_issuer: ResetTokenIssuer,
        reset_sender: ResetTokenSender,
        password_min_length: int = 8,
        clock: Clock = utc_now,
    ):
        """
        Initialize AuthService.

        Args:
            users: User persistence
            hasher: Password hasher (also used for dummy timing work)
            reset_issuer: Creates and checks password reset tokens
            reset_sender: Delivers raw reset tokens to users
            password_min_length: Minimum accepted password length
            clock: Returns the current aware UTC datetime
        """
        self._users = users
        self._hasher = hasher
        self._reset_issuer = reset_issuer
        self._reset_sender = reset_sender
        self._password_min_length = password_min_length
        self._clock = clock
        self._dummy_credential: Optional[str] = None

    async def signup(self, name: str, email: str, password: str) -> UserRecord:
        """
        Create a new account.

        Returns:
            The created user

        Raises:
            ValidationError: Missing name or weak password
            ConflictError: Email already registered
        """
        name = (name or "").strip()
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")

        self._check_password_policy(password)

        existing = await self._users.get_by_email(email)
        if existing:
            raise ConflictError("An account with this email already exists", code="EMAIL_EXISTS")

        password_hash = await run_in_threadpool(self._hasher.hash, password)
        user = await self._users.create(name=name, email=email, password_hash=password_hash)

        logger.info(f"Account created for user {user.id}")
        return user

    async def login(self, email: str, password: str) -> UserRecord:
        """
        Check credentials.

        Unknown email and wrong password fail identically, and both spend
        one bcrypt verification.

        Raises:
            AuthenticationFailure: Credentials did not match
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self._users.get_by_email(email)
        if user is None:
            await run_in_threadpool(self._hasher.verify, password, await self._get_dummy_credential())
            logger.info("Login failed: unknown account")
            raise AuthenticationFailure(INVALID_CREDENTIALS_MESSAGE, code="INVALID_CREDENTIALS")

        if not await run_in_threadpool(self._hasher.verify, password, user.password):
            logger.info(f"Login failed: wrong password for user {user.id}")
            raise AuthenticationFailure(INVALID_CREDENTIALS_MESSAGE, code="INVALID_CREDENTIALS")

        await self._users.touch_login(user.id)
        logger.info(f"Login succeeded for user {user.id}")
        return user

    async def request_password_reset(self, email: str) -> None:
        """
        Issue, store and deliver a reset token.

        Raises:
            NotFoundNeutralized: No account for this email. Callers must
                answer exactly as they would on success.
        """
        if not email:
            raise ValidationError("Email is required")

        user = await self._users.get_by_email(email)
        if user is None:
            # Same hashing work as the found path
            await run_in_threadpool(self._hasher.hash, secrets.token_hex(32))
            raise NotFoundNeutralized("No account for reset request")

        raw_token, record = await run_in_threadpool(self._reset_issuer.issue, user.id)
        await self._users.save_reset_token(user.id, record)

        try:
            await self._reset_sender.send(user.email, raw_token, record.expires_at)
        except Exception as e:
            # The record is stored; the user can request another token
            logger.warning(f"Failed to deliver reset token for user {user.id}: {e}")

    async def reset_password(self, token: str, new_password: str) -> UserRecord:
        """
        Complete a password reset.

        Returns:
            The user whose password was changed

        Raises:
            ValidationError: Missing token or weak password
            AuthenticationFailure: No active reset record matches the token
        """
        if not token or not new_password:
            raise ValidationError("Token and password are required")

        self._check_password_policy(new_password)

        candidates = await self._users.list_with_active_reset_tokens(self._clock())
        for user in candidates:
            status = await run_in_threadpool(self._reset_issuer.inspect, token, user.reset_record)
            if status is ResetTokenStatus.MISMATCH or status is ResetTokenStatus.MISSING:
                continue
            if status is ResetTokenStatus.EXPIRED:
                logger.info(f"Expired reset token presented for user {user.id}")
                break

            password_hash = await run_in_threadpool(self._hasher.hash, new_password)
            consumed = await self._users.consume_reset_token(
                user.id, user.reset_token, password_hash
            )
            if not consumed:
                # Another request used or replaced this token first
                logger.info(f"Reset token for user {user.id} was already consumed")
                break

            logger.info(f"Password reset completed for user {user.id}")
            return user

        raise AuthenticationFailure(INVALID_RESET_TOKEN_MESSAGE, code="INVALID_RESET_TOKEN")

    async def get_profile(self, user_id: str) -> UserRecord:
        """
        Load the account behind a session.

        Raises:
            AuthenticationFailure: The account no longer exists
        """
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise AuthenticationFailure("Not authenticated")
        return user

    def _check_password_policy(self, password: str) -> None:
        is_valid, errors = validate_password(password, min_length=self._password_min_length)
        if not is_valid:
            raise ValidationError(errors[0], code="WEAK_PASSWORD", details={"errors": errors})

    async def _get_dummy_credential(self) -> str:
        if self._dummy_credential is None:
            self._dummy_credential = await run_in_threadpool(
                self._hasher.hash, secrets.token_urlsafe(16)
            )
        return self._dummy_credential
