"""
FastAPI dependencies for the Fraudlr API.

Auth services are built once at startup by init_auth_services() and read
through the getters below.
"""

import logging
from typing import Optional

from app.config import Settings
from app.repositories.users import UserRepository
from app.services.auth_service import AuthService
from app.services.reset_delivery import LogResetTokenSender, ResetTokenSender
from fraudlr.auth import (
    PasswordHasher,
    ResetTokenIssuer,
    SessionCookieStore,
    SessionResolver,
    TokenCodec,
    create_session_dependency,
)

logger = logging.getLogger(__name__)

_session_resolver: Optional[SessionResolver] = None
_auth_service: Optional[AuthService] = None


def init_auth_services(
    settings: Settings,
    users: UserRepository,
    reset_sender: Optional[ResetTokenSender] = None,
) -> None:
    """
    Initialize auth services from settings.

    Called once at application startup. Fails fast on unusable
    configuration (missing or weak signing secret, bad durations).

    Args:
        settings: Application settings
        users: User persistence
        reset_sender: Reset token delivery; defaults to the logging sender
    """
    global _session_resolver, _auth_service

    settings.validate_required()

    token_ttl = settings.get_token_ttl()
    hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    codec = TokenCodec(
        secret=settings.resolve_jwt_secret(),
        ttl=token_ttl,
        algorithm=settings.JWT_ALGORITHM,
    )
    cookie_store = SessionCookieStore(
        cookie_name=settings.auth_cookie_name(),
        secure=settings.cookie_secure(),
        max_age=int(token_ttl.total_seconds()),
    )

    if reset_sender is None:
        reset_sender = LogResetTokenSender(
            reset_url=settings.PASSWORD_RESET_URL,
            development=settings.is_development(),
        )

    _session_resolver = SessionResolver(cookie_store=cookie_store, codec=codec)
    _auth_service = AuthService(
        users=users,
        hasher=hasher,
        reset_issuer=ResetTokenIssuer(hasher, ttl=settings.get_reset_token_ttl()),
        reset_sender=reset_sender,
        password_min_length=settings.PASSWORD_MIN_LENGTH,
    )

    logger.info(
        f"Auth services initialized (cookie={cookie_store.cookie_name}, "
        f"secure={cookie_store.secure}, token_ttl={token_ttl})"
    )


def get_session_resolver() -> SessionResolver:
    """Get the session resolver."""
    if _session_resolver is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _session_resolver


def get_auth_service() -> AuthService:
    """Get the account auth service."""
    if _auth_service is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _auth_service


# Route dependency: raises 401 unless the caller has a valid session
require_user = create_session_dependency(get_session_resolver)
