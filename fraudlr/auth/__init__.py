"""
Authentication module - password hashing, session tokens, cookies and reset tokens.
"""

from fraudlr.auth.errors import (
    AuthError,
    ValidationError,
    AuthenticationFailure,
    NotFoundNeutralized,
    ConflictError,
    PersistenceError,
    ConfigurationError,
)
from fraudlr.auth.models import SessionClaims, ResetTokenRecord
from fraudlr.auth.passwords import PasswordHasher
from fraudlr.auth.tokens import TokenCodec, TokenResult, ValidToken, InvalidToken
from fraudlr.auth.cookies import SessionCookieStore, cookie_name_for
from fraudlr.auth.reset_tokens import ResetTokenIssuer, ResetTokenStatus
from fraudlr.auth.session import SessionResolver
from fraudlr.auth.dependencies import create_session_dependency
from fraudlr.auth.http import to_http_exception

__all__ = [
    # Errors
    "AuthError",
    "ValidationError",
    "AuthenticationFailure",
    "NotFoundNeutralized",
    "ConflictError",
    "PersistenceError",
    "ConfigurationError",
    # Models
    "SessionClaims",
    "ResetTokenRecord",
    # Components
    "PasswordHasher",
    "TokenCodec",
    "TokenResult",
    "ValidToken",
    "InvalidToken",
    "SessionCookieStore",
    "cookie_name_for",
    "ResetTokenIssuer",
    "ResetTokenStatus",
    "SessionResolver",
    # FastAPI
    "create_session_dependency",
    "to_http_exception",
]
