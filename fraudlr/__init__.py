"""
Fraudlr authentication library.

Reusable building blocks for the Fraudlr API:

- auth: password hashing, signed session tokens, session cookies, reset tokens
- config: Base settings class
- database: Async MongoDB connection
- utils: Standard responses, exceptions, password validation, durations
"""

from fraudlr.auth import (
    PasswordHasher,
    TokenCodec,
    SessionCookieStore,
    ResetTokenIssuer,
    SessionResolver,
    SessionClaims,
    ResetTokenRecord,
    create_session_dependency,
)
from fraudlr.config import BaseAppSettings
from fraudlr.database import MongoDB
from fraudlr.utils import (
    success_response,
    error_response,
    APIException,
    UnauthorizedException,
    validate_password,
)

__all__ = [
    # Auth
    "PasswordHasher",
    "TokenCodec",
    "SessionCookieStore",
    "ResetTokenIssuer",
    "SessionResolver",
    "SessionClaims",
    "ResetTokenRecord",
    "create_session_dependency",
    # Config
    "BaseAppSettings",
    # Database
    "MongoDB",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "UnauthorizedException",
    "validate_password",
]
