"""
Authentication error taxonomy.

Domain-level errors raised by the auth subsystem and the services built on
it. They carry a machine-readable ``code`` and a message; the HTTP layer
decides how much of that reaches the caller.

- ValidationError: caller supplied missing/malformed input (safe to describe)
- AuthenticationFailure: bad credential or invalid session (always vague)
- NotFoundNeutralized: lookup miss that must look identical to a hit
- ConflictError: the resource already exists
- PersistenceError: the storage collaborator failed
- ConfigurationError: unusable startup configuration (fatal)
"""

from typing import Any, Optional


class AuthError(Exception):
    """Base class for all auth subsystem errors."""

    code: str = "AUTH_ERROR"
    message: str = "Authentication error"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        self.message = message or self.message
        self.code = code or self.code
        self.details = details
        super().__init__(self.message)


class ValidationError(AuthError):
    code = "VALIDATION_ERROR"
    message = "Invalid request"


class AuthenticationFailure(AuthError):
    code = "UNAUTHORIZED"
    message = "Not authenticated"


class NotFoundNeutralized(AuthError):
    code = "NOT_FOUND"
    message = "Not found"


class ConflictError(AuthError):
    code = "CONFLICT"
    message = "Conflict"


class PersistenceError(AuthError):
    code = "PERSISTENCE_ERROR"
    message = "Storage operation failed"


class ConfigurationError(AuthError):
    code = "CONFIGURATION_ERROR"
    message = "Invalid configuration"
