"""
HTTP rendering of auth domain errors.
"""

import logging

from fraudlr.auth.errors import (
    AuthError,
    AuthenticationFailure,
    ConflictError,
    ValidationError,
)
from fraudlr.utils.exceptions import (
    APIException,
    BadRequestException,
    ConflictException,
    InternalServerException,
    UnauthorizedException,
)

logger = logging.getLogger(__name__)


def to_http_exception(error: AuthError) -> APIException:
    """
    Translate a domain error into the HTTP exception returned to the caller.

    Validation and conflict messages are passed through. Authentication
    failures keep only their generic message. Anything else (persistence,
    configuration, a stray NotFoundNeutralized) becomes an opaque 500 and
    is logged here with its detail.
    """
    if isinstance(error, ValidationError):
        return BadRequestException(error.message, code=error.code, details=error.details)
    if isinstance(error, AuthenticationFailure):
        return UnauthorizedException(error.message, code=error.code)
    if isinstance(error, ConflictError):
        return ConflictException(error.message, code=error.code)

    logger.error(f"{type(error).__name__} ({error.code}): {error.message}", exc_info=error)
    return InternalServerException(message="An error occurred while processing your request")
