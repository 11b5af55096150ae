"""
Utilities module - Common helpers for API responses, exceptions, validation and time.
"""

from fraudlr.utils.responses import success_response, error_response
from fraudlr.utils.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    ConflictException,
    InternalServerException,
)
from fraudlr.utils.password import validate_password
from fraudlr.utils.durations import parse_duration
from fraudlr.utils.clock import utc_now, ensure_utc

__all__ = [
    "success_response",
    "error_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ConflictException",
    "InternalServerException",
    "validate_password",
    "parse_duration",
    "utc_now",
    "ensure_utc",
]
