"""
HTTP exceptions raised by the Fraudlr auth API.

Route handlers never raise these directly; to_http_exception in
fraudlr.auth.http builds them from domain errors, and the session
dependency raises UnauthorizedException when no valid cookie is present.
The detail is always {"message", "code"} plus "details" for password
policy failures, so clients can branch on the code:

    {"detail": {"message": "Invalid email or password",
                "code": "INVALID_CREDENTIALS"}}
"""

from typing import Optional, Any, Dict

from fastapi import HTTPException


class APIException(HTTPException):
    """HTTPException whose detail carries a machine-readable auth error code."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            status_code: HTTP status code
            message: Message safe to show the caller
            code: Error code such as "EMAIL_EXISTS" or "INVALID_RESET_TOKEN"
            details: Password policy violations, when there are any
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}

        if code:
            detail["code"] = code

        if details is not None:
            detail["details"] = details

        super().__init__(
            status_code=status_code,
            detail=detail,
            headers=headers,
        )


class BadRequestException(APIException):
    """400: missing fields or a password that fails the policy."""

    def __init__(
        self,
        message: str = "Bad request",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(400, message, code, details)


class UnauthorizedException(APIException):
    """401: bad credentials, a bad reset token, or no valid session cookie."""

    def __init__(
        self,
        message: str = "Not authenticated",
        code: str = "UNAUTHORIZED",
        details: Optional[Any] = None,
    ):
        super().__init__(401, message, code, details)


class ConflictException(APIException):
    """409: signup with an email that is already registered."""

    def __init__(
        self,
        message: str = "An account with this email already exists",
        code: str = "EMAIL_EXISTS",
        details: Optional[Any] = None,
    ):
        super().__init__(409, message, code, details)


class InternalServerException(APIException):
    """500: persistence or configuration failure. The message stays generic."""

    def __init__(
        self,
        message: str = "An error occurred while processing your request",
        code: str = "INTERNAL_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(500, message, code, details)
