"""
JSON envelopes for the auth routes and the health check.

Successful calls answer {"success": true, "data"?, "message"?}. Failures
that a handler renders itself (a missing session on /auth/me, a request
body that fails validation) answer {"success": false, "error": {...}}:

    {"success": false,
     "error": {"message": "Invalid request", "code": "VALIDATION_ERROR",
               "errors": [{"field": "email", "message": "..."}]}}

The reset request route always answers with success_response, whether
or not the email belongs to an account.
"""

from typing import Any, Optional, Dict


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Args:
        data: Payload, e.g. {"user": {...}} for signup, login and /auth/me
        message: e.g. "Login successful"
    """
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
    errors: Optional[list] = None,
) -> Dict[str, Any]:
    """
    Args:
        message: Message safe to show the caller
        code: Error code, e.g. "UNAUTHORIZED" or "VALIDATION_ERROR"
        details: Extra context attached by the caller
        errors: Per-field request validation failures
    """
    error: Dict[str, Any] = {"message": message}

    if code:
        error["code"] = code

    if details is not None:
        error["details"] = details

    if errors:
        error["errors"] = errors

    return {"success": False, "error": error}
