"""
FastAPI router for Auth system endpoints.

Provides signup, login, logout, current user and password reset endpoints.
Session cookies are always written onto the JSONResponse each handler
returns.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.dependencies import get_auth_service, get_session_resolver
from app.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    SignupRequest,
    UserResponse,
)
from fraudlr.auth import (
    AuthError,
    AuthenticationFailure,
    NotFoundNeutralized,
    to_http_exception,
)
from fraudlr.utils import error_response, success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

RESET_REQUESTED_MESSAGE = (
    "If this email exists in our system, password reset instructions have been sent."
)


@router.post("/signup", status_code=201)
async def signup(body: SignupRequest):
    """
    Create an account and start a session.
    """
    auth_service = get_auth_service()

    try:
        user = await auth_service.signup(
            name=body.name,
            email=str(body.email),
            password=body.password,
        )
    except AuthError as e:
        raise to_http_exception(e) from e

    response = JSONResponse(
        status_code=201,
        content=success_response(
            {"user": UserResponse(**user.to_public_dict()).model_dump()},
            message="Account created successfully",
        ),
    )
    get_session_resolver().start_session(response, user.to_claims())
    return response


@router.post("/login")
async def login(body: LoginRequest):
    """
    Authenticate with email and password and start a session.
    """
    auth_service = get_auth_service()

    try:
        user = await auth_service.login(email=str(body.email), password=body.password)
    except AuthError as e:
        raise to_http_exception(e) from e

    response = JSONResponse(
        content=success_response(
            {"user": UserResponse(**user.to_public_dict()).model_dump()},
            message="Login successful",
        ),
    )
    get_session_resolver().start_session(response, user.to_claims())
    return response


@router.post("/logout")
async def logout():
    """
    End the current session.

    The cookie deletion is attached to the returned response.
    """
    response = JSONResponse(content=success_response(message="Logout successful"))
    return get_session_resolver().end_session(response)


@router.get("/me")
async def me(request: Request):
    """
    Return the currently authenticated user.

    A stale or invalid session cookie is cleared on the 401 response.
    """
    resolver = get_session_resolver()
    claims = resolver.current_user(request)

    user = None
    if claims is not None:
        try:
            user = await get_auth_service().get_profile(claims.user_id)
        except AuthenticationFailure:
            user = None
        except AuthError as e:
            raise to_http_exception(e) from e

    if user is None:
        response = JSONResponse(
            status_code=401,
            content=error_response("Not authenticated", code="UNAUTHORIZED"),
        )
        return resolver.end_session(response)

    return success_response({"user": UserResponse(**user.to_public_dict()).model_dump()})


@router.post("/forgot-password")
async def forgot_password(body: ForgotPasswordRequest):
    """
    Request a password reset token.

    Known and unknown emails get the same response.
    """
    auth_service = get_auth_service()

    try:
        await auth_service.request_password_reset(str(body.email))
    except NotFoundNeutralized:
        logger.info("Password reset requested for an unknown email")
    except AuthError as e:
        raise to_http_exception(e) from e

    return success_response(message=RESET_REQUESTED_MESSAGE)


@router.post("/reset-password")
async def reset_password(body: ResetPasswordRequest):
    """
    Set a new password using a reset token.
    """
    auth_service = get_auth_service()

    try:
        await auth_service.reset_password(token=body.token, new_password=body.password)
    except AuthError as e:
        raise to_http_exception(e) from e

    return success_response(
        message="Password reset successful. You can now log in with your new password."
    )
