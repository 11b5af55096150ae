"""
FastAPI authentication dependencies.

Provides a factory that creates the auth dependency injected into
route handlers. It reads the session cookie through a
SessionResolver.

Example:
    from fraudlr.auth import create_session_dependency

    require_user = create_session_dependency(get_session_resolver)

    @app.get("/api/cases")
    async def list_cases(user: SessionClaims = Depends(require_user)):
        return {"user_id": user.user_id}
"""

from typing import Callable

from fastapi import Request

from fraudlr.auth.models import SessionClaims
from fraudlr.auth.session import SessionResolver
from fraudlr.utils.exceptions import UnauthorizedException


def create_session_dependency(get_resolver: Callable[[], SessionResolver]):
    """
    Factory to create a dependency that requires an authenticated caller.

    Args:
        get_resolver: Callable that returns the SessionResolver instance

    Returns:
        A FastAPI dependency function returning the caller's SessionClaims
    """

    async def get_current_user(request: Request) -> SessionClaims:
        """
        Resolve the caller from the session cookie.

        Raises:
            HTTPException 401: If the session is missing, invalid or expired.
                The response never says which.
        """
        claims = get_resolver().current_user(request)
        if claims is None:
            raise UnauthorizedException(message="Not authenticated", code="UNAUTHORIZED")
        return claims

    return get_current_user
