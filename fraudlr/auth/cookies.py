"""
Session cookie handling.

The session token travels in a single HTTP-only cookie. Every mutation is
written onto the outgoing response object and that same response is
returned, so ``set``/``clear`` compose with whatever response the handler
ends up sending. Nothing is written to request-scoped state: a logout that
only touched the request would leave the browser holding the cookie.

Example:
    store = SessionCookieStore("fraudlr-auth-token", secure=True, max_age=604800)

    response = JSONResponse(success_response(...))
    store.set(response, token)

    token = store.get(request)   # None when the cookie is absent

    store.clear(response)
"""

import logging
from typing import Optional, TypeVar

from starlette.requests import HTTPConnection
from starlette.responses import Response

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_NAME = "fraudlr-auth-token"
DEFAULT_MAX_AGE_SECONDS = 60 * 60 * 24 * 7  # 7 days

ResponseT = TypeVar("ResponseT", bound=Response)


def cookie_name_for(app_name: str) -> str:
    """Cookie name used for an application's session token."""
    return f"{app_name}-auth-token"


class SessionCookieStore:
    """
    Reads and writes the session token cookie.
    """

    def __init__(
        self,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        secure: bool = True,
        max_age: int = DEFAULT_MAX_AGE_SECONDS,
        same_site: str = "lax",
        path: str = "/",
    ):
        """
        Args:
            cookie_name: Name of the session cookie
            secure: Send the cookie over HTTPS only (disable for local development)
            max_age: Cookie lifetime in seconds; mirrors the token lifetime
            same_site: SameSite attribute (lax keeps top-level navigation working)
            path: Cookie path
        """
        if max_age <= 0:
            raise ValueError("Cookie max_age must be positive")
        self.cookie_name = cookie_name
        self.secure = secure
        self.max_age = max_age
        self.same_site = same_site
        self.path = path

    def set(self, response: ResponseT, token: str) -> ResponseT:
        """Attach the session cookie to the response."""
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.max_age,
            path=self.path,
            secure=self.secure,
            httponly=True,
            samesite=self.same_site,
        )
        return response

    def get(self, request: HTTPConnection) -> Optional[str]:
        """Return the session token carried by the request, if any."""
        value = request.cookies.get(self.cookie_name)
        return value or None

    def clear(self, response: ResponseT) -> ResponseT:
        """Attach an expiring, empty session cookie to the response."""
        response.delete_cookie(
            key=self.cookie_name,
            path=self.path,
            secure=self.secure,
            httponly=True,
            samesite=self.same_site,
        )
        logger.debug(f"Cleared session cookie {self.cookie_name}")
        return response
