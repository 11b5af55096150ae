"""
Current-user resolution for request handlers.

Combines the session cookie and the token codec. Every failure (no
cookie, malformed token, bad signature, expired token) resolves to
``None``; the specific reason only reaches the debug log.
"""

import logging
from typing import Optional, TypeVar

from starlette.requests import HTTPConnection
from starlette.responses import Response

from fraudlr.auth.cookies import SessionCookieStore
from fraudlr.auth.models import SessionClaims
from fraudlr.auth.tokens import InvalidToken, TokenCodec

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=Response)


class SessionResolver:
    """Answers "who is the caller" and starts/ends cookie sessions."""

    def __init__(self, cookie_store: SessionCookieStore, codec: TokenCodec):
        self._cookies = cookie_store
        self._codec = codec

    def current_user(self, request: HTTPConnection) -> Optional[SessionClaims]:
        """
        Resolve the caller's claims from the session cookie.

        Returns:
            The claims for a valid session, None otherwise
        """
        token = self._cookies.get(request)
        if token is None:
            return None

        result = self._codec.verify(token)
        if isinstance(result, InvalidToken):
            logger.debug(f"Session rejected ({result.reason}) on {request.url.path}")
            return None

        return result.claims

    def start_session(self, response: Response, claims: SessionClaims) -> str:
        """Issue a token for the claims and attach it to the response."""
        token = self._codec.issue(claims)
        self._cookies.set(response, token)
        logger.info(f"Session started for user {claims.user_id}")
        return token

    def end_session(self, response: ResponseT) -> ResponseT:
        """Clear the session cookie on the response."""
        return self._cookies.clear(response)
