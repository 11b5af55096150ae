"""
Signed session tokens (JWT, HS256).

Tokens are self-contained: the claims, issue time and expiry are signed
with a process-wide secret and verified without any storage lookup. There
is no revocation list, so the expiry is the only bound on a token's life.

Verification returns a tagged result. The failure reason is meant for
server-side logs only; callers that face users should collapse every
failure into the same outcome (see ``TokenCodec.decode``).

Example:
    codec = TokenCodec(secret=settings.resolve_jwt_secret(), ttl=timedelta(days=7))

    token = codec.issue(SessionClaims("u1", "a@b.com", "Ada", "free"))

    result = codec.verify(token)
    if isinstance(result, ValidToken):
        print(result.claims.email)
    else:
        logger.debug(f"Rejected token: {result.reason}")
"""

import binascii
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Union

from jose import jwt
from jose.exceptions import JOSEError
from jose.utils import base64url_decode, base64url_encode

from fraudlr.auth.errors import ConfigurationError
from fraudlr.auth.models import SessionClaims
from fraudlr.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(days=7)
SUPPORTED_ALGORITHMS = ("HS256",)


@dataclass(frozen=True)
class ValidToken:
    claims: SessionClaims


@dataclass(frozen=True)
class InvalidToken:
    """
    Rejected token.

    reason is one of: malformed, algorithm, signature, expired, claims.
    """

    reason: str


TokenResult = Union[ValidToken, InvalidToken]


class TokenCodec:
    """
    Issues and verifies session tokens.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ):
        """
        Initialize the codec.

        Args:
            secret: Symmetric signing key, stable across restarts of a deployment
            ttl: Default token lifetime
            algorithm: JWS algorithm (only HS256 is supported)
            clock: Returns the current aware UTC datetime
        """
        if not secret:
            raise ConfigurationError("Token signing secret must not be empty")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(f"Unsupported token algorithm: {algorithm}")
        if ttl <= timedelta(0):
            raise ConfigurationError("Token lifetime must be positive")

        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm
        self._clock = clock

    def issue(self, claims: SessionClaims, ttl: Optional[timedelta] = None) -> str:
        """
        Create a signed token for the given claims.

        Args:
            claims: Identity to embed
            ttl: Lifetime override; defaults to the codec's ttl

        Returns:
            Compact ``header.payload.signature`` token
        """
        lifetime = self.ttl if ttl is None else ttl
        if lifetime <= timedelta(0):
            raise ValueError("Token lifetime must be positive")

        issued_at = int(self._clock().timestamp())
        payload = {
            **claims.to_payload(),
            "iat": issued_at,
            "exp": issued_at + int(lifetime.total_seconds()),
        }

        token = jwt.encode(payload, self._secret, algorithm=self.algorithm)
        logger.debug(f"Issued session token for user {claims.user_id}")
        return token

    def verify(self, token: str) -> TokenResult:
        """Verify signature, expiry and claim shape of a token."""
        if not isinstance(token, str) or token.count(".") != 2:
            return InvalidToken("malformed")

        # Every segment must be canonical unpadded base64url
        if not all(_is_canonical_segment(segment) for segment in token.split(".")):
            return InvalidToken("malformed")

        try:
            header = jwt.get_unverified_header(token)
        except JOSEError:
            return InvalidToken("malformed")

        if header.get("alg") != self.algorithm:
            return InvalidToken("algorithm")

        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JOSEError:
            return InvalidToken("signature")

        expires_at = payload.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            return InvalidToken("claims")

        if self._clock().timestamp() >= expires_at:
            return InvalidToken("expired")

        try:
            claims = SessionClaims.from_payload(payload)
        except ValueError:
            return InvalidToken("claims")

        return ValidToken(claims)

    def decode(self, token: str) -> Optional[SessionClaims]:
        """
        Verify a token and return its claims, or None for any failure.
        """
        result = self.verify(token)
        if isinstance(result, InvalidToken):
            logger.debug(f"Session token rejected: {result.reason}")
            return None
        return result.claims


def _is_canonical_segment(segment: str) -> bool:
    """True if the segment is the unpadded base64url encoding of its own bytes."""
    try:
        raw = segment.encode("ascii")
        return base64url_encode(base64url_decode(raw)) == raw
    except (UnicodeError, binascii.Error, TypeError, ValueError):
        return False
