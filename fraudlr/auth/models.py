"""
Value objects shared across the auth components.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class SessionClaims:
    """Identity data embedded in a session token. Never holds secrets."""

    user_id: str
    email: str
    display_name: str
    tier: str

    def to_payload(self) -> Dict[str, str]:
        """Claim names as they appear inside the token."""
        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.display_name,
            "tier": self.tier,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SessionClaims":
        """
        Rebuild claims from a decoded token payload.

        Raises:
            ValueError: If a claim is missing or not a string
        """
        values = {}
        for field, claim in (
            ("user_id", "id"),
            ("email", "email"),
            ("display_name", "name"),
            ("tier", "tier"),
        ):
            value = payload.get(claim)
            if not isinstance(value, str):
                raise ValueError(f"Token claim {claim!r} missing or not a string")
            values[field] = value

        if not values["user_id"]:
            raise ValueError("Token claim 'id' is empty")

        return cls(**values)


@dataclass(frozen=True)
class ResetTokenRecord:
    """Hashed-at-rest form of a password reset token."""

    hashed_token: str
    expires_at: datetime
