"""
User persistence.

The auth subsystem only reads and writes a handful of user fields
(``password``, ``resetToken``, ``resetTokenExpiry``) plus the profile data
needed for session claims. UserRepository is the seam; MongoUserRepository
stores users in the ``users`` collection.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from fraudlr.auth.errors import ConflictError, PersistenceError
from fraudlr.auth.models import ResetTokenRecord, SessionClaims
from fraudlr.utils.clock import ensure_utc, utc_now

logger = logging.getLogger(__name__)

DEFAULT_TIER = "free"
DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class UserRecord:
    """Persisted user as seen by the auth subsystem."""

    id: str
    name: str
    email: str
    password: str
    tier: str = DEFAULT_TIER
    currency: str = DEFAULT_CURRENCY
    reset_token: Optional[str] = None
    reset_token_expiry: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def reset_record(self) -> Optional[ResetTokenRecord]:
        if not self.reset_token or self.reset_token_expiry is None:
            return None
        return ResetTokenRecord(
            hashed_token=self.reset_token,
            expires_at=ensure_utc(self.reset_token_expiry),
        )

    def to_claims(self) -> SessionClaims:
        return SessionClaims(
            user_id=self.id,
            email=self.email,
            display_name=self.name,
            tier=self.tier,
        )

    def to_public_dict(self) -> dict:
        """Profile fields safe to return to the account owner."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "tier": self.tier,
            "currency": self.currency,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(ABC):
    """Storage contract for user accounts."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Find a user by (case-insensitive) email."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Find a user by ID."""

    @abstractmethod
    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        tier: str = DEFAULT_TIER,
        currency: str = DEFAULT_CURRENCY,
    ) -> UserRecord:
        """
        Create a user.

        Raises:
            ConflictError: If the email is already registered
        """

    @abstractmethod
    async def touch_login(self, user_id: str) -> None:
        """Record a successful login."""

    @abstractmethod
    async def save_reset_token(self, user_id: str, record: ResetTokenRecord) -> None:
        """Store (overwrite) the user's single active reset record."""

    @abstractmethod
    async def list_with_active_reset_tokens(self, now: datetime) -> List[UserRecord]:
        """Users holding a reset record that has not expired at ``now``."""

    @abstractmethod
    async def consume_reset_token(
        self, user_id: str, reset_token_hash: str, password_hash: str
    ) -> bool:
        """
        Replace the password and clear the reset record, but only while the
        stored reset token is still ``reset_token_hash``.

        Returns:
            False if the record was already consumed or replaced
        """


class MongoUserRepository(UserRepository):
    """
    UserRepository backed by the ``users`` MongoDB collection.

    Document fields: name, email, password, tier, currency, resetToken,
    resetTokenExpiry, createdAt, updatedAt.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize MongoUserRepository.

        Args:
            db: MongoDB database connection
        """
        self._users_collection = db["users"]

    async def ensure_indexes(self) -> None:
        """Create the unique email index."""
        try:
            await self._users_collection.create_index("email", unique=True)
        except PyMongoError as e:
            raise PersistenceError(f"Failed to create user indexes: {e}") from e

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        try:
            doc = await self._users_collection.find_one({"email": normalize_email(email)})
        except PyMongoError as e:
            raise PersistenceError(f"User lookup by email failed: {e}") from e
        return self._to_record(doc) if doc else None

    async def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None

        try:
            doc = await self._users_collection.find_one({"_id": object_id})
        except PyMongoError as e:
            raise PersistenceError(f"User lookup by id failed: {e}") from e
        return self._to_record(doc) if doc else None

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        tier: str = DEFAULT_TIER,
        currency: str = DEFAULT_CURRENCY,
    ) -> UserRecord:
        now = utc_now()
        user_doc = {
            "name": name,
            "email": normalize_email(email),
            "password": password_hash,
            "tier": tier,
            "currency": currency,
            "resetToken": None,
            "resetTokenExpiry": None,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self._users_collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            raise ConflictError("An account with this email already exists", code="EMAIL_EXISTS") from e
        except PyMongoError as e:
            raise PersistenceError(f"User creation failed: {e}") from e

        user_doc["_id"] = result.inserted_id
        logger.info(f"User created: {result.inserted_id}")
        return self._to_record(user_doc)

    async def touch_login(self, user_id: str) -> None:
        await self._update(user_id, {"$set": {"updatedAt": utc_now()}}, "login update")

    async def save_reset_token(self, user_id: str, record: ResetTokenRecord) -> None:
        await self._update(
            user_id,
            {
                "$set": {
                    "resetToken": record.hashed_token,
                    "resetTokenExpiry": record.expires_at,
                    "updatedAt": utc_now(),
                }
            },
            "reset token save",
        )

    async def list_with_active_reset_tokens(self, now: datetime) -> List[UserRecord]:
        try:
            cursor = self._users_collection.find({
                "resetToken": {"$ne": None},
                "resetTokenExpiry": {"$gt": now},
            })
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise PersistenceError(f"Reset token lookup failed: {e}") from e
        return [self._to_record(doc) for doc in docs]

    async def consume_reset_token(
        self, user_id: str, reset_token_hash: str, password_hash: str
    ) -> bool:
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError) as e:
            raise PersistenceError(f"password reset failed: invalid user id {user_id!r}") from e

        try:
            result = await self._users_collection.update_one(
                {"_id": object_id, "resetToken": reset_token_hash},
                {
                    "$set": {
                        "password": password_hash,
                        "resetToken": None,
                        "resetTokenExpiry": None,
                        "updatedAt": utc_now(),
                    }
                },
            )
        except PyMongoError as e:
            raise PersistenceError(f"password reset failed: {e}") from e

        return result.matched_count == 1

    async def _update(self, user_id: str, update: dict, operation: str) -> None:
        try:
            result = await self._users_collection.update_one({"_id": ObjectId(user_id)}, update)
        except (InvalidId, TypeError) as e:
            raise PersistenceError(f"{operation} failed: invalid user id {user_id!r}") from e
        except PyMongoError as e:
            raise PersistenceError(f"{operation} failed: {e}") from e

        if result.matched_count == 0:
            raise PersistenceError(f"{operation} failed: user {user_id} not found")

    @staticmethod
    def _to_record(doc: dict) -> UserRecord:
        return UserRecord(
            id=str(doc["_id"]),
            name=doc.get("name", ""),
            email=doc.get("email", ""),
            password=doc.get("password", ""),
            tier=doc.get("tier") or DEFAULT_TIER,
            currency=doc.get("currency") or DEFAULT_CURRENCY,
            reset_token=doc.get("resetToken"),
            reset_token_expiry=doc.get("resetTokenExpiry"),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )
