"""Shared test fixtures for Fraudlr auth tests."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from http.cookies import SimpleCookie
from typing import Dict, List, Optional

import pytest
from starlette.requests import Request
from starlette.responses import Response

from app.repositories.users import UserRecord, UserRepository, normalize_email
from fraudlr.auth import (
    ConflictError,
    PasswordHasher,
    ResetTokenIssuer,
    ResetTokenRecord,
    SessionCookieStore,
    SessionResolver,
    TokenCodec,
)

TEST_SECRET = "test-signing-secret-0123456789abcdef"
COOKIE_NAME = "fraudlr-auth-token"
FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable UTC clock."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class CookieJar:
    """
    Minimal browser cookie jar: applies Set-Cookie headers from a response
    and builds the next request from what it holds.
    """

    def __init__(self):
        self.cookies: Dict[str, str] = {}

    def apply(self, response: Response) -> None:
        for header in response.headers.getlist("set-cookie"):
            parsed = SimpleCookie()
            parsed.load(header)
            for name, morsel in parsed.items():
                if morsel["max-age"] in ("0", 0) or morsel.value == "":
                    self.cookies.pop(name, None)
                else:
                    self.cookies[name] = morsel.value

    def request(self, path: str = "/") -> Request:
        return make_request(self.cookies, path=path)


def make_request(cookies: Optional[Dict[str, str]] = None, path: str = "/") -> Request:
    headers: List = []
    if cookies:
        header = "; ".join(f"{name}={value}" for name, value in cookies.items())
        headers.append((b"cookie", header.encode("latin-1")))
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": b"",
        "headers": headers,
    }
    return Request(scope)


class InMemoryUserRepository(UserRepository):
    """UserRepository kept in a dict, keyed by user id."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}
        self.writes: List[str] = []
        self._next_id = 1

    async def get_by_email(self, email):
        wanted = normalize_email(email)
        for user in self.users.values():
            if user.email == wanted:
                return user
        return None

    async def get_by_id(self, user_id):
        return self.users.get(user_id)

    async def create(self, name, email, password_hash, tier="free", currency="USD"):
        if await self.get_by_email(email):
            raise ConflictError("An account with this email already exists", code="EMAIL_EXISTS")
        user_id = f"{self._next_id:024x}"
        self._next_id += 1
        user = UserRecord(
            id=user_id,
            name=name,
            email=normalize_email(email),
            password=password_hash,
            tier=tier,
            currency=currency,
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
        )
        self.users[user_id] = user
        self.writes.append("create")
        return user

    async def touch_login(self, user_id):
        self.writes.append("touch_login")

    async def save_reset_token(self, user_id, record: ResetTokenRecord):
        self.users[user_id] = _replace(
            self.users[user_id],
            reset_token=record.hashed_token,
            reset_token_expiry=record.expires_at,
        )
        self.writes.append("save_reset_token")

    async def list_with_active_reset_tokens(self, now):
        return [
            user for user in self.users.values()
            if user.reset_token and user.reset_token_expiry and user.reset_token_expiry > now
        ]

    async def consume_reset_token(self, user_id, reset_token_hash, password_hash):
        user = self.users.get(user_id)
        if user is None or user.reset_token != reset_token_hash:
            return False
        self.users[user_id] = _replace(
            user,
            password=password_hash,
            reset_token=None,
            reset_token_expiry=None,
        )
        self.writes.append("consume_reset_token")
        return True


def _replace(user: UserRecord, **changes) -> UserRecord:
    return replace(user, **changes)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def hasher():
    # Minimum work factor keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def codec(clock):
    return TokenCodec(secret=TEST_SECRET, ttl=timedelta(hours=1), clock=clock)


@pytest.fixture
def cookie_store():
    return SessionCookieStore(cookie_name=COOKIE_NAME, secure=False, max_age=3600)


@pytest.fixture
def resolver(cookie_store, codec):
    return SessionResolver(cookie_store=cookie_store, codec=codec)


@pytest.fixture
def reset_issuer(hasher, clock):
    return ResetTokenIssuer(hasher, ttl=timedelta(hours=1), clock=clock)


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def cookie_jar():
    return CookieJar()


@pytest.fixture
def token_secret():
    return TEST_SECRET


@pytest.fixture
def request_factory():
    return make_request
