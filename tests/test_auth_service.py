"""
Tests for AuthService account workflows.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.services.auth_service import (
    INVALID_CREDENTIALS_MESSAGE,
    INVALID_RESET_TOKEN_MESSAGE,
    AuthService,
)
from fraudlr.auth import (
    AuthenticationFailure,
    ConflictError,
    NotFoundNeutralized,
    ValidationError,
)


@pytest.fixture
def sender():
    sender = MagicMock()
    sender.send = AsyncMock()
    return sender


@pytest.fixture
def service(users, hasher, reset_issuer, sender, clock):
    return AuthService(
        users=users,
        hasher=hasher,
        reset_issuer=reset_issuer,
        reset_sender=sender,
        clock=clock,
    )


async def _signup_ada(service):
    return await service.signup(name="Ada", email="Ada@Example.com", password="Sup3rSecret!")


class TestSignup:
    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(self, service, users, hasher):
        user = await _signup_ada(service)

        assert user.email == "ada@example.com"
        assert user.tier == "free"
        assert user.password != "Sup3rSecret!"
        assert hasher.verify("Sup3rSecret!", users.users[user.id].password)

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, service):
        await _signup_ada(service)

        with pytest.raises(ConflictError) as exc_info:
            await service.signup(name="Other", email="ada@example.com", password="An0therOne!")

        assert exc_info.value.code == "EMAIL_EXISTS"

    @pytest.mark.asyncio
    async def test_weak_password_rejected(self, service, users):
        with pytest.raises(ValidationError) as exc_info:
            await service.signup(name="Ada", email="ada@example.com", password="short")

        assert exc_info.value.code == "WEAK_PASSWORD"
        assert exc_info.value.message == "Password must be at least 8 characters long"
        assert users.writes == []

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, service):
        with pytest.raises(ValidationError):
            await service.signup(name="   ", email="ada@example.com", password="Sup3rSecret!")


class TestLogin:
    @pytest.mark.asyncio
    async def test_correct_credentials(self, service, users):
        created = await _signup_ada(service)

        user = await service.login(email="ADA@example.com", password="Sup3rSecret!")

        assert user.id == created.id
        assert users.writes[-1] == "touch_login"

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, service):
        await _signup_ada(service)

        with pytest.raises(AuthenticationFailure) as wrong_password:
            await service.login(email="ada@example.com", password="not-the-password")
        with pytest.raises(AuthenticationFailure) as unknown_email:
            await service.login(email="nobody@example.com", password="not-the-password")

        assert wrong_password.value.message == unknown_email.value.message == INVALID_CREDENTIALS_MESSAGE
        assert wrong_password.value.code == unknown_email.value.code == "INVALID_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_unknown_email_still_runs_verification(self, users, reset_issuer, sender):
        hasher = MagicMock()
        hasher.hash.return_value = "$2b$04$dummy"
        hasher.verify.return_value = False
        service = AuthService(users=users, hasher=hasher, reset_issuer=reset_issuer, reset_sender=sender)

        with pytest.raises(AuthenticationFailure):
            await service.login(email="nobody@example.com", password="whatever1")

        hasher.verify.assert_called_once_with("whatever1", "$2b$04$dummy")

    @pytest.mark.asyncio
    async def test_missing_fields(self, service):
        with pytest.raises(ValidationError):
            await service.login(email="", password="x")


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_request_stores_hash_and_delivers_raw_token(self, service, users, sender):
        user = await _signup_ada(service)

        await service.request_password_reset("ada@example.com")

        sender.send.assert_awaited_once()
        email, raw_token, expires_at = sender.send.await_args.args
        stored = users.users[user.id]
        assert email == "ada@example.com"
        assert stored.reset_token and stored.reset_token != raw_token
        assert stored.reset_token_expiry == expires_at

    @pytest.mark.asyncio
    async def test_request_for_unknown_email_is_neutralized(self, service, users, sender):
        with pytest.raises(NotFoundNeutralized):
            await service.request_password_reset("nobody@example.com")

        sender.send.assert_not_awaited()
        assert users.writes == []

    @pytest.mark.asyncio
    async def test_delivery_failure_does_not_propagate(self, service, users, sender):
        user = await _signup_ada(service)
        sender.send.side_effect = RuntimeError("smtp down")

        await service.request_password_reset("ada@example.com")

        assert users.users[user.id].reset_token is not None

    @pytest.mark.asyncio
    async def test_reset_with_valid_token(self, service, users, sender, hasher):
        user = await _signup_ada(service)
        await service.request_password_reset("ada@example.com")
        raw_token = sender.send.await_args.args[1]

        result = await service.reset_password(raw_token, "BrandNewPass1")

        stored = users.users[user.id]
        assert result.id == user.id
        assert hasher.verify("BrandNewPass1", stored.password)
        assert stored.reset_token is None
        assert stored.reset_token_expiry is None

    @pytest.mark.asyncio
    async def test_token_is_single_use(self, service, sender):
        await _signup_ada(service)
        await service.request_password_reset("ada@example.com")
        raw_token = sender.send.await_args.args[1]
        await service.reset_password(raw_token, "BrandNewPass1")

        with pytest.raises(AuthenticationFailure):
            await service.reset_password(raw_token, "AnotherPass2")

    @pytest.mark.asyncio
    async def test_token_consumed_elsewhere_is_rejected(self, service, users, sender, clock, hasher):
        user = await _signup_ada(service)
        await service.request_password_reset("ada@example.com")
        raw_token = sender.send.await_args.args[1]
        # Snapshot taken before another request consumes the token
        stale = await users.list_with_active_reset_tokens(clock())
        await service.reset_password(raw_token, "BrandNewPass1")
        users.list_with_active_reset_tokens = AsyncMock(return_value=stale)

        with pytest.raises(AuthenticationFailure):
            await service.reset_password(raw_token, "AttackerPass2")

        assert hasher.verify("BrandNewPass1", users.users[user.id].password)

    @pytest.mark.asyncio
    async def test_concurrent_resets_with_one_token(self, service, users, sender, hasher):
        user = await _signup_ada(service)
        await service.request_password_reset("ada@example.com")
        raw_token = sender.send.await_args.args[1]

        results = await asyncio.gather(
            service.reset_password(raw_token, "FirstNewPass1"),
            service.reset_password(raw_token, "SecondNewPass2"),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, AuthenticationFailure)]
        assert len(failures) == 1
        assert users.writes.count("consume_reset_token") == 1
        stored = users.users[user.id].password
        assert hasher.verify("FirstNewPass1", stored) != hasher.verify("SecondNewPass2", stored)

    @pytest.mark.asyncio
    async def test_wrong_token_rejected(self, service):
        await _signup_ada(service)
        await service.request_password_reset("ada@example.com")

        with pytest.raises(AuthenticationFailure) as exc_info:
            await service.reset_password("0" * 64, "BrandNewPass1")

        assert exc_info.value.message == INVALID_RESET_TOKEN_MESSAGE

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, service, sender, clock):
        await _signup_ada(service)
        await service.request_password_reset("ada@example.com")
        raw_token = sender.send.await_args.args[1]
        clock.advance(hours=1)

        with pytest.raises(AuthenticationFailure):
            await service.reset_password(raw_token, "BrandNewPass1")

    @pytest.mark.asyncio
    async def test_only_latest_token_works(self, service, sender):
        await _signup_ada(service)
        await service.request_password_reset("ada@example.com")
        first = sender.send.await_args.args[1]
        await service.request_password_reset("ada@example.com")
        second = sender.send.await_args.args[1]

        with pytest.raises(AuthenticationFailure):
            await service.reset_password(first, "BrandNewPass1")
        await service.reset_password(second, "BrandNewPass1")

    @pytest.mark.asyncio
    async def test_weak_new_password_rejected(self, service, sender):
        await _signup_ada(service)
        await service.request_password_reset("ada@example.com")
        raw_token = sender.send.await_args.args[1]

        with pytest.raises(ValidationError):
            await service.reset_password(raw_token, "short")


class TestGetProfile:
    @pytest.mark.asyncio
    async def test_existing_user(self, service):
        user = await _signup_ada(service)

        assert (await service.get_profile(user.id)).email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_deleted_user(self, service):
        with pytest.raises(AuthenticationFailure):
            await service.get_profile("000000000000000000000000")
