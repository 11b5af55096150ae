"""
Tests for ResetTokenIssuer.
"""

import re
from datetime import datetime, timedelta

import pytest

from fraudlr.auth import (
    ConfigurationError,
    ResetTokenIssuer,
    ResetTokenRecord,
    ResetTokenStatus,
)


class TestIssue:
    def test_raw_token_is_64_hex_chars(self, reset_issuer):
        raw, _ = reset_issuer.issue("user-1")

        assert re.fullmatch(r"[0-9a-f]{64}", raw)

    def test_record_stores_hash_not_token(self, reset_issuer):
        raw, record = reset_issuer.issue("user-1")

        assert record.hashed_token != raw
        assert raw not in record.hashed_token
        assert record.hashed_token.startswith("sha256:$2")

    def test_expiry_is_now_plus_ttl(self, reset_issuer, clock):
        _, record = reset_issuer.issue("user-1")

        assert record.expires_at == clock() + timedelta(hours=1)

    def test_tokens_are_unique(self, reset_issuer):
        tokens = {reset_issuer.issue("user-1")[0] for _ in range(5)}

        assert len(tokens) == 5


class TestValidate:
    def test_issued_token_validates(self, reset_issuer):
        raw, record = reset_issuer.issue("user-1")

        assert reset_issuer.validate(raw, record) is True
        assert reset_issuer.inspect(raw, record) is ResetTokenStatus.VALID

    def test_other_token_does_not_validate(self, reset_issuer):
        _, record = reset_issuer.issue("user-1")
        other, _ = reset_issuer.issue("user-1")

        assert reset_issuer.validate(other, record) is False
        assert reset_issuer.inspect(other, record) is ResetTokenStatus.MISMATCH

    def test_valid_just_before_expiry(self, reset_issuer, clock):
        raw, record = reset_issuer.issue("user-1")
        clock.advance(minutes=59, seconds=59)

        assert reset_issuer.validate(raw, record) is True

    def test_expired_at_boundary(self, reset_issuer, clock):
        raw, record = reset_issuer.issue("user-1")
        clock.advance(hours=1)

        assert reset_issuer.validate(raw, record) is False
        assert reset_issuer.inspect(raw, record) is ResetTokenStatus.EXPIRED

    def test_missing_record(self, reset_issuer):
        assert reset_issuer.inspect("abc", None) is ResetTokenStatus.MISSING
        assert reset_issuer.validate("abc", None) is False

    def test_empty_candidate(self, reset_issuer):
        _, record = reset_issuer.issue("user-1")

        assert reset_issuer.inspect("", record) is ResetTokenStatus.MISSING

    def test_corrupt_record_does_not_raise(self, reset_issuer, clock):
        record = ResetTokenRecord(hashed_token="garbage", expires_at=clock() + timedelta(hours=1))

        assert reset_issuer.inspect("abc", record) is ResetTokenStatus.MISMATCH

    def test_naive_expiry_treated_as_utc(self, reset_issuer, clock):
        raw, record = reset_issuer.issue("user-1")
        naive = ResetTokenRecord(
            hashed_token=record.hashed_token,
            expires_at=datetime(2026, 1, 15, 12, 30, 0),
        )

        assert reset_issuer.validate(raw, naive) is True

        clock.advance(minutes=30)
        assert reset_issuer.validate(raw, naive) is False


class TestConstruction:
    def test_non_positive_ttl_rejected(self, hasher):
        with pytest.raises(ConfigurationError):
            ResetTokenIssuer(hasher, ttl=timedelta(0))

    def test_short_tokens_rejected(self, hasher):
        with pytest.raises(ConfigurationError):
            ResetTokenIssuer(hasher, token_bytes=16)
