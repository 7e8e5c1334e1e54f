"""Unit tests for PortalTokenCodec."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from jose import jwt

from shared_kernel.auth import InvalidTokenError, PortalTokenCodec


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock()


@pytest.fixture
def codec(mock_probe) -> PortalTokenCodec:
    return PortalTokenCodec(
        secret="s3cret",
        subject_claim="member_id",
        ttl=timedelta(days=7),
        probe=mock_probe,
    )


class TestPortalTokenCodec:
    def test_empty_secret_is_refused(self, mock_probe):
        with pytest.raises(ValueError):
            PortalTokenCodec(
                secret="", subject_claim="member_id", ttl=timedelta(1), probe=mock_probe
            )

    def test_issue_and_verify(self, codec, mock_probe):
        now = datetime.now(UTC)
        token = codec.issue("member-1", "ana@example.com", now=now)

        claims = codec.verify(token)

        assert claims["member_id"] == "member-1"
        assert claims["email"] == "ana@example.com"
        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())
        mock_probe.token_issued.assert_called_once_with("member_id", "member-1")

    def test_other_secret_is_rejected(self, codec, mock_probe):
        token = jwt.encode(
            {"member_id": "m", "email": "e@x.com"}, "other", algorithm="HS256"
        )

        with pytest.raises(InvalidTokenError):
            codec.verify(token)
        mock_probe.token_rejected.assert_called_once_with("member_id", "invalid")

    def test_expired_token_is_rejected(self, codec, mock_probe):
        token = codec.issue(
            "member-1", "ana@example.com", now=datetime.now(UTC) - timedelta(days=8)
        )

        with pytest.raises(InvalidTokenError, match="expired"):
            codec.verify(token)
        mock_probe.token_rejected.assert_called_once_with("member_id", "expired")

    def test_token_without_subject_claim_is_rejected(self, codec):
        client_codec = PortalTokenCodec(
            secret="s3cret",
            subject_claim="company_user_id",
            ttl=timedelta(days=7),
            probe=MagicMock(),
        )
        client_token = client_codec.issue("cu-1", "c@example.com")

        with pytest.raises(InvalidTokenError, match="missing"):
            codec.verify(client_token)
