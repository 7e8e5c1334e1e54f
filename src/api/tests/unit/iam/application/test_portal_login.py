"""Unit tests for PortalLoginService (passcode login for both portals)."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.application.observability import PortalLoginProbe
from iam.application.portal_login import PortalLoginService, normalize_email
from iam.domain.aggregates import OneTimePasscode
from iam.domain.value_objects import PortalKind
from iam.ports.repositories import PortalAccount
from infrastructure.settings import PortalAuthSettings
from shared_kernel.auth import PortalTokenCodec
from shared_kernel.results import ErrorCode

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
ACCOUNT = PortalAccount(id="member-1", email="ana@example.com", name="Ana")


@pytest.fixture
def settings() -> PortalAuthSettings:
    return PortalAuthSettings(jwt_secret="portal-test-secret", otp_length=6)


@pytest.fixture
def codec(settings: PortalAuthSettings) -> PortalTokenCodec:
    return PortalTokenCodec(
        secret=settings.jwt_secret.get_secret_value(),
        subject_claim=PortalKind.CANDIDATE.subject_claim,
        ttl=settings.token_ttl,
        probe=MagicMock(),
    )


@pytest.fixture
def accounts() -> AsyncMock:
    repo = AsyncMock()
    repo.kind = PortalKind.CANDIDATE
    repo.find_by_email.return_value = ACCOUNT
    return repo


@pytest.fixture
def passcodes() -> AsyncMock:
    repo = AsyncMock()
    repo.kind = PortalKind.CANDIDATE
    repo.purge_for_account.return_value = 1
    repo.delete.return_value = True
    return repo


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=PortalLoginProbe)


@pytest.fixture
def service(mock_session, accounts, passcodes, codec, settings, mock_probe):
    return PortalLoginService(
        session=mock_session,
        accounts=accounts,
        passcodes=passcodes,
        codec=codec,
        settings=settings,
        probe=mock_probe,
    )


def live_passcode(code: str = "123456") -> OneTimePasscode:
    return OneTimePasscode(
        id="otp-1",
        account_id=ACCOUNT.id,
        code=code,
        expires_at=NOW + timedelta(minutes=10),
    )


class TestNormalizeEmail:
    def test_trims_and_lowercases(self):
        assert normalize_email("  Ana@Example.COM ") == "ana@example.com"


class TestRequestCode:
    @pytest.mark.asyncio
    async def test_issues_code_after_purging_previous(
        self, service, accounts, passcodes
    ):
        result = await service.request_code(" ANA@example.com ")

        assert result.ok
        accounts.find_by_email.assert_awaited_once_with("ana@example.com")
        passcodes.purge_for_account.assert_awaited_once_with("member-1")
        issued = passcodes.add.await_args.args[0]
        assert issued.account_id == "member-1"
        assert len(issued.code) == 6 and issued.code.isdigit()

    @pytest.mark.asyncio
    async def test_unknown_email_fails_without_issuing(
        self, service, accounts, passcodes
    ):
        accounts.find_by_email.return_value = None

        result = await service.request_code("nobody@example.com")

        assert not result.ok
        assert result.code == ErrorCode.VALIDATION
        passcodes.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_email_is_rejected(self, service, accounts):
        result = await service.request_code("not-an-email")

        assert result.code == ErrorCode.VALIDATION
        accounts.find_by_email.assert_not_called()


class TestVerifyCode:
    @pytest.mark.asyncio
    async def test_valid_code_returns_token_and_consumes_code(
        self, service, passcodes, codec
    ):
        passcodes.find_live.return_value = live_passcode()

        result = await service.verify_code("ana@example.com", "123456", now=NOW)

        assert result.ok
        passcodes.delete.assert_awaited_once_with("otp-1")
        claims = codec.verify(result.data.token)
        assert claims["member_id"] == "member-1"
        assert claims["email"] == "ana@example.com"

    @pytest.mark.asyncio
    async def test_code_is_single_use(self, service, passcodes):
        """The second verification finds no live code and fails."""
        passcodes.find_live.side_effect = [live_passcode(), None]

        first = await service.verify_code("ana@example.com", "123456", now=NOW)
        second = await service.verify_code("ana@example.com", "123456", now=NOW)

        assert first.ok
        assert not second.ok
        assert second.error == "Invalid or expired code"

    @pytest.mark.asyncio
    async def test_lost_delete_race_fails(self, service, passcodes):
        passcodes.find_live.return_value = live_passcode()
        passcodes.delete.return_value = False

        result = await service.verify_code("ana@example.com", "123456", now=NOW)

        assert not result.ok
        assert result.code == ErrorCode.VALIDATION

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["12345", "1234567", "abcdef", ""])
    async def test_code_must_have_configured_length(self, service, passcodes, code):
        result = await service.verify_code("ana@example.com", code, now=NOW)

        assert result.code == ErrorCode.VALIDATION
        passcodes.find_live.assert_not_called()


class TestOneTimePasscode:
    def test_issue_has_requested_length_and_no_leading_zero(self):
        for _ in range(50):
            passcode = OneTimePasscode.issue("member-1", timedelta(minutes=10))
            assert len(passcode.code) == 6
            assert passcode.code[0] != "0"

    def test_expired_code_does_not_match(self):
        passcode = live_passcode()

        assert passcode.matches("123456", now=NOW)
        assert not passcode.matches("123456", now=NOW + timedelta(minutes=10))
        assert not passcode.matches("654321", now=NOW)
