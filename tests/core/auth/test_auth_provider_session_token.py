# tests/core/auth/test_auth_provider_session_token.py
"""
core/auth/provider/session_token.py 단위 테스트

SessionTokenConfig, normalize_sts_credentials, SessionTokenProvider 테스트.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.auth.provider.session_token import (
    SessionTokenConfig,
    SessionTokenProvider,
    normalize_sts_credentials,
)
from core.auth.types import (
    EmptyCredentialsError,
    MFACodeError,
    ProviderError,
    ProviderType,
)

MFA_SERIAL = "arn:aws:iam::123456789012:mfa/user"


@pytest.fixture
def provider(fake_base_provider, fake_otp_source, fake_exchange_client):
    return SessionTokenProvider(
        base_provider=fake_base_provider,
        otp_source=fake_otp_source,
        exchange_client=fake_exchange_client,
        config=SessionTokenConfig(mfa_serial=MFA_SERIAL),
    )


# =============================================================================
# SessionTokenConfig 테스트
# =============================================================================


class TestSessionTokenConfig:
    """SessionTokenConfig 테스트"""

    def test_default_duration(self):
        config = SessionTokenConfig(mfa_serial=MFA_SERIAL)
        assert config.duration_seconds == 43200

    def test_duration_truncated_to_seconds(self):
        config = SessionTokenConfig(mfa_serial=MFA_SERIAL, duration=timedelta(seconds=900, milliseconds=999))
        assert config.duration_seconds == 900


# =============================================================================
# normalize_sts_credentials 테스트
# =============================================================================


class TestNormalizeStsCredentials:
    """normalize_sts_credentials 테스트"""

    def test_normalize(self, sts_payload):
        creds = normalize_sts_credentials(sts_payload)

        assert creds.access_key_id == "ASIAFRESH"
        assert creds.secret_access_key == "FRESH_SECRET"
        assert creds.session_token == "FRESH_TOKEN"
        assert creds.expiration == datetime(2025, 6, 16, tzinfo=timezone.utc)
        assert creds.can_expire is True

    @pytest.mark.parametrize("payload", [None, {}])
    def test_empty_payload(self, payload):
        with pytest.raises(EmptyCredentialsError, match="sts credentials were empty"):
            normalize_sts_credentials(payload)

    def test_naive_expiration_is_utc(self, sts_payload):
        sts_payload["Expiration"] = datetime(2025, 6, 16, 0, 0, 0)
        creds = normalize_sts_credentials(sts_payload)
        assert creds.expiration == datetime(2025, 6, 16, tzinfo=timezone.utc)

    def test_string_expiration(self, sts_payload):
        sts_payload["Expiration"] = "2025-06-16T00:00:00Z"
        creds = normalize_sts_credentials(sts_payload)
        assert creds.expiration == datetime(2025, 6, 16, tzinfo=timezone.utc)


# =============================================================================
# SessionTokenProvider 테스트
# =============================================================================


class TestSessionTokenProvider:
    """SessionTokenProvider 테스트"""

    def test_provider_identity(self, provider):
        assert provider.type() == ProviderType.SESSION_TOKEN
        assert provider.name() == MFA_SERIAL

    def test_retrieve_success(self, provider, fake_exchange_client, base_credentials):
        creds = provider.retrieve()

        assert creds.access_key_id == "ASIAFRESH"
        assert creds.session_token == "FRESH_TOKEN"
        fake_exchange_client.get_session_token.assert_called_once_with(
            base_credentials, 43200, MFA_SERIAL, "123456"
        )

    def test_custom_duration(self, fake_base_provider, fake_otp_source, fake_exchange_client):
        provider = SessionTokenProvider(
            fake_base_provider,
            fake_otp_source,
            fake_exchange_client,
            SessionTokenConfig(mfa_serial=MFA_SERIAL, duration=timedelta(hours=1)),
        )

        provider.retrieve()

        assert fake_exchange_client.get_session_token.call_args[0][1] == 3600

    def test_base_failure_skips_prompt(self, provider, fake_base_provider, fake_otp_source, fake_exchange_client):
        """장기 자격증명 조회 실패 시 MFA 프롬프트를 띄우지 않음"""
        error = ProviderError("op", "retrieve", "failed to get op item (exit 1)")
        fake_base_provider.retrieve.side_effect = error

        with pytest.raises(ProviderError) as exc_info:
            provider.retrieve()

        assert exc_info.value is error
        fake_otp_source.get_code.assert_not_called()
        fake_exchange_client.get_session_token.assert_not_called()

    def test_otp_failure_propagates(self, provider, fake_otp_source, fake_exchange_client):
        error = MFACodeError()
        fake_otp_source.get_code.side_effect = error

        with pytest.raises(MFACodeError) as exc_info:
            provider.retrieve()

        assert exc_info.value is error
        fake_exchange_client.get_session_token.assert_not_called()

    def test_sts_failure_propagates(self, provider, fake_exchange_client):
        error = ProviderError("sts", "get_session_token", "AWS API 호출 실패 (AccessDenied): denied")
        fake_exchange_client.get_session_token.side_effect = error

        with pytest.raises(ProviderError) as exc_info:
            provider.retrieve()

        assert exc_info.value is error

    def test_empty_sts_response(self, provider, fake_exchange_client):
        fake_exchange_client.get_session_token.return_value = None

        with pytest.raises(EmptyCredentialsError):
            provider.retrieve()
