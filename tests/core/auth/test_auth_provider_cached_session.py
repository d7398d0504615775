# tests/core/auth/test_auth_provider_cached_session.py
"""
core/auth/provider/cached_session.py 단위 테스트

CachedSessionProvider 캐시 적중/미스, 지문 비교, 만료 여유 시간 테스트.
"""

import json
import logging
from dataclasses import replace
from datetime import timedelta
from pathlib import Path

import pytest

from core.auth.cache import CACHE_SUBDIR, SessionCacheEntry, SessionCacheManager
from core.auth.provider.cached_session import CachedSessionConfig, CachedSessionProvider
from core.auth.types import ProviderError, ProviderType, RequestFingerprint


@pytest.fixture
def make_provider(tmp_path, fingerprint, fake_session_provider, now):
    """CachedSessionProvider 팩토리 (현재 시각 고정)"""

    def _make(fp: RequestFingerprint = fingerprint, profile: str = "test-profile", cache_dir=tmp_path):
        config = CachedSessionConfig(profile=profile, cache_dir=cache_dir, fingerprint=fp)
        return CachedSessionProvider(fake_session_provider, config, now=lambda: now)

    return _make


def _seed(cache_dir, profile, credentials, fp):
    SessionCacheManager(profile, cache_dir).save(SessionCacheEntry(credentials=credentials, fingerprint=fp))


# =============================================================================
# 기본 동작
# =============================================================================


class TestCachedSessionProviderBasics:
    """기본 속성 테스트"""

    def test_provider_identity(self, make_provider):
        provider = make_provider()
        assert provider.type() == ProviderType.CACHED_SESSION
        assert provider.name() == "test-profile"

    def test_cache_path(self, make_provider):
        provider = make_provider(profile="dev", cache_dir="/tmp/cache")
        assert provider.cache_path == Path("/tmp/cache/op-aws-credential-process/dev.json")

    def test_default_expiry_window(self, fingerprint):
        config = CachedSessionConfig(profile="p", cache_dir="/tmp", fingerprint=fingerprint)
        assert config.expiry_window == timedelta(minutes=5)


# =============================================================================
# 캐시 미스 / 적중
# =============================================================================


class TestCachedSessionProviderRetrieve:
    """retrieve 테스트"""

    def test_miss_calls_inner_and_writes(self, make_provider, fake_session_provider, tmp_path):
        provider = make_provider()

        creds = provider.retrieve()

        assert creds.access_key_id == "FRESH_KEY"
        fake_session_provider.retrieve.assert_called_once()
        assert (tmp_path / CACHE_SUBDIR).is_dir()
        assert provider.cache_path.exists()

        data = json.loads(provider.cache_path.read_text())
        assert data["credentials"]["access_key_id"] == "FRESH_KEY"
        assert data["vault"] == "vault-a"

    def test_hit_skips_inner(self, make_provider, fake_session_provider, make_credentials, fingerprint, tmp_path):
        cached = make_credentials("CACHED_KEY", "CACHED_SECRET", "CACHED_TOKEN")
        _seed(tmp_path, "test-profile", cached, fingerprint)

        creds = make_provider().retrieve()

        assert creds == cached
        fake_session_provider.retrieve.assert_not_called()

    def test_second_call_uses_cache(self, make_provider, fake_session_provider):
        provider = make_provider()

        first = provider.retrieve()
        second = provider.retrieve()

        assert first == second
        fake_session_provider.retrieve.assert_called_once()

    @pytest.mark.parametrize(
        "field",
        ["vault", "item", "mfa_serial", "access_key_id_field", "secret_access_key_field"],
    )
    def test_fingerprint_mismatch(self, make_provider, fake_session_provider, make_credentials, fingerprint, tmp_path, field):
        """지문 필드 하나만 달라도 캐시 미스"""
        _seed(tmp_path, "test-profile", make_credentials("CACHED_KEY"), fingerprint)
        changed = replace(fingerprint, **{field: "other"})

        creds = make_provider(fp=changed).retrieve()

        assert creds.access_key_id == "FRESH_KEY"
        fake_session_provider.retrieve.assert_called_once()
        assert SessionCacheManager("test-profile", tmp_path).load().fingerprint == changed

    def test_vault_change_refreshes(self, make_provider, fake_session_provider, make_credentials, fingerprint, tmp_path):
        _seed(tmp_path, "test-profile", make_credentials("CACHED_KEY"), fingerprint)

        creds = make_provider(fp=replace(fingerprint, vault="vault-b")).retrieve()

        assert creds.access_key_id == "FRESH_KEY"

    def test_other_profile_not_shared(self, make_provider, fake_session_provider, make_credentials, fingerprint, tmp_path):
        _seed(tmp_path, "other", make_credentials("CACHED_KEY"), fingerprint)

        make_provider().retrieve()

        fake_session_provider.retrieve.assert_called_once()

    def test_corrupted_cache(self, make_provider, fake_session_provider):
        provider = make_provider()
        provider.cache_path.parent.mkdir(parents=True)
        provider.cache_path.write_text("{broken")

        creds = provider.retrieve()

        assert creds.access_key_id == "FRESH_KEY"
        assert json.loads(provider.cache_path.read_text())["credentials"]["access_key_id"] == "FRESH_KEY"

    def test_cached_entry_without_credentials(self, make_provider, fake_session_provider, fingerprint):
        provider = make_provider()
        provider.cache_path.parent.mkdir(parents=True)
        provider.cache_path.write_text(json.dumps(fingerprint.to_dict()))

        provider.retrieve()

        fake_session_provider.retrieve.assert_called_once()

    def test_inner_error_propagates_without_write(self, make_provider, fake_session_provider):
        error = ProviderError("sts", "get_session_token", "denied")
        fake_session_provider.retrieve.side_effect = error
        provider = make_provider()

        with pytest.raises(ProviderError) as exc_info:
            provider.retrieve()

        assert exc_info.value is error
        assert not provider.cache_path.exists()


# =============================================================================
# 만료 여유 시간
# =============================================================================


class TestCachedSessionExpiry:
    """now + expiry_window < expiration 경계 테스트"""

    @pytest.mark.parametrize(
        "expires_in,expected_hit",
        [
            (timedelta(hours=1), True),
            (timedelta(minutes=5, seconds=1), True),
            (timedelta(minutes=5), False),
            (timedelta(minutes=4, seconds=59), False),
            (timedelta(minutes=-1), False),
        ],
    )
    def test_expiry_window(
        self, make_provider, fake_session_provider, make_credentials, fingerprint, tmp_path, expires_in, expected_hit
    ):
        _seed(tmp_path, "test-profile", make_credentials("CACHED_KEY", expires_in=expires_in), fingerprint)

        creds = make_provider().retrieve()

        if expected_hit:
            assert creds.access_key_id == "CACHED_KEY"
            fake_session_provider.retrieve.assert_not_called()
        else:
            assert creds.access_key_id == "FRESH_KEY"
            fake_session_provider.retrieve.assert_called_once()

    def test_custom_expiry_window(self, fake_session_provider, make_credentials, fingerprint, tmp_path, now):
        _seed(tmp_path, "test-profile", make_credentials("CACHED_KEY", expires_in=timedelta(minutes=30)), fingerprint)
        config = CachedSessionConfig(
            profile="test-profile",
            cache_dir=tmp_path,
            fingerprint=fingerprint,
            expiry_window=timedelta(hours=1),
        )

        creds = CachedSessionProvider(fake_session_provider, config, now=lambda: now).retrieve()

        assert creds.access_key_id == "FRESH_KEY"


# =============================================================================
# 캐시 저장 실패
# =============================================================================


class TestCachedSessionWriteFailure:
    """캐시 저장 실패는 치명적이지 않음"""

    def test_write_failure_returns_fresh(self, make_provider, fake_session_provider, tmp_path, caplog):
        (tmp_path / CACHE_SUBDIR).write_text("not-a-directory")
        provider = make_provider()

        with caplog.at_level(logging.WARNING, logger="core.auth.provider.cached_session"):
            creds = provider.retrieve()

        assert creds.access_key_id == "FRESH_KEY"
        assert "세션 캐시 저장 실패" in caplog.text
