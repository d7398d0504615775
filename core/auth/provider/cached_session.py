# core/auth/provider/cached_session.py
"""
디스크 캐시 기반 세션 Provider

SessionTokenProvider를 감싸 프로파일별 캐시 파일을 먼저 확인합니다.

흐름:
    캐시 로드 -> (유효) 캐시 반환
              -> (없음/손상/무효) 내부 Provider 호출 -> 캐시 저장(실패 무시) -> 반환

캐시 유효 조건:
    - 자격증명과 만료 시간이 있음
    - 저장된 요청 지문 5개 필드가 현재 요청과 모두 일치
    - now + expiry_window < expiration (엄격한 비교)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

from ...config import DEFAULT_EXPIRY_WINDOW
from ..cache import SessionCacheEntry, SessionCacheManager
from ..types import Credentials, Provider, ProviderType, RequestFingerprint
from .base import BaseProvider

logger = logging.getLogger(__name__)


@dataclass
class CachedSessionConfig:
    """CachedSessionProvider 설정

    Attributes:
        profile: AWS 프로파일 이름 (캐시 파일명)
        cache_dir: 기본 캐시 디렉토리
        fingerprint: 현재 요청의 지문
        expiry_window: 만료 전 안전 여유 시간 (기본 5분)
    """

    profile: str
    cache_dir: str | Path
    fingerprint: RequestFingerprint
    expiry_window: timedelta = DEFAULT_EXPIRY_WINDOW


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CachedSessionProvider(BaseProvider):
    """캐시 우선 임시 자격증명 Provider

    유효한 캐시가 있으면 내부 Provider를 호출하지 않으므로 MFA 프롬프트도 뜨지 않습니다.
    캐시 저장 실패는 경고 로그만 남기고 새 자격증명을 그대로 반환합니다.
    """

    def __init__(
        self,
        session_provider: Provider,
        config: CachedSessionConfig,
        now: Callable[[], datetime] | None = None,
    ):
        """CachedSessionProvider 초기화

        Args:
            session_provider: 캐시 미스 시 호출할 Provider (보통 SessionTokenProvider)
            config: 캐시 설정
            now: 현재 시각 함수 (테스트용, 기본 UTC now)
        """
        super().__init__(name=config.profile)
        self.session_provider = session_provider
        self.config = config
        self.cache = SessionCacheManager(config.profile, config.cache_dir)
        self._now = now or _utcnow

    def type(self) -> ProviderType:
        return ProviderType.CACHED_SESSION

    @property
    def cache_path(self) -> Path:
        """캐시 파일 전체 경로"""
        return self.cache.cache_path

    def is_valid_entry(self, entry: SessionCacheEntry) -> bool:
        """캐시 항목을 현재 요청에 사용할 수 있는지 확인"""
        credentials = entry.credentials
        if credentials is None or credentials.expiration is None:
            logger.debug("캐시 무효: 자격증명 또는 만료 시간 없음")
            return False

        if entry.fingerprint != self.config.fingerprint:
            logger.debug("캐시 무효: 요청 지문 불일치")
            return False

        if not self._now() + self.config.expiry_window < credentials.expiration:
            logger.debug("캐시 무효: 만료 임박 또는 만료됨 (%s)", credentials.expiration)
            return False

        return True

    def _write_cache(self, credentials: Credentials) -> None:
        entry = SessionCacheEntry(credentials=credentials, fingerprint=self.config.fingerprint)
        try:
            self.cache.save(entry)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("세션 캐시 저장 실패 (%s): %s", self.cache_path, e)
            return
        logger.debug("세션 캐시 저장: %s", self.cache_path)

    def retrieve(self) -> Credentials:
        """캐시된 또는 새로 발급한 임시 자격증명 반환

        Raises:
            AuthError: 캐시 미스 후 내부 Provider 실패 시 (원본 그대로)
        """
        entry = self.cache.load()
        if entry is not None and self.is_valid_entry(entry):
            logger.debug("세션 캐시 적중: %s", self.cache_path)
            return entry.credentials

        credentials = self.session_provider.retrieve()
        self._write_cache(credentials)
        return credentials
