# core/auth/cache/cache.py
"""
세션 자격증명 캐시 관리 구현

- SessionCacheEntry: 캐시 파일에 저장되는 데이터 구조 (자격증명 + 요청 지문)
- SessionCacheManager: 프로파일별 캐시 파일 로드/저장

설계 원칙:
- 프로파일당 파일 하나: {cache_dir}/op-aws-credential-process/{profile}.json
- 로드 실패(파일 없음, 권한, 손상된 JSON)는 항상 None -> 캐시 미스
- 저장은 같은 디렉토리의 임시 파일에 쓴 뒤 os.replace로 교체 (0600)
- 캐시는 최적화일 뿐이며 유효성 판단은 호출자(CachedSessionProvider)가 함
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..types import ConfigurationError, Credentials, RequestFingerprint

logger = logging.getLogger(__name__)

# 캐시 디렉토리 아래 고정 하위 디렉토리
CACHE_SUBDIR = "op-aws-credential-process"

# 권한: 디렉토리 0700, 파일 0600 (소유자 전용)
CACHE_DIR_MODE = 0o700
CACHE_FILE_MODE = 0o600


# =============================================================================
# Session Cache Entry
# =============================================================================


@dataclass
class SessionCacheEntry:
    """세션 캐시 데이터 구조

    JSON 형식:
        {
          "credentials": {"access_key_id", "secret_access_key",
                          "session_token", "expiration"},
          "vault", "item", "mfa_serial",
          "access_key_id_field", "secret_access_key_field"
        }

    버전 태그는 없으며, 알 수 없는 키는 로드 시 무시합니다.

    Attributes:
        credentials: 캐시된 임시 자격증명 (없으면 None)
        fingerprint: 자격증명을 발급받을 때의 요청 지문
    """

    credentials: Optional[Credentials]
    fingerprint: RequestFingerprint

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환 (JSON 저장용)"""
        data: Dict[str, Any] = {
            "credentials": self.credentials.to_dict() if self.credentials else None,
        }
        data.update(self.fingerprint.to_dict())
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionCacheEntry":
        """딕셔너리에서 생성 (JSON 로드용)

        Raises:
            TypeError, KeyError, ValueError: 구조가 잘못된 경우
        """
        if not isinstance(data, dict):
            raise TypeError(f"캐시 항목은 JSON 객체여야 합니다: {type(data).__name__}")

        raw_credentials = data.get("credentials")
        credentials = None
        if raw_credentials is not None:
            if not isinstance(raw_credentials, dict):
                raise TypeError("credentials 필드는 JSON 객체여야 합니다")
            credentials = Credentials.from_dict(raw_credentials)

        return cls(
            credentials=credentials,
            fingerprint=RequestFingerprint.from_dict(data),
        )


# =============================================================================
# Session Cache Manager
# =============================================================================


def _validate_profile_name(profile: str) -> None:
    """캐시 디렉토리 밖을 가리키는 프로파일 이름 거부"""
    separators = [sep for sep in (os.sep, os.altsep, "/") if sep]
    if not profile or profile in (".", "..") or any(sep in profile for sep in separators):
        raise ConfigurationError(
            f"캐시 파일명으로 사용할 수 없는 프로파일 이름입니다: {profile!r}",
            config_key="profile",
        )


class SessionCacheManager:
    """프로파일별 세션 캐시 파일 관리자

    캐시 파일 위치: {cache_dir}/op-aws-credential-process/{profile}.json
    """

    def __init__(self, profile: str, cache_dir: Union[str, Path]):
        """SessionCacheManager 초기화

        Args:
            profile: AWS 프로파일 이름 (파일명으로 사용)
            cache_dir: 기본 캐시 디렉토리

        Raises:
            ConfigurationError: 프로파일 이름을 파일명으로 쓸 수 없는 경우
        """
        _validate_profile_name(profile)
        self.profile = profile
        self.cache_dir = Path(cache_dir)

    @property
    def cache_path(self) -> Path:
        """캐시 파일 전체 경로"""
        return self.cache_dir / CACHE_SUBDIR / f"{self.profile}.json"

    def load(self) -> Optional[SessionCacheEntry]:
        """캐시 항목을 파일에서 로드

        Returns:
            SessionCacheEntry 객체 또는 None (파일이 없거나 파싱 실패 시)
        """
        try:
            with open(self.cache_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return SessionCacheEntry.from_dict(data)
        except FileNotFoundError:
            logger.debug("캐시 파일 없음: %s", self.cache_path)
            return None
        except Exception as e:
            logger.debug("캐시 파일 로드 실패 (%s): %s", self.cache_path, e)
            return None

    def save(self, entry: SessionCacheEntry) -> None:
        """캐시 항목을 파일에 저장 (기존 파일 덮어쓰기)

        Args:
            entry: 저장할 SessionCacheEntry 객체

        Raises:
            OSError: 디렉토리 생성 또는 파일 저장 실패 시
        """
        directory = self.cache_path.parent
        directory.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)

        content = json.dumps(entry.to_dict(), indent=2)

        # mkstemp는 0600으로 파일을 생성함
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self.profile}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.chmod(tmp_name, CACHE_FILE_MODE)
            os.replace(tmp_name, self.cache_path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    def exists(self) -> bool:
        """캐시 파일 존재 여부"""
        return self.cache_path.exists()
