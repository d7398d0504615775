# core/__init__.py
"""
core - op-aws-credential-helper 인프라

credential_process 헬퍼의 인증 파이프라인과 설정을 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── auth/           # 자격증명 서브시스템
    │   ├── types/      # Credentials, Provider 인터페이스, 에러
    │   ├── cache/      # 프로파일별 세션 캐시 파일
    │   ├── config/     # ~/.aws/config 프로파일 로더
    │   └── provider/   # op CLI, MFA, STS, 캐시 Provider
    └── config.py       # 기본값 및 버전 관리

Usage:
    from core.auth import CachedSessionProvider, CachedSessionConfig
    credentials = CachedSessionProvider(session_provider, config).retrieve()
"""

from core import auth, config

__all__: list[str] = [
    # 서브패키지
    "auth",
    # 모듈
    "config",
]
