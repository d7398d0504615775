# core/auth/provider/__init__.py
"""
자격증명 Provider 구현 모듈

이 모듈은 credential_process 파이프라인을 이루는 Provider와 외부 협력자를 제공합니다.

Provider 목록:
- OpCLICredentialSource: 1Password CLI에서 장기 액세스 키 조회
- SessionTokenProvider: MFA + STS GetSessionToken으로 임시 자격증명 발급
- CachedSessionProvider: SessionTokenProvider를 디스크 캐시로 감싼 Provider

외부 협력자:
- TTYOTPSource: 터미널에서 MFA 코드 입력
- STSExchangeClient: boto3 STS GetSessionToken 호출

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    # Base
    "BaseProvider",
    # 1Password
    "OpCLICredentialSource",
    "OpItem",
    # MFA
    "TTYOTPSource",
    # STS
    "STSExchangeClient",
    # Session Token
    "SessionTokenProvider",
    "SessionTokenConfig",
    # Cached Session
    "CachedSessionProvider",
    "CachedSessionConfig",
]

_IMPORT_MAPPING = {
    "BaseProvider": (".base", "BaseProvider"),
    "OpCLICredentialSource": (".op_cli", "OpCLICredentialSource"),
    "OpItem": (".op_cli", "OpItem"),
    "TTYOTPSource": (".otp", "TTYOTPSource"),
    "STSExchangeClient": (".sts", "STSExchangeClient"),
    "SessionTokenProvider": (".session_token", "SessionTokenProvider"),
    "SessionTokenConfig": (".session_token", "SessionTokenConfig"),
    "CachedSessionProvider": (".cached_session", "CachedSessionProvider"),
    "CachedSessionConfig": (".cached_session", "CachedSessionConfig"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
