# core/auth/__init__.py
"""
AWS credential_process 자격증명 모듈 (core/auth)

문제점 해결:
- 장기 액세스 키를 디스크에 두지 않음 → 1Password(op CLI)에서 조회
- MFA 보호 계정의 임시 자격증명 → STS GetSessionToken으로 발급
- 호출마다 MFA 입력 → 프로파일별 세션 캐시로 유효 기간 동안 재사용

구성 요소 (모두 같은 Provider.retrieve() 계약):
- OpCLICredentialSource: 장기 액세스 키
- SessionTokenProvider: MFA + STS 세션 발급 (캐시 없음)
- CachedSessionProvider: SessionTokenProvider + 디스크 캐시

사용 예시:
    from core.auth import (
        OpItem, OpCLICredentialSource, TTYOTPSource, STSExchangeClient,
        SessionTokenProvider, SessionTokenConfig,
        CachedSessionProvider, CachedSessionConfig,
        load_profile,
    )

    profile = load_profile("dev")
    op_item = OpItem(vault="Private", item="aws-dev")

    session_provider = SessionTokenProvider(
        base_provider=OpCLICredentialSource(op_item),
        otp_source=TTYOTPSource(),
        exchange_client=STSExchangeClient(region=profile.region),
        config=SessionTokenConfig(mfa_serial=profile.mfa_serial),
    )
    provider = CachedSessionProvider(
        session_provider,
        CachedSessionConfig(
            profile="dev",
            cache_dir="~/.cache",
            fingerprint=op_item.fingerprint(profile.mfa_serial),
        ),
    )
    credentials = provider.retrieve()

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    실제 사용 시점에만 하위 모듈이 로드되어 credential_process 시작 시간을 최적화합니다.
"""

__all__ = [
    # Types
    "ProviderType",
    "Provider",
    "OTPSource",
    "SessionExchangeClient",
    "Credentials",
    "RequestFingerprint",
    "AuthError",
    "ConfigurationError",
    "ProviderError",
    "MFACodeError",
    "EmptyCredentialsError",
    # Cache
    "SessionCacheEntry",
    "SessionCacheManager",
    # Config
    "AWSProfile",
    "load_profile",
    # Providers
    "BaseProvider",
    "OpCLICredentialSource",
    "OpItem",
    "TTYOTPSource",
    "STSExchangeClient",
    "SessionTokenProvider",
    "SessionTokenConfig",
    "CachedSessionProvider",
    "CachedSessionConfig",
]

# Lazy import 매핑 테이블
_IMPORT_MAPPING = {
    # Types
    "ProviderType": (".types", "ProviderType"),
    "Provider": (".types", "Provider"),
    "OTPSource": (".types", "OTPSource"),
    "SessionExchangeClient": (".types", "SessionExchangeClient"),
    "Credentials": (".types", "Credentials"),
    "RequestFingerprint": (".types", "RequestFingerprint"),
    "AuthError": (".types", "AuthError"),
    "ConfigurationError": (".types", "ConfigurationError"),
    "ProviderError": (".types", "ProviderError"),
    "MFACodeError": (".types", "MFACodeError"),
    "EmptyCredentialsError": (".types", "EmptyCredentialsError"),
    # Cache
    "SessionCacheEntry": (".cache", "SessionCacheEntry"),
    "SessionCacheManager": (".cache", "SessionCacheManager"),
    # Config
    "AWSProfile": (".config", "AWSProfile"),
    "load_profile": (".config", "load_profile"),
    # Providers
    "BaseProvider": (".provider", "BaseProvider"),
    "OpCLICredentialSource": (".provider", "OpCLICredentialSource"),
    "OpItem": (".provider", "OpItem"),
    "TTYOTPSource": (".provider", "TTYOTPSource"),
    "STSExchangeClient": (".provider", "STSExchangeClient"),
    "SessionTokenProvider": (".provider", "SessionTokenProvider"),
    "SessionTokenConfig": (".provider", "SessionTokenConfig"),
    "CachedSessionProvider": (".provider", "CachedSessionProvider"),
    "CachedSessionConfig": (".provider", "CachedSessionConfig"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드

    credential_process 시작 시간 최적화를 위해 무거운 의존성(boto3 등)을
    실제 필요한 시점에만 로드합니다.
    """
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
