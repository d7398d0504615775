# core/auth/cache/__init__.py
"""
세션 자격증명 캐시 관리 모듈

이 모듈은 STS 임시 자격증명을 프로파일별 파일로 캐시하여
유효한 세션이 남아 있는 동안 MFA 입력 없이 자격증명을 반환할 수 있게 합니다.

캐시 전략:
- SessionCacheManager: 파일 기반 ({cache_dir}/op-aws-credential-process/)
- SessionCacheEntry: 자격증명 + 요청 지문 (유효성 검증용)

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "SessionCacheEntry",
    "SessionCacheManager",
    "CACHE_SUBDIR",
]

_IMPORT_MAPPING = {
    "SessionCacheEntry": (".cache", "SessionCacheEntry"),
    "SessionCacheManager": (".cache", "SessionCacheManager"),
    "CACHE_SUBDIR": (".cache", "CACHE_SUBDIR"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
