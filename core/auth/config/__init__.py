# core/auth/config/__init__.py
"""
AWS 설정 파일 파싱 모듈

이 모듈은 ~/.aws/config 파일에서 프로파일의 region과 mfa_serial을 읽습니다.

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    # Data classes
    "AWSProfile",
    # Functions
    "load_profile",
]

_IMPORT_MAPPING = {
    "AWSProfile": (".loader", "AWSProfile"),
    "load_profile": (".loader", "load_profile"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
