# cli/ui - stderr 콘솔 컴포넌트 (rich)
"""
콘솔 출력 모듈

stdout은 credential_process JSON 응답 전용이므로 여기의 출력은 모두 stderr로 갑니다.
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_WARNING,
    configure_logging,
    console,
    get_console,
    print_error,
    print_warning,
)

__all__ = [
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    "configure_logging",
    "console",
    "get_console",
    "print_error",
    "print_warning",
]
