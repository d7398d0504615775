"""
cli/ui/console.py - Rich 콘솔 유틸리티

credential_process 규약상 stdout에는 JSON 응답만 출력해야 하므로
모든 사람용 메시지와 로그는 stderr 콘솔로 보냅니다.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# botocore 노이즈 로그 제한
logging.getLogger("botocore").setLevel(logging.WARNING)
logging.getLogger("boto3").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_console() -> Console:
    """stderr에 출력하는 Rich Console 인스턴스를 생성하고 반환합니다."""
    return Console(
        stderr=True,
        highlight=False,
        soft_wrap=True,
        markup=True,
    )


# 전역 콘솔 인스턴스 (stderr)
console = get_console()

# 상태 심볼
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고


def configure_logging(debug: bool = False) -> logging.Logger:
    """루트 logger에 stderr Rich 핸들러를 설정합니다.

    Args:
        debug: True면 DEBUG, 아니면 WARNING 레벨

    Returns:
        logging.Logger: 설정된 루트 logger
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    # 이미 핸들러가 설정되어 있으면 레벨만 갱신
    if any(isinstance(handler, RichHandler) for handler in logger.handlers):
        return logger

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")
