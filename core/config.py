# core/config.py
"""
core/config.py - 기본 설정 및 버전 관리

CLI 옵션 기본값과 사용자 캐시 디렉토리 규칙을 한 곳에 모아 둡니다.
"""

from __future__ import annotations

import os
import sys
from datetime import timedelta
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from pathlib import Path

PACKAGE_NAME = "op-aws-credential-helper"

# CLI 기본값
DEFAULT_PROFILE = "default"
DEFAULT_DURATION = timedelta(hours=12)
DEFAULT_EXPIRY_WINDOW = timedelta(minutes=5)
DEFAULT_OP_CLI_PATH = "op"
DEFAULT_ACCESS_KEY_ID_FIELD = "username"
DEFAULT_SECRET_ACCESS_KEY_FIELD = "credential"

_VERSION_FILE = Path(__file__).resolve().parent.parent / "version.txt"


def get_version() -> str:
    """버전 문자열 반환

    설치된 패키지 메타데이터를 우선 사용하고, 소스 트리에서 실행하면 version.txt를 읽음
    """
    try:
        return package_version(PACKAGE_NAME)
    except PackageNotFoundError:
        pass

    try:
        return _VERSION_FILE.read_text(encoding="utf-8").strip()
    except OSError:
        return "0.0.0"


def get_user_cache_dir() -> Path:
    """사용자 캐시 디렉토리 반환

    - macOS: ~/Library/Caches
    - 그 외: $XDG_CACHE_HOME 또는 ~/.cache
    """
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches"

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache and os.path.isabs(xdg_cache):
        return Path(xdg_cache)
    return Path.home() / ".cache"
