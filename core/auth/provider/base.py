# core/auth/provider/base.py
"""
Provider 공통 기반 클래스

모든 Provider 구현체가 공유하는 이름 관리를 제공합니다.
"""

from __future__ import annotations

from ..types import Provider


class BaseProvider(Provider):
    """Provider 구현체의 공통 기반 클래스

    Attributes:
        _name: Provider 이름 (로그/에러 메시지용 식별자)
    """

    def __init__(self, name: str):
        self._name = name

    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r})"
