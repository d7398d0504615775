# core/auth/types/types.py
"""
core/auth/types/types.py - 자격증명 헬퍼의 핵심 타입 정의

이 모듈은 인증 시스템 전체에서 사용되는 기본 타입들을 정의합니다.

포함 항목:
    - ProviderType: Provider 타입 열거형 (OP_CLI, SESSION_TOKEN, CACHED_SESSION)
    - Credentials: 장기 키 / 임시 세션 자격증명 데이터 클래스
    - RequestFingerprint: 캐시 항목의 출처를 식별하는 5-필드 지문
    - Provider: 모든 자격증명 Provider가 구현해야 하는 추상 기본 클래스 (ABC)
    - OTPSource, SessionExchangeClient: 외부 협력자 인터페이스
    - 에러 클래스: AuthError, ConfigurationError, ProviderError,
      MFACodeError, EmptyCredentialsError
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# 캐시/출력에 사용하는 RFC3339 형식 (항상 UTC)
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
TIMESTAMP_FORMAT_MICRO = "%Y-%m-%dT%H:%M:%S.%fZ"

# 소수 초 자릿수 (RFC3339Nano는 최대 9자리, datetime은 6자리)
_FRACTION = re.compile(r"\.(\d+)")


# =============================================================================
# Provider Type Enum
# =============================================================================


class ProviderType(Enum):
    """자격증명 Provider 타입을 나타내는 열거형

    - OP_CLI: 1Password CLI에서 장기 액세스 키 조회
    - SESSION_TOKEN: MFA + STS GetSessionToken으로 임시 자격증명 발급
    - CACHED_SESSION: 디스크 캐시로 감싼 SESSION_TOKEN
    """

    OP_CLI = "op-cli"
    SESSION_TOKEN = "session-token"
    CACHED_SESSION = "cached-session"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Timestamp helpers
# =============================================================================


def format_timestamp(value: datetime) -> str:
    """datetime을 RFC3339 UTC 문자열로 변환

    naive datetime은 UTC로 간주합니다. 마이크로초가 있으면 소수 초까지 기록합니다.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    if value.microsecond:
        return value.strftime(TIMESTAMP_FORMAT_MICRO)
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """ISO 8601 / RFC3339 문자열을 UTC datetime으로 변환

    소수 초는 자릿수와 관계없이 받으며 마이크로초 단위로 절삭합니다.

    Raises:
        ValueError: 형식이 잘못된 경우
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# =============================================================================
# Credentials
# =============================================================================


@dataclass(frozen=True)
class Credentials:
    """AWS 자격증명 데이터 클래스

    장기 액세스 키(session_token/expiration 없음)와
    STS 임시 자격증명(둘 다 있음)을 같은 타입으로 표현합니다.

    Attributes:
        access_key_id: 액세스 키 ID
        secret_access_key: 시크릿 액세스 키
        session_token: 세션 토큰 (임시 자격증명만)
        expiration: 만료 시간 (UTC, 임시 자격증명만)
    """

    access_key_id: str
    secret_access_key: str
    session_token: str | None = None
    expiration: datetime | None = None

    @property
    def can_expire(self) -> bool:
        """만료 시간이 있는 자격증명인지 여부"""
        return self.expiration is not None

    def __repr__(self) -> str:
        # 시크릿이 로그에 남지 않도록 키 ID만 노출
        return (
            f"Credentials(access_key_id={self.access_key_id!r}, "
            f"expiration={self.expiration!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (캐시 JSON 저장용)"""
        return {
            "access_key_id": self.access_key_id,
            "secret_access_key": self.secret_access_key,
            "session_token": self.session_token,
            "expiration": format_timestamp(self.expiration) if self.expiration else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Credentials:
        """딕셔너리에서 생성 (캐시 JSON 로드용)

        Raises:
            KeyError, TypeError, ValueError: 구조가 잘못된 경우
        """
        expiration = data.get("expiration")
        return cls(
            access_key_id=str(data["access_key_id"]),
            secret_access_key=str(data["secret_access_key"]),
            session_token=data.get("session_token"),
            expiration=parse_timestamp(expiration) if expiration else None,
        )

    def to_credential_process(self) -> dict[str, Any]:
        """credential_process 응답 형식으로 변환

        AWS SDK가 기대하는 형식:
            {"Version": 1, "AccessKeyId", "SecretAccessKey", "SessionToken", "Expiration"}
        """
        response: dict[str, Any] = {
            "Version": 1,
            "AccessKeyId": self.access_key_id,
            "SecretAccessKey": self.secret_access_key,
        }
        if self.session_token:
            response["SessionToken"] = self.session_token
        if self.expiration:
            response["Expiration"] = format_timestamp(self.expiration)
        return response


# =============================================================================
# Request Fingerprint
# =============================================================================


@dataclass(frozen=True)
class RequestFingerprint:
    """캐시 항목이 어떤 요청으로 만들어졌는지 식별하는 지문

    다섯 필드가 모두 일치해야(대소문자 구분) 같은 요청으로 간주합니다.

    Attributes:
        vault: 1Password vault 이름
        item: 1Password item 이름
        mfa_serial: MFA 디바이스 ARN
        access_key_id_field: 액세스 키 ID 필드 라벨
        secret_access_key_field: 시크릿 액세스 키 필드 라벨
    """

    vault: str
    item: str
    mfa_serial: str
    access_key_id_field: str
    secret_access_key_field: str

    def to_dict(self) -> dict[str, str]:
        return {
            "vault": self.vault,
            "item": self.item,
            "mfa_serial": self.mfa_serial,
            "access_key_id_field": self.access_key_id_field,
            "secret_access_key_field": self.secret_access_key_field,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RequestFingerprint:
        # 누락된 필드는 빈 문자열 -> 현재 요청과 불일치로 처리됨
        return cls(
            vault=data.get("vault", ""),
            item=data.get("item", ""),
            mfa_serial=data.get("mfa_serial", ""),
            access_key_id_field=data.get("access_key_id_field", ""),
            secret_access_key_field=data.get("secret_access_key_field", ""),
        )


# =============================================================================
# Interfaces (Abstract Base Classes)
# =============================================================================


class Provider(ABC):
    """모든 자격증명 Provider가 구현해야 하는 추상 기본 클래스

    장기 키 조회, MFA 세션 발급, 캐시 래퍼가 모두 같은 retrieve() 계약을
    따르므로 상속 대신 감싸기(wrapping)로 조합합니다.

    Example:
        provider = CachedSessionProvider(
            SessionTokenProvider(base, otp_source, exchange_client, token_config),
            cache_config,
        )
        credentials = provider.retrieve()
    """

    @abstractmethod
    def type(self) -> ProviderType:
        """Provider 타입을 반환합니다."""
        pass

    @abstractmethod
    def name(self) -> str:
        """Provider 이름(식별자)을 반환합니다."""
        pass

    @abstractmethod
    def retrieve(self) -> Credentials:
        """자격증명을 반환합니다.

        Raises:
            AuthError: 조회 실패 시
        """
        pass


class OTPSource(ABC):
    """MFA 일회용 코드 공급자 인터페이스"""

    @abstractmethod
    def get_code(self) -> str:
        """MFA 코드를 하나 반환합니다.

        Raises:
            MFACodeError: 코드를 얻지 못한 경우
        """
        pass


class SessionExchangeClient(ABC):
    """장기 키 + MFA 코드를 임시 세션으로 교환하는 클라이언트 인터페이스"""

    @abstractmethod
    def get_session_token(
        self,
        credentials: Credentials,
        duration_seconds: int,
        serial_number: str,
        token_code: str,
    ) -> dict[str, Any] | None:
        """STS GetSessionToken 응답의 Credentials 부분을 반환합니다.

        Args:
            credentials: 호출에 서명할 장기 자격증명
            duration_seconds: 요청 세션 유효 시간 (초)
            serial_number: MFA 디바이스 식별자
            token_code: MFA 코드

        Returns:
            AccessKeyId/SecretAccessKey/SessionToken/Expiration 딕셔너리
            (응답에 자격증명이 없으면 None)
        """
        pass


# =============================================================================
# Error Classes
# =============================================================================


class AuthError(Exception):
    """인증 관련 기본 에러 클래스

    모든 인증 에러의 부모 클래스입니다.
    원인 예외(cause)를 체이닝하여 디버깅을 용이하게 합니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (옵션)
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class ConfigurationError(AuthError):
    """설정 오류가 발생했을 때 발생하는 에러

    AWS 설정 파일에 프로파일이 없거나, mfa_serial 같은 필수 설정값이
    누락된 경우 발생합니다.

    Attributes:
        config_key: 문제가 된 설정 키 이름 (옵션)
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.config_key = config_key


class ProviderError(AuthError):
    """Provider 또는 외부 협력자(op CLI, STS)에서 발생하는 에러

    에러 메시지 형식: "[provider] operation: message"

    Attributes:
        provider: 에러가 발생한 Provider 이름
        operation: 실패한 작업 이름 (예: "item get", "get_session_token")
    """

    def __init__(
        self,
        provider: str,
        operation: str,
        message: str,
        cause: Exception | None = None,
    ):
        full_message = f"[{provider}] {operation}: {message}"
        super().__init__(full_message, cause)
        self.provider = provider
        self.operation = operation

    @classmethod
    def from_client_error(
        cls,
        provider: str,
        operation: str,
        client_error: Exception,
    ) -> ProviderError:
        """botocore.exceptions.ClientError로부터 생성

        Args:
            provider: Provider 이름
            operation: API 작업 이름
            client_error: ClientError 예외

        Returns:
            ProviderError 인스턴스
        """
        message = "AWS API 호출 실패"

        # ClientError 형식 파싱
        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            code = error_info.get("Code")
            detail = error_info.get("Message")
            if code:
                message = f"{message} ({code})"
            if detail:
                message = f"{message}: {detail}"
            return cls(provider, operation, message)

        return cls(provider, operation, message, cause=client_error)


class MFACodeError(AuthError):
    """MFA 코드를 얻지 못했을 때 발생하는 에러

    터미널(/dev/tty)을 열 수 없거나 입력이 비어 있는 경우 발생합니다.
    """

    def __init__(self, message: str = "MFA 코드를 읽을 수 없습니다", cause: Exception | None = None):
        super().__init__(message, cause)


class EmptyCredentialsError(AuthError):
    """STS 호출은 성공했지만 자격증명이 비어 있을 때 발생하는 에러"""

    def __init__(self, message: str = "sts credentials were empty", cause: Exception | None = None):
        super().__init__(message, cause)
