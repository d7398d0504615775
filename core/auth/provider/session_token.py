# core/auth/provider/session_token.py
"""
MFA 세션 토큰 Provider

장기 자격증명 확인 -> MFA 코드 입력 -> STS GetSessionToken 순서로
새 임시 자격증명을 발급받습니다. 캐시는 CachedSessionProvider의 책임입니다.

에러 정책:
    - 각 단계의 에러는 감싸지 않고 그대로 전파
    - 장기 자격증명 조회가 실패하면 MFA 프롬프트를 띄우지 않음
    - STS가 성공했지만 자격증명이 비어 있으면 EmptyCredentialsError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from ...config import DEFAULT_DURATION
from ..types import (
    Credentials,
    EmptyCredentialsError,
    OTPSource,
    Provider,
    ProviderType,
    SessionExchangeClient,
    parse_timestamp,
)
from .base import BaseProvider

logger = logging.getLogger(__name__)


@dataclass
class SessionTokenConfig:
    """SessionTokenProvider 설정

    Attributes:
        mfa_serial: MFA 디바이스 ARN
        duration: 요청할 세션 유효 시간 (초 단위로 절삭되어 전달)
    """

    mfa_serial: str
    duration: timedelta = DEFAULT_DURATION

    @property
    def duration_seconds(self) -> int:
        return int(self.duration.total_seconds())


def _to_datetime(value: Any) -> datetime:
    """STS 응답의 Expiration을 UTC datetime으로 변환

    botocore는 datetime을, 캐시/테스트 경로는 문자열을 줄 수 있음.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    return parse_timestamp(str(value))


def normalize_sts_credentials(payload: dict[str, Any] | None) -> Credentials:
    """STS Credentials 딕셔너리를 Credentials로 변환

    Raises:
        EmptyCredentialsError: payload가 비어 있는 경우
    """
    if not payload:
        raise EmptyCredentialsError()

    expiration = payload.get("Expiration")
    return Credentials(
        access_key_id=payload.get("AccessKeyId") or "",
        secret_access_key=payload.get("SecretAccessKey") or "",
        session_token=payload.get("SessionToken") or "",
        expiration=_to_datetime(expiration) if expiration is not None else None,
    )


class SessionTokenProvider(BaseProvider):
    """MFA + STS GetSessionToken 기반 임시 자격증명 Provider

    내부 상태가 없으므로 호출마다 새로 생성해도 됩니다.

    Example:
        provider = SessionTokenProvider(
            base_provider=OpCLICredentialSource(op_item),
            otp_source=TTYOTPSource(),
            exchange_client=STSExchangeClient(region="ap-northeast-2"),
            config=SessionTokenConfig(mfa_serial="arn:aws:iam::123456789012:mfa/user"),
        )
        credentials = provider.retrieve()
    """

    def __init__(
        self,
        base_provider: Provider,
        otp_source: OTPSource,
        exchange_client: SessionExchangeClient,
        config: SessionTokenConfig,
    ):
        super().__init__(name=config.mfa_serial)
        self.base_provider = base_provider
        self.otp_source = otp_source
        self.exchange_client = exchange_client
        self.config = config

    def type(self) -> ProviderType:
        return ProviderType.SESSION_TOKEN

    def retrieve(self) -> Credentials:
        """새 임시 자격증명 발급

        Raises:
            AuthError: 장기 자격증명 조회, MFA 입력, STS 호출 실패 시 (원본 그대로)
            EmptyCredentialsError: STS 응답에 자격증명이 없는 경우
        """
        # 1. 장기 자격증명 확인 (실패 시 MFA 프롬프트 없이 종료)
        base_credentials = self.base_provider.retrieve()

        # 2. MFA 코드
        code = self.otp_source.get_code()

        # 3. STS 교환
        payload = self.exchange_client.get_session_token(
            base_credentials,
            self.config.duration_seconds,
            self.config.mfa_serial,
            code,
        )

        # 4. 정규화
        credentials = normalize_sts_credentials(payload)
        logger.debug("새 세션 발급: %s (만료 %s)", credentials.access_key_id, credentials.expiration)
        return credentials
