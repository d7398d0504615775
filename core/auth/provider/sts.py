# core/auth/provider/sts.py
"""
STS GetSessionToken 호출 클라이언트

장기 액세스 키로 서명한 boto3 STS 클라이언트를 만들어
MFA 코드와 함께 임시 세션 자격증명을 발급받습니다.

MFA 코드는 일회용이므로 재시도하지 않습니다 (total_max_attempts=1).
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..types import Credentials, ProviderError, SessionExchangeClient

logger = logging.getLogger(__name__)

PROVIDER_NAME = "sts"

DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_READ_TIMEOUT = 30


class STSExchangeClient(SessionExchangeClient):
    """boto3 기반 SessionExchangeClient 구현

    Example:
        client = STSExchangeClient(region="ap-northeast-2")
        payload = client.get_session_token(base_credentials, 43200, mfa_serial, "123456")
    """

    def __init__(
        self,
        region: str | None = None,
        connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: int = DEFAULT_READ_TIMEOUT,
    ):
        """STSExchangeClient 초기화

        Args:
            region: STS 리전 (None이면 boto3 기본값)
            connect_timeout: 연결 타임아웃 (초)
            read_timeout: 읽기 타임아웃 (초)
        """
        self.region = region
        self.config = Config(
            retries={"total_max_attempts": 1},  # pyright: ignore[reportArgumentType]
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )

    def _create_client(self, credentials: Credentials) -> Any:
        session = boto3.Session(
            aws_access_key_id=credentials.access_key_id,
            aws_secret_access_key=credentials.secret_access_key,
            aws_session_token=credentials.session_token,
            region_name=self.region,
        )
        return session.client("sts", config=self.config)

    def get_session_token(
        self,
        credentials: Credentials,
        duration_seconds: int,
        serial_number: str,
        token_code: str,
    ) -> dict[str, Any] | None:
        """GetSessionToken 호출

        Raises:
            ProviderError: API 호출 실패 시
        """
        try:
            client = self._create_client(credentials)
            response = client.get_session_token(
                DurationSeconds=duration_seconds,
                SerialNumber=serial_number,
                TokenCode=token_code,
            )
        except ClientError as e:
            raise ProviderError.from_client_error(PROVIDER_NAME, "get_session_token", e) from e
        except BotoCoreError as e:
            raise ProviderError(PROVIDER_NAME, "get_session_token", "AWS API 호출 실패", cause=e) from e

        logger.debug("GetSessionToken 성공 (duration=%ds)", duration_seconds)
        return (response or {}).get("Credentials")
