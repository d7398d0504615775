# core/auth/provider/op_cli.py
"""
1Password CLI(op) 기반 장기 자격증명 Provider

op CLI로 item의 두 필드(액세스 키 ID, 시크릿 액세스 키)를 조회합니다.

    op item get <item> --vault <vault> \\
        --fields label=<access_key_id_field>,label=<secret_access_key_field> \\
        --format json

출력은 [{"label": ..., "value": ...}, ...] 형식의 JSON 배열입니다.
"""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass

from ...config import DEFAULT_ACCESS_KEY_ID_FIELD, DEFAULT_OP_CLI_PATH, DEFAULT_SECRET_ACCESS_KEY_FIELD
from ..types import Credentials, ProviderError, ProviderType, RequestFingerprint
from .base import BaseProvider

logger = logging.getLogger(__name__)

PROVIDER_NAME = "op"


@dataclass
class OpItem:
    """1Password item 조회 대상

    Attributes:
        vault: vault 이름
        item: item 이름
        access_key_id_field: 액세스 키 ID 필드 라벨
        secret_access_key_field: 시크릿 액세스 키 필드 라벨
    """

    vault: str
    item: str
    access_key_id_field: str = DEFAULT_ACCESS_KEY_ID_FIELD
    secret_access_key_field: str = DEFAULT_SECRET_ACCESS_KEY_FIELD

    def fingerprint(self, mfa_serial: str) -> RequestFingerprint:
        """이 item + MFA 디바이스 조합의 요청 지문"""
        return RequestFingerprint(
            vault=self.vault,
            item=self.item,
            mfa_serial=mfa_serial,
            access_key_id_field=self.access_key_id_field,
            secret_access_key_field=self.secret_access_key_field,
        )


class OpCLICredentialSource(BaseProvider):
    """op CLI로 장기 액세스 키를 조회하는 Provider

    Example:
        source = OpCLICredentialSource(OpItem(vault="Private", item="aws"))
        credentials = source.retrieve()
    """

    def __init__(self, op_item: OpItem, cli_path: str = DEFAULT_OP_CLI_PATH, timeout: float | None = None):
        """OpCLICredentialSource 초기화

        Args:
            op_item: 조회할 1Password item
            cli_path: op 실행 파일 경로
            timeout: 서브프로세스 타임아웃 (초, None이면 무제한)
        """
        super().__init__(name=f"{op_item.vault}/{op_item.item}")
        self.op_item = op_item
        self.cli_path = cli_path
        self.timeout = timeout

    def type(self) -> ProviderType:
        return ProviderType.OP_CLI

    def _build_command(self) -> list[str]:
        fields = f"label={self.op_item.access_key_id_field},label={self.op_item.secret_access_key_field}"
        return [
            self.cli_path,
            "item",
            "get",
            self.op_item.item,
            "--vault",
            self.op_item.vault,
            "--fields",
            fields,
            "--format",
            "json",
        ]

    def retrieve(self) -> Credentials:
        """op CLI를 실행해 장기 자격증명을 반환

        Raises:
            ProviderError: op 실행 실패, 출력 파싱 실패, 필드 누락 시
        """
        command = self._build_command()
        logger.debug("op 실행: %s", " ".join(command))

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise ProviderError(
                PROVIDER_NAME, "item get", f"failed to get op item (exit {e.returncode})\n{stderr}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ProviderError(PROVIDER_NAME, "item get", "op 실행 시간 초과", cause=e) from e
        except OSError as e:
            raise ProviderError(PROVIDER_NAME, "item get", "op 실행 실패", cause=e) from e

        try:
            fields = json.loads(result.stdout)
        except ValueError as e:
            raise ProviderError(PROVIDER_NAME, "item get", "op 출력 파싱 실패", cause=e) from e

        if isinstance(fields, dict):
            # 필드 하나만 조회되면 배열이 아닌 객체로 출력됨
            fields = [fields]
        if not isinstance(fields, list):
            raise ProviderError(PROVIDER_NAME, "item get", "op 출력 형식이 올바르지 않습니다")

        access_key_id = ""
        secret_access_key = ""
        for field in fields:
            if not isinstance(field, dict):
                continue
            label = field.get("label")
            if label == self.op_item.access_key_id_field:
                access_key_id = field.get("value") or ""
            elif label == self.op_item.secret_access_key_field:
                secret_access_key = field.get("value") or ""

        if not access_key_id or not secret_access_key:
            raise ProviderError(PROVIDER_NAME, "item get", "missing credentials in op output")

        return Credentials(access_key_id=access_key_id, secret_access_key=secret_access_key)
