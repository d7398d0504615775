# core/auth/config/loader.py
"""
AWS 공유 설정 파일(~/.aws/config) 로더

credential_process로 호출될 때 필요한 프로파일 설정(region, mfa_serial)만
botocore의 설정 해석 규칙(AWS_CONFIG_FILE, AWS_DEFAULT_REGION 등)을 그대로 따라 읽습니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import botocore.session
from botocore.exceptions import BotoCoreError, ProfileNotFound

from ..types import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class AWSProfile:
    """AWS 프로파일 설정

    Attributes:
        name: 프로파일 이름
        region: 리전 (없으면 None -> STS 글로벌 엔드포인트)
        mfa_serial: MFA 디바이스 ARN
    """

    name: str
    region: str | None = None
    mfa_serial: str | None = None


def load_profile(profile_name: str, config_file: str | None = None) -> AWSProfile:
    """공유 설정 파일에서 프로파일 로드

    Args:
        profile_name: 프로파일 이름
        config_file: 설정 파일 경로 (기본: botocore 규칙, ~/.aws/config)

    Returns:
        AWSProfile 객체

    Raises:
        ConfigurationError: 프로파일이 없거나 mfa_serial이 설정되지 않은 경우
    """
    session = botocore.session.Session(profile=profile_name)
    if config_file:
        session.set_config_variable("config_file", config_file)

    try:
        scoped = session.get_scoped_config()
        region = session.get_config_variable("region")
    except ProfileNotFound as e:
        raise ConfigurationError(
            f"AWS 프로파일을 찾을 수 없습니다: {profile_name}",
            config_key="profile",
            cause=e,
        ) from e
    except BotoCoreError as e:
        raise ConfigurationError("AWS 설정 파일을 읽을 수 없습니다", cause=e) from e

    mfa_serial = scoped.get("mfa_serial")
    if not mfa_serial:
        raise ConfigurationError(
            f"프로파일 '{profile_name}'에 mfa_serial이 설정되지 않았습니다",
            config_key="mfa_serial",
        )

    logger.debug("프로파일 로드: %s (region=%s)", profile_name, region)
    return AWSProfile(name=profile_name, region=region, mfa_serial=mfa_serial)
