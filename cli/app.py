"""
cli/app.py - credential_process 엔트리포인트

Click 기반의 단일 명령어입니다. ~/.aws/config에서 다음과 같이 사용합니다.

    [profile dev]
    region = ap-northeast-2
    mfa_serial = arn:aws:iam::123456789012:mfa/me
    credential_process = op-aws-credential-helper --profile dev --op-vault Private --op-item aws-dev

주요 기능:
    - 유효한 세션 캐시가 있으면 MFA 입력 없이 즉시 반환
    - 캐시가 없거나 무효면 1Password -> MFA -> STS 순서로 새 세션 발급 후 캐시
    - 성공 시 stdout에 credential_process JSON 한 개만 출력

종료 코드:
    0: 성공 (stdout에 JSON)
    1: 실패 (stderr에 에러 메시지, stdout 출력 없음)
    130: 사용자 취소 (Ctrl-C)

아키텍처:
    1. cli(): Click 명령어 - 옵션 파싱 후 HelperOptions 구성
    2. load_profile(): ~/.aws/config에서 region, mfa_serial 로드
    3. build_provider(): Provider 체인 조립
       OpCLICredentialSource -> SessionTokenProvider -> CachedSessionProvider
    4. retrieve() 결과를 credential_process 형식으로 출력
"""

import json
import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

import click

from cli.params import DURATION
from cli.ui.console import configure_logging, console, print_error, print_warning
from core.auth.config import AWSProfile, load_profile
from core.auth.provider import (
    CachedSessionConfig,
    CachedSessionProvider,
    OpCLICredentialSource,
    OpItem,
    SessionTokenConfig,
    SessionTokenProvider,
    STSExchangeClient,
    TTYOTPSource,
)
from core.auth.types import Credentials, Provider
from core.config import (
    DEFAULT_ACCESS_KEY_ID_FIELD,
    DEFAULT_DURATION,
    DEFAULT_EXPIRY_WINDOW,
    DEFAULT_OP_CLI_PATH,
    DEFAULT_PROFILE,
    DEFAULT_SECRET_ACCESS_KEY_FIELD,
    PACKAGE_NAME,
    get_user_cache_dir,
    get_version,
)

logger = logging.getLogger(__name__)

VERSION = get_version()


@dataclass
class HelperOptions:
    """명령줄 옵션 묶음"""

    op_item: OpItem
    profile: str = DEFAULT_PROFILE
    duration: timedelta = DEFAULT_DURATION
    expiry_window: timedelta = DEFAULT_EXPIRY_WINDOW
    cache_dir: Path | None = None
    use_cache: bool = True
    op_cli_path: str = DEFAULT_OP_CLI_PATH


def build_provider(options: HelperOptions, profile: AWSProfile) -> Provider:
    """옵션과 프로파일 설정으로 Provider 체인을 조립합니다.

    Args:
        options: 명령줄 옵션
        profile: ~/.aws/config 프로파일

    Returns:
        use_cache면 CachedSessionProvider, 아니면 SessionTokenProvider
    """
    mfa_serial = profile.mfa_serial or ""

    session_provider = SessionTokenProvider(
        base_provider=OpCLICredentialSource(options.op_item, cli_path=options.op_cli_path),
        otp_source=TTYOTPSource(),
        exchange_client=STSExchangeClient(region=profile.region),
        config=SessionTokenConfig(mfa_serial=mfa_serial, duration=options.duration),
    )
    if not options.use_cache:
        return session_provider

    return CachedSessionProvider(
        session_provider,
        CachedSessionConfig(
            profile=options.profile,
            cache_dir=options.cache_dir or get_user_cache_dir(),
            fingerprint=options.op_item.fingerprint(mfa_serial),
            expiry_window=options.expiry_window,
        ),
    )


def run(options: HelperOptions) -> Credentials:
    """프로파일을 로드하고 자격증명을 반환합니다.

    Raises:
        AuthError: 설정, 1Password, MFA, STS 단계 실패 시
    """
    profile = load_profile(options.profile)
    provider = build_provider(options, profile)
    logger.debug("Provider: %r (%s)", provider, provider.type())
    return provider.retrieve()


@click.command(
    name=PACKAGE_NAME,
    help="AWS credential_process helper that retrieves credentials from 1Password with MFA session caching.",
)
@click.option("--profile", default=DEFAULT_PROFILE, show_default=True, help="AWS config profile name.")
@click.option("--duration", type=DURATION, default="12h", show_default=True, help="STS session duration.")
@click.option(
    "--expiry-window",
    type=DURATION,
    default="5m",
    show_default=True,
    help="Refresh cached credentials when less than this much validity remains.",
)
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Base cache directory (default: user cache directory).",
)
@click.option("--no-cache", is_flag=True, help="Always request a new session; do not read or write the cache.")
@click.option("--op-vault", required=True, help="1Password vault name.")
@click.option("--op-item", required=True, help="1Password item name.")
@click.option(
    "--op-access-key-id-field",
    default=DEFAULT_ACCESS_KEY_ID_FIELD,
    show_default=True,
    help="1Password field name for access key ID.",
)
@click.option(
    "--op-secret-access-key-field",
    default=DEFAULT_SECRET_ACCESS_KEY_FIELD,
    show_default=True,
    help="1Password field name for secret access key.",
)
@click.option("--op-cli-path", default=DEFAULT_OP_CLI_PATH, show_default=True, help="Path to 1Password CLI.")
@click.option("--debug", is_flag=True, help="Enable debug logging on stderr.")
@click.version_option(version=VERSION, prog_name=PACKAGE_NAME)
def cli(
    profile: str,
    duration: timedelta,
    expiry_window: timedelta,
    cache_dir: Path | None,
    no_cache: bool,
    op_vault: str,
    op_item: str,
    op_access_key_id_field: str,
    op_secret_access_key_field: str,
    op_cli_path: str,
    debug: bool,
) -> None:
    """credential_process 메인 엔트리포인트"""
    configure_logging(debug)

    options = HelperOptions(
        op_item=OpItem(
            vault=op_vault,
            item=op_item,
            access_key_id_field=op_access_key_id_field,
            secret_access_key_field=op_secret_access_key_field,
        ),
        profile=profile,
        duration=duration,
        expiry_window=expiry_window,
        cache_dir=cache_dir.expanduser() if cache_dir else None,
        use_cache=not no_cache,
        op_cli_path=op_cli_path,
    )

    try:
        credentials = run(options)
    except KeyboardInterrupt:
        print_warning("취소되었습니다")
        raise SystemExit(130)
    except Exception as e:
        print_error(str(e))
        if debug:
            console.print_exception()
        raise SystemExit(1)

    # 검증이 끝난 뒤에만 stdout에 한 번 출력
    click.echo(json.dumps(credentials.to_credential_process()))


def main() -> None:
    """console_script 진입점"""
    cli()


if __name__ == "__main__":
    main()
