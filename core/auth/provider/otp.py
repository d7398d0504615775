# core/auth/provider/otp.py
"""
제어 터미널(/dev/tty)에서 MFA 코드를 입력받는 OTPSource

credential_process로 실행되면 stdin/stdout이 AWS SDK에 연결되어 있으므로
프롬프트와 입력은 항상 /dev/tty를 직접 열어 처리합니다.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from ..types import MFACodeError, OTPSource

logger = logging.getLogger(__name__)

DEFAULT_TTY_PATH = "/dev/tty"
PROMPT = "Enter MFA code: "


class TTYOTPSource(OTPSource):
    """터미널 프롬프트 기반 MFA 코드 공급자"""

    def __init__(self, tty_path: str = DEFAULT_TTY_PATH, prompt: str = PROMPT):
        self.tty_path = tty_path
        self.prompt = prompt

    @contextmanager
    def _open_tty(self) -> Iterator[TextIO]:
        """터미널을 읽기/쓰기로 연다 (getpass와 같은 방식)"""
        try:
            fd = os.open(self.tty_path, os.O_RDWR | os.O_NOCTTY)
        except OSError as e:
            raise MFACodeError(f"터미널을 열 수 없습니다 ({self.tty_path})", cause=e) from e

        stream = io.TextIOWrapper(io.FileIO(fd, "r+"), encoding="utf-8")
        try:
            yield stream
        finally:
            stream.close()

    def _read_code(self, reader: TextIO, writer: TextIO) -> str:
        """프롬프트를 출력하고 공백으로 구분된 첫 토큰을 코드로 읽는다"""
        try:
            writer.write(self.prompt)
            writer.flush()
            line = reader.readline()
        except OSError as e:
            raise MFACodeError(cause=e) from e

        tokens = line.split()
        if not tokens:
            raise MFACodeError("MFA 코드가 입력되지 않았습니다")
        return tokens[0]

    def get_code(self) -> str:
        """MFA 코드를 하나 반환

        Raises:
            MFACodeError: 터미널을 열 수 없거나 입력이 비어 있는 경우
        """
        with self._open_tty() as tty:
            code = self._read_code(tty, tty)
        logger.debug("MFA 코드 입력 완료")
        return code
