"""
cli/params.py - Click 커스텀 파라미터 타입

Go 스타일 기간 문자열("12h", "90m", "1h30m", "3600s", "1.5h")을 timedelta로 변환합니다.
"""

from __future__ import annotations

import re
from datetime import timedelta

import click

_UNITS = {
    "h": timedelta(hours=1),
    "m": timedelta(minutes=1),
    "s": timedelta(seconds=1),
    "ms": timedelta(milliseconds=1),
}

_COMPONENT = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")


def parse_duration(value: str) -> timedelta:
    """기간 문자열을 timedelta로 변환

    Args:
        value: "12h", "5m", "1h30m" 형식 문자열 ("0"은 단위 없이 허용)

    Returns:
        timedelta

    Raises:
        ValueError: 형식이 잘못된 경우
    """
    text = value.strip()
    if text == "0":
        return timedelta(0)

    total = timedelta(0)
    position = 0
    for match in _COMPONENT.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * _UNITS[match.group(2)]
        position = match.end()

    if not text or position != len(text):
        raise ValueError(f"잘못된 기간 형식입니다: {value!r} (예: 12h, 30m, 1h30m)")
    return total


class DurationParamType(click.ParamType):
    """Go 스타일 기간 문자열을 받는 Click 파라미터 타입"""

    name = "duration"

    def convert(self, value, param, ctx):
        if isinstance(value, timedelta):
            return value
        try:
            return parse_duration(str(value))
        except ValueError as e:
            self.fail(str(e), param, ctx)


DURATION = DurationParamType()
