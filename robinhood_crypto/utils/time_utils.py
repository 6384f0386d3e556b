"""시간 관련 헬퍼 함수 모음."""

from __future__ import annotations

import time
from datetime import datetime, timezone


def unix_timestamp() -> int:
    """현재 Unix 시간(초)을 반환한다."""
    return int(time.time())


def ensure_utc(dt: datetime) -> datetime:
    """시간대 정보가 없으면 UTC로 간주하고, 있으면 UTC로 변환한다."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_iso8601(dt: datetime) -> str:
    """API 필터에 사용하는 ``YYYY-MM-DDTHH:MM:SSZ`` 형식 문자열."""
    return ensure_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")


__all__ = [
    "ensure_utc",
    "format_iso8601",
    "unix_timestamp",
]
