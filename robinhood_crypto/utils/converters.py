"""데이터 변환 관련 헬퍼 함수."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

NumberLike = Union[str, int, float, Decimal]


def to_decimal(value: NumberLike) -> Decimal:
    """숫자형 또는 문자열 값을 Decimal로 변환한다."""
    if isinstance(value, bool):
        raise ValueError(f"Decimal 변환 실패: {value}")
    if isinstance(value, Decimal):
        decimal_value = value
    else:
        try:
            decimal_value = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise ValueError(f"Decimal 변환 실패: {value}") from exc
    if not decimal_value.is_finite():
        raise ValueError(f"유한한 숫자가 아닙니다: {value}")
    return decimal_value


def format_number(value: NumberLike) -> str:
    """지수 표기 없이 API로 전송할 숫자 문자열을 만든다.

    ``0.00010`` 은 ``"0.0001"``, ``1E+2`` 는 ``"100"`` 이 된다.
    """
    decimal_value = to_decimal(value)
    if decimal_value == decimal_value.to_integral_value():
        return f"{decimal_value.quantize(Decimal(1)):f}"
    return f"{decimal_value.normalize():f}"


__all__ = [
    "NumberLike",
    "format_number",
    "to_decimal",
]
