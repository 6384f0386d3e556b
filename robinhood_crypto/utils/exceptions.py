"""애플리케이션 공통 예외 계층."""

from __future__ import annotations

from typing import Any, Optional


class AppError(Exception):
    """프로젝트 전반에서 사용하는 기본 예외 클래스."""


class DataValidationError(AppError):
    """요청 파라미터 검증 실패를 표현."""


class ExchangeError(AppError):
    """거래소 API 호출 중 발생한 예외."""


class SigningError(ExchangeError):
    """키 디코딩 또는 요청 서명 실패. 네트워크 호출 전에 발생한다."""


class RequestError(ExchangeError):
    """HTTP 요청 단계에서 발생한 예외."""


class HTTPStatusError(RequestError):
    """2xx 이외의 응답 상태 코드."""

    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self.payload = payload
        self.text = text
        detail = text.strip() if text else ""
        message = f"Robinhood API 호출 실패: HTTP {status_code}"
        if detail:
            message = f"{message} - {detail}"
        super().__init__(message)


class TransportError(RequestError):
    """요청이 완료되지 못한 경우 (DNS, 연결 거부, 타임아웃 등)."""


class ResponseDecodeError(RequestError):
    """성공 응답 본문을 JSON으로 해석할 수 없는 경우."""

    def __init__(self, message: str, status_code: Optional[int] = None, text: str = "") -> None:
        self.status_code = status_code
        self.text = text
        super().__init__(message)


__all__ = [
    "AppError",
    "DataValidationError",
    "ExchangeError",
    "HTTPStatusError",
    "RequestError",
    "ResponseDecodeError",
    "SigningError",
    "TransportError",
]
