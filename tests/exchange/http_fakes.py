from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


@dataclass
class DummyResponse:
    status_code: int = 200
    json_payload: Any = None
    text: str = ""

    def __post_init__(self) -> None:
        if not self.text and self.json_payload is not None:
            self.text = json.dumps(self.json_payload)

    @property
    def content(self) -> bytes:
        return self.text.encode("utf-8")

    def json(self) -> Any:
        if self.json_payload is None:
            raise ValueError("invalid json")
        return self.json_payload


class DummySession:
    """응답 목록을 순서대로 돌려주는 ``requests.Session`` 대역."""

    def __init__(self, responses: List[Union[DummyResponse, Exception]], *, repeat: bool = False) -> None:
        self._responses = responses
        self._repeat = repeat
        self._lock = threading.Lock()
        self.calls: List[Dict[str, Any]] = []

    def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Any = None,
    ) -> DummyResponse:
        with self._lock:
            if not self._responses:
                raise AssertionError("예상치 못한 추가 호출이 발생했습니다.")
            self.calls.append(
                {
                    "method": method,
                    "url": url,
                    "params": params,
                    "data": data,
                    "headers": headers or {},
                    "timeout": timeout,
                }
            )
            result = self._responses[0] if self._repeat else self._responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def close(self) -> None:  # pragma: no cover - 외부 세션에서는 호출되지 않음
        pass
