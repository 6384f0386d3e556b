"""Robinhood Crypto API 요청 서명기.

모든 요청은 ``api_key + timestamp + path + method + body`` 를 구분자 없이
이어 붙인 메시지에 대해 Ed25519 분리 서명을 계산하고, 결과를 base64로
인코딩해 헤더로 전송한다. 필드 순서나 구분자가 하나라도 달라지면 서버가
서명을 거부한다.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Callable, Optional, Union

from nacl.exceptions import CryptoError
from nacl.signing import SigningKey

from ..utils.exceptions import SigningError
from ..utils.time_utils import unix_timestamp

SEED_SIZE = 32
SECRET_KEY_SIZE = 64

API_KEY_HEADER = "x-api-key"
TIMESTAMP_HEADER = "x-timestamp"
SIGNATURE_HEADER = "x-signature"

Clock = Callable[[], Union[int, float]]


@dataclass(frozen=True)
class ClientCredentials:
    """Robinhood API 인증 정보를 담는 데이터 구조.

    공개키는 보관만 할 뿐 서명 계산에는 사용하지 않는다.
    """

    api_key: str
    private_key: str
    public_key: str = ""

    def __repr__(self) -> str:
        return f"ClientCredentials(api_key={self.api_key!r}, private_key='***', public_key={self.public_key!r})"


@dataclass(frozen=True)
class SignedRequest:
    """한 번의 호출에만 사용되는 서명 결과."""

    path: str
    method: str
    body: str
    timestamp: str
    signature: str


def build_message(api_key: str, timestamp: Union[int, str], path: str, method: str, body: str = "") -> str:
    """서명 대상 메시지를 만든다."""

    return f"{api_key}{timestamp}{path}{method}{body}"


def load_signing_key(private_key_b64: str) -> SigningKey:
    """base64 개인키에서 Ed25519 서명 키를 만든다.

    32바이트 시드와, 시드 뒤에 공개키가 붙은 64바이트 NaCl 비밀키를 모두 허용한다.
    """

    if not private_key_b64:
        raise SigningError("개인키가 설정되어 있지 않습니다.")
    try:
        raw = base64.b64decode(private_key_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SigningError("개인키가 올바른 base64 문자열이 아닙니다.") from exc

    if len(raw) == SECRET_KEY_SIZE:
        seed = raw[:SEED_SIZE]
    elif len(raw) == SEED_SIZE:
        seed = raw
    else:
        raise SigningError(
            f"개인키 길이가 올바르지 않습니다: {len(raw)}바이트 (허용: {SEED_SIZE} 또는 {SECRET_KEY_SIZE})"
        )

    try:
        return SigningKey(seed)
    except (CryptoError, TypeError, ValueError) as exc:  # pragma: no cover - 길이 검증 이후에는 드묾
        raise SigningError(f"서명 키 생성 실패: {exc}") from exc


class RequestSigner:
    """요청 경로, 메서드, 본문에 대한 타임스탬프와 서명을 생성한다."""

    def __init__(self, credentials: ClientCredentials, *, clock: Optional[Clock] = None) -> None:
        self._credentials = credentials
        self._clock: Clock = clock or unix_timestamp

    @property
    def credentials(self) -> ClientCredentials:
        return self._credentials

    def _timestamp(self) -> str:
        return str(int(self._clock()))

    def sign(
        self,
        path: str,
        method: str,
        body: str = "",
        *,
        timestamp: Optional[Union[int, str]] = None,
    ) -> SignedRequest:
        """요청 하나에 대한 서명을 생성한다.

        Args:
            path: 쿼리 문자열을 포함한 요청 경로. 실제 전송되는 값과 바이트 단위로 같아야 한다.
            method: HTTP 메서드
            body: 직렬화된 요청 본문. 본문이 없으면 빈 문자열
            timestamp: 지정하지 않으면 호출 시점의 Unix 시간(초)을 새로 생성한다.

        Raises:
            SigningError: 키가 없거나 base64/길이가 올바르지 않은 경우
        """

        signing_key = load_signing_key(self._credentials.private_key)
        method_value = method.upper()
        timestamp_value = str(timestamp) if timestamp is not None else self._timestamp()
        message = build_message(self._credentials.api_key, timestamp_value, path, method_value, body)
        signed = signing_key.sign(message.encode("utf-8"))
        signature = base64.b64encode(signed.signature).decode("ascii")
        return SignedRequest(
            path=path,
            method=method_value,
            body=body,
            timestamp=timestamp_value,
            signature=signature,
        )

    def headers(self, signed: SignedRequest) -> dict[str, str]:
        """서명 결과로 인증 헤더를 구성한다."""

        return {
            API_KEY_HEADER: self._credentials.api_key,
            TIMESTAMP_HEADER: signed.timestamp,
            SIGNATURE_HEADER: signed.signature,
        }


__all__ = [
    "API_KEY_HEADER",
    "ClientCredentials",
    "RequestSigner",
    "SIGNATURE_HEADER",
    "SignedRequest",
    "TIMESTAMP_HEADER",
    "build_message",
    "load_signing_key",
]
