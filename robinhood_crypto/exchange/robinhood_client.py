"""Robinhood Crypto Trading REST API 클라이언트."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote, urlencode

import requests
from requests import Response, Session

from ..config import get_settings
from ..utils.converters import NumberLike, format_number
from ..utils.exceptions import (
    DataValidationError,
    HTTPStatusError,
    ResponseDecodeError,
    TransportError,
)
from ..utils.time_utils import format_iso8601
from .models import OrderFilters, OrderRequest, PriceSide
from .signer import Clock, ClientCredentials, RequestSigner

JsonMapping = Mapping[str, Any]
QueryPairs = Iterable[Tuple[str, Any]]
Timeout = Union[float, Tuple[float, float]]

DEFAULT_USER_AGENT = "robinhood-crypto/0.1"
CLIENT_ORDER_ID_FIELD = "client_order_id"

# 쿼리 문자열에서 인코딩하지 않는 문자. 서명된 경로와 전송되는 경로가 같아야 한다.
QUERY_SAFE_CHARS = "-_.,:"


class HttpMethod(str, Enum):
    """지원하는 HTTP 메서드."""

    GET = "GET"
    POST = "POST"


class RobinhoodEndpoint(str, Enum):
    """Robinhood Crypto API v1 엔드포인트."""

    BEST_BID_ASK = "/api/v1/crypto/marketdata/best_bid_ask/"
    ESTIMATED_PRICE = "/api/v1/crypto/marketdata/estimated_price/"
    TRADING_PAIRS = "/api/v1/crypto/trading/trading_pairs/"
    ORDERS = "/api/v1/crypto/trading/orders/"
    ORDER = "/api/v1/crypto/trading/orders/{order_id}/"
    CANCEL_ORDER = "/api/v1/crypto/trading/orders/{order_id}/cancel/"
    ACCOUNTS = "/api/v1/crypto/trading/accounts/"
    HOLDINGS = "/api/v1/crypto/trading/holdings/"


def _query_value(value: Any) -> str:
    if isinstance(value, datetime):
        return format_iso8601(value)
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def build_query_string(pairs: QueryPairs) -> str:
    """(키, 값) 목록을 입력 순서 그대로 쿼리 문자열로 만든다.

    값이 ``None`` 인 항목은 건너뛴다. 같은 키를 여러 번 넣으면 반복 파라미터가 된다.
    """

    present = [(key, _query_value(value)) for key, value in pairs if value is not None]
    return urlencode(present, safe=QUERY_SAFE_CHARS, quote_via=quote)


def _with_query(path: str, query: str) -> str:
    return f"{path}?{query}" if query else path


def _default_id_factory() -> str:
    return str(uuid.uuid4())


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format_number(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return format_iso8601(value)
    raise DataValidationError(f"JSON으로 직렬화할 수 없는 값입니다: {type(value).__name__}")


class RobinhoodCryptoClient:
    """Robinhood Crypto REST API 호출을 담당하는 기본 클라이언트.

    인스턴스는 읽기 전용 인증 정보만 보관하며, 호출마다 타임스탬프와 서명을 새로
    계산하므로 여러 스레드에서 동시에 사용해도 된다. 재시도와 요청 제한은 하지 않는다.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        private_key: Optional[str] = None,
        public_key: Optional[str] = None,
        credentials: Optional[ClientCredentials] = None,
        base_url: Optional[str] = None,
        session: Optional[Session] = None,
        timeout: Optional[Timeout] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        clock: Optional[Clock] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        settings = get_settings()
        robinhood_settings = settings.robinhood

        if credentials is None:
            credentials = ClientCredentials(
                api_key=api_key or self._secret_value(robinhood_settings.api_key),
                private_key=private_key or self._secret_value(robinhood_settings.private_key),
                public_key=public_key or self._secret_value(robinhood_settings.public_key),
            )

        self._base_url = (base_url or robinhood_settings.rest_base_url).rstrip("/")
        self._timeout: Timeout = timeout if timeout is not None else robinhood_settings.timeout
        self._session: Session = session or requests.Session()
        self._owns_session = session is None
        self._default_headers: dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": user_agent,
        }
        self._signer = RequestSigner(credentials, clock=clock)
        self._id_factory: Callable[[], str] = id_factory or _default_id_factory
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def _secret_value(secret) -> str:
        return secret.get_secret_value() if secret else ""

    @property
    def base_url(self) -> str:
        """REST API 기본 URL."""

        return self._base_url

    @property
    def timeout(self) -> Timeout:
        """요청 기본 타임아웃."""

        return self._timeout

    @property
    def session(self) -> Session:
        """내부 HTTP 세션."""

        return self._session

    @property
    def credentials(self) -> ClientCredentials:
        """설정된 인증 정보."""

        return self._signer.credentials

    @property
    def signer(self) -> RequestSigner:
        return self._signer

    def close(self) -> None:
        """세션을 종료한다."""

        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "RobinhoodCryptoClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - 컨텍스트 관리자 편의 기능
        self.close()

    # ------------------------------------------------------------------
    # 내부 유틸리티
    # ------------------------------------------------------------------
    def _resolve_endpoint_path(
        self,
        endpoint: Union[RobinhoodEndpoint, str],
        path_params: Optional[Mapping[str, Any]],
    ) -> str:
        if isinstance(endpoint, RobinhoodEndpoint):
            path_template = endpoint.value
        else:
            path_template = str(endpoint)

        if not path_template.startswith("/"):
            path_template = f"/{path_template}"

        encoded = {key: quote(str(value), safe="") for key, value in (path_params or {}).items()}
        try:
            return path_template.format(**encoded)
        except KeyError as exc:
            missing_key = exc.args[0]
            raise ValueError(
                f"경로 변수 '{missing_key}'가 누락되었습니다: {path_template}"
            ) from exc

    def _serialize_body(self, payload: Optional[JsonMapping]) -> str:
        if not payload:
            return ""
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=_json_default)

    def _handle_response(self, response: Response, *, to_json: bool) -> Any:
        status_code = response.status_code
        if not 200 <= status_code < 300:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise HTTPStatusError(status_code, payload=payload, text=response.text)

        if not to_json:
            return response.text
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseDecodeError(
                "Robinhood API 응답 JSON 디코딩 실패",
                status_code=status_code,
                text=response.text,
            ) from exc

    # ------------------------------------------------------------------
    # 공개 메서드
    # ------------------------------------------------------------------
    def dispatch(
        self,
        path: str,
        method: Union[HttpMethod, str],
        body: str = "",
        *,
        timeout: Optional[Timeout] = None,
        return_json: bool = True,
    ) -> Any:
        """서명된 요청을 전송하고 응답 본문을 반환한다.

        Args:
            path: 쿼리 문자열을 포함한 요청 경로. 서명 대상과 전송 경로가 동일하다.
            method: HTTP 메서드
            body: 직렬화된 본문. 비어 있으면 본문 없이 전송한다.
            timeout: 요청 타임아웃. 지정하지 않으면 기본값 사용
            return_json: False면 응답 텍스트를 그대로 반환

        Raises:
            SigningError: 키가 올바르지 않은 경우 (네트워크 호출 전)
            HTTPStatusError: 2xx 이외의 상태 코드
            TransportError: 요청이 완료되지 못한 경우
            ResponseDecodeError: 성공 응답이 JSON이 아닌 경우
        """

        method_value = method.value if isinstance(method, HttpMethod) else str(method).upper()
        signed = self._signer.sign(path, method_value, body)

        headers = dict(self._default_headers)
        headers.update(self._signer.headers(signed))
        url = f"{self._base_url}{path}"

        self._logger.debug("Robinhood API 요청: %s %s", method_value, path)
        try:
            response = self._session.request(
                method=method_value,
                url=url,
                data=body.encode("utf-8") if body else None,
                headers=headers,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Robinhood API 호출 중 네트워크 오류가 발생했습니다: {exc}") from exc

        try:
            return self._handle_response(response, to_json=return_json)
        except HTTPStatusError as exc:
            self._logger.warning("Robinhood API 오류 응답: HTTP %s (%s %s)", exc.status_code, method_value, path)
            raise

    def request(
        self,
        method: Union[HttpMethod, str],
        endpoint: Union[RobinhoodEndpoint, str],
        *,
        query: Optional[QueryPairs] = None,
        payload: Optional[JsonMapping] = None,
        path_params: Optional[Mapping[str, Any]] = None,
        timeout: Optional[Timeout] = None,
        return_json: bool = True,
    ) -> Any:
        path = self._resolve_endpoint_path(endpoint, path_params)
        path = _with_query(path, build_query_string(query or ()))
        return self.dispatch(
            path,
            method,
            self._serialize_body(payload),
            timeout=timeout,
            return_json=return_json,
        )

    def get(
        self,
        endpoint: Union[RobinhoodEndpoint, str],
        *,
        query: Optional[QueryPairs] = None,
        path_params: Optional[Mapping[str, Any]] = None,
        timeout: Optional[Timeout] = None,
        return_json: bool = True,
    ) -> Any:
        return self.request(
            HttpMethod.GET,
            endpoint,
            query=query,
            path_params=path_params,
            timeout=timeout,
            return_json=return_json,
        )

    def post(
        self,
        endpoint: Union[RobinhoodEndpoint, str],
        *,
        payload: Optional[JsonMapping] = None,
        query: Optional[QueryPairs] = None,
        path_params: Optional[Mapping[str, Any]] = None,
        timeout: Optional[Timeout] = None,
        return_json: bool = True,
    ) -> Any:
        return self.request(
            HttpMethod.POST,
            endpoint,
            query=query,
            payload=payload,
            path_params=path_params,
            timeout=timeout,
            return_json=return_json,
        )

    # ------------------------------------------------------------------
    # 시세
    # ------------------------------------------------------------------
    def get_best_bid_ask(self, symbols: Optional[Sequence[str]] = None) -> JsonMapping:
        """종목별 최우선 매수/매도 호가. 종목을 지정하지 않으면 전체를 조회한다."""

        query = [("symbol", symbol) for symbol in (symbols or ())]
        return self.get(RobinhoodEndpoint.BEST_BID_ASK, query=query)

    def get_estimated_price(
        self,
        symbol: str,
        side: Union[PriceSide, str],
        quantities: Sequence[NumberLike],
    ) -> JsonMapping:
        """수량별 예상 체결가."""

        try:
            side_value = PriceSide(side.value if isinstance(side, Enum) else str(side))
        except ValueError as exc:
            raise DataValidationError(f"side는 bid, ask, both 중 하나여야 합니다: {side!r}") from exc
        if not quantities:
            raise DataValidationError("quantities가 비어 있습니다.")
        try:
            quantity = ",".join(format_number(value) for value in quantities)
        except ValueError as exc:
            raise DataValidationError(str(exc)) from exc

        query = [("symbol", symbol), ("side", side_value.value), ("quantity", quantity)]
        return self.get(RobinhoodEndpoint.ESTIMATED_PRICE, query=query)

    # ------------------------------------------------------------------
    # 거래
    # ------------------------------------------------------------------
    def get_trading_pairs(
        self,
        symbols: Optional[Sequence[str]] = None,
        *,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JsonMapping:
        query = [("symbol", symbol) for symbol in (symbols or ())]
        query.extend([("limit", limit), ("cursor", cursor)])
        return self.get(RobinhoodEndpoint.TRADING_PAIRS, query=query)

    def place_order(self, order: Union[OrderRequest, JsonMapping]) -> JsonMapping:
        """주문을 생성한다. 호출마다 새 ``client_order_id`` 를 부여한다."""

        if isinstance(order, OrderRequest):
            payload = order.to_payload()
        else:
            payload = dict(order)
        payload[CLIENT_ORDER_ID_FIELD] = self._id_factory()
        return self.post(RobinhoodEndpoint.ORDERS, payload=payload)

    def get_order(self, order_id: str) -> JsonMapping:
        return self.get(RobinhoodEndpoint.ORDER, path_params={"order_id": order_id})

    def cancel_order(self, order_id: str) -> Any:
        """주문 취소를 요청한다.

        응답은 JSON으로 해석해 반환한다. 서버가 JSON이 아닌 안내 문구만 돌려주면 그 텍스트를 반환한다.
        """

        try:
            return self.post(RobinhoodEndpoint.CANCEL_ORDER, path_params={"order_id": order_id})
        except ResponseDecodeError as exc:
            return exc.text

    def get_orders(
        self,
        filters: Optional[Union[OrderFilters, JsonMapping]] = None,
        *,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JsonMapping:
        if filters is None:
            query: list[Tuple[str, Any]] = []
        elif isinstance(filters, OrderFilters):
            query = filters.to_params()
        else:
            query = list(filters.items())
        query.extend([("limit", limit), ("cursor", cursor)])
        return self.get(RobinhoodEndpoint.ORDERS, query=query)

    # ------------------------------------------------------------------
    # 계좌
    # ------------------------------------------------------------------
    def get_account(self) -> JsonMapping:
        return self.get(RobinhoodEndpoint.ACCOUNTS)

    def get_holdings(
        self,
        asset_codes: Optional[Sequence[str]] = None,
        *,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JsonMapping:
        query = [("asset_code", code) for code in (asset_codes or ())]
        query.extend([("limit", limit), ("cursor", cursor)])
        return self.get(RobinhoodEndpoint.HOLDINGS, query=query)


__all__ = [
    "CLIENT_ORDER_ID_FIELD",
    "DEFAULT_USER_AGENT",
    "HttpMethod",
    "RobinhoodCryptoClient",
    "RobinhoodEndpoint",
    "build_query_string",
]
