"""주문 관련 타입 및 열거형 정의."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..utils.converters import NumberLike, format_number
from ..utils.exceptions import DataValidationError
from ..utils.time_utils import format_iso8601


class OrderSide(str, Enum):
    """주문 방향."""
    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    """주문 유형."""
    MARKET = "market"
    LIMIT = "limit"
    STOP_LIMIT = "stop_limit"
    STOP_LOSS = "stop_loss"


class OrderState(str, Enum):
    """주문 상태."""
    OPEN = "open"
    CANCELED = "canceled"
    PARTIALLY_FILLED = "partially_filled"
    FILLED = "filled"
    FAILED = "failed"


class TimeInForce(str, Enum):
    """주문 유효기간."""
    GTC = "gtc"  # Good Till Cancelled


class PriceSide(str, Enum):
    """예상 체결가 조회 방향."""
    BID = "bid"
    ASK = "ask"
    BOTH = "both"


def _enum_value(value: Union[Enum, str, None]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _coerce_enum(enum_cls, value: Union[Enum, str], field_name: str):
    try:
        return enum_cls(_enum_value(value))
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise DataValidationError(f"{field_name} 값이 올바르지 않습니다: {value!r} (허용: {allowed})") from exc


def _number(value: Optional[NumberLike]) -> Optional[str]:
    if value is None:
        return None
    try:
        return format_number(value)
    except ValueError as exc:
        raise DataValidationError(str(exc)) from exc


def _check_amount(quote_amount: Optional[NumberLike], asset_quantity: Optional[NumberLike]) -> None:
    if (quote_amount is None) == (asset_quantity is None):
        raise DataValidationError("quote_amount 와 asset_quantity 중 정확히 하나를 지정해야 합니다.")


@dataclass(frozen=True)
class MarketOrderConfig:
    """시장가 주문 설정."""
    asset_quantity: NumberLike

    def to_payload(self) -> Dict[str, Any]:
        return {"asset_quantity": _number(self.asset_quantity)}


@dataclass(frozen=True)
class LimitOrderConfig:
    """지정가 주문 설정."""
    limit_price: NumberLike
    quote_amount: Optional[NumberLike] = None
    asset_quantity: Optional[NumberLike] = None
    time_in_force: TimeInForce = TimeInForce.GTC

    def __post_init__(self) -> None:
        _check_amount(self.quote_amount, self.asset_quantity)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.quote_amount is not None:
            payload["quote_amount"] = _number(self.quote_amount)
        if self.asset_quantity is not None:
            payload["asset_quantity"] = _number(self.asset_quantity)
        payload["limit_price"] = _number(self.limit_price)
        payload["time_in_force"] = _enum_value(self.time_in_force)
        return payload


@dataclass(frozen=True)
class StopLossOrderConfig:
    """스탑로스 주문 설정."""
    stop_price: NumberLike
    quote_amount: Optional[NumberLike] = None
    asset_quantity: Optional[NumberLike] = None
    time_in_force: TimeInForce = TimeInForce.GTC

    def __post_init__(self) -> None:
        _check_amount(self.quote_amount, self.asset_quantity)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.quote_amount is not None:
            payload["quote_amount"] = _number(self.quote_amount)
        if self.asset_quantity is not None:
            payload["asset_quantity"] = _number(self.asset_quantity)
        payload["stop_price"] = _number(self.stop_price)
        payload["time_in_force"] = _enum_value(self.time_in_force)
        return payload


@dataclass(frozen=True)
class StopLimitOrderConfig:
    """스탑 지정가 주문 설정."""
    limit_price: NumberLike
    stop_price: NumberLike
    quote_amount: Optional[NumberLike] = None
    asset_quantity: Optional[NumberLike] = None
    time_in_force: TimeInForce = TimeInForce.GTC

    def __post_init__(self) -> None:
        _check_amount(self.quote_amount, self.asset_quantity)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.quote_amount is not None:
            payload["quote_amount"] = _number(self.quote_amount)
        if self.asset_quantity is not None:
            payload["asset_quantity"] = _number(self.asset_quantity)
        payload["limit_price"] = _number(self.limit_price)
        payload["stop_price"] = _number(self.stop_price)
        payload["time_in_force"] = _enum_value(self.time_in_force)
        return payload


OrderConfig = Union[MarketOrderConfig, LimitOrderConfig, StopLossOrderConfig, StopLimitOrderConfig]

# 주문 유형별 (페이로드 키, 설정 타입)
ORDER_CONFIG_KEYS: Dict[OrderType, Tuple[str, type]] = {
    OrderType.MARKET: ("market_order_config", MarketOrderConfig),
    OrderType.LIMIT: ("limit_order_config", LimitOrderConfig),
    OrderType.STOP_LOSS: ("stop_loss_order_config", StopLossOrderConfig),
    OrderType.STOP_LIMIT: ("stop_limit_order_config", StopLimitOrderConfig),
}


@dataclass(frozen=True)
class OrderRequest:
    """주문 요청 데이터.

    ``client_order_id`` 는 포함하지 않는다. 클라이언트가 전송 직전에 매번 새로 부여한다.
    """
    symbol: str
    side: OrderSide
    type: OrderType
    config: OrderConfig

    def __post_init__(self) -> None:
        """초기화 후 검증."""
        if not self.symbol:
            raise DataValidationError("symbol 이 비어 있습니다.")
        side = _coerce_enum(OrderSide, self.side, "side")
        order_type = _coerce_enum(OrderType, self.type, "type")
        object.__setattr__(self, "side", side)
        object.__setattr__(self, "type", order_type)

        _, expected = ORDER_CONFIG_KEYS[order_type]
        if not isinstance(self.config, expected):
            raise DataValidationError(
                f"{order_type.value} 주문에는 {expected.__name__} 설정이 필요합니다."
            )

    @classmethod
    def market(cls, symbol: str, side: Union[OrderSide, str], asset_quantity: NumberLike) -> "OrderRequest":
        return cls(symbol, side, OrderType.MARKET, MarketOrderConfig(asset_quantity))

    @classmethod
    def limit(
        cls,
        symbol: str,
        side: Union[OrderSide, str],
        limit_price: NumberLike,
        *,
        asset_quantity: Optional[NumberLike] = None,
        quote_amount: Optional[NumberLike] = None,
    ) -> "OrderRequest":
        config = LimitOrderConfig(limit_price, quote_amount=quote_amount, asset_quantity=asset_quantity)
        return cls(symbol, side, OrderType.LIMIT, config)

    def to_payload(self) -> Dict[str, Any]:
        config_key, _ = ORDER_CONFIG_KEYS[self.type]
        return {
            "symbol": self.symbol,
            "side": self.side.value,
            "type": self.type.value,
            config_key: self.config.to_payload(),
        }


@dataclass(frozen=True)
class OrderFilters:
    """주문 목록 조회 필터. 필드 선언 순서대로 쿼리 파라미터가 만들어진다."""
    created_at_start: Optional[Union[datetime, str]] = None
    created_at_end: Optional[Union[datetime, str]] = None
    symbol: Optional[str] = None
    id: Optional[str] = None
    side: Optional[Union[OrderSide, str]] = None
    state: Optional[Union[OrderState, str]] = None
    type: Optional[Union[OrderType, str]] = None
    updated_at_start: Optional[Union[datetime, str]] = None
    updated_at_end: Optional[Union[datetime, str]] = None

    def __post_init__(self) -> None:
        for name, enum_cls in (("side", OrderSide), ("state", OrderState), ("type", OrderType)):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _coerce_enum(enum_cls, value, name))

    def to_params(self) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            if isinstance(value, datetime):
                params.append((item.name, format_iso8601(value)))
            else:
                params.append((item.name, _enum_value(value)))
        return params


__all__ = [
    "LimitOrderConfig",
    "MarketOrderConfig",
    "ORDER_CONFIG_KEYS",
    "OrderConfig",
    "OrderFilters",
    "OrderRequest",
    "OrderSide",
    "OrderState",
    "OrderType",
    "PriceSide",
    "StopLimitOrderConfig",
    "StopLossOrderConfig",
    "TimeInForce",
]
