"""Robinhood Crypto API 연동 래퍼 패키지."""

from .async_client import AsyncRobinhoodCryptoClient
from .models import (
    LimitOrderConfig,
    MarketOrderConfig,
    OrderFilters,
    OrderRequest,
    OrderSide,
    OrderState,
    OrderType,
    PriceSide,
    StopLimitOrderConfig,
    StopLossOrderConfig,
    TimeInForce,
)
from .robinhood_client import (
    CLIENT_ORDER_ID_FIELD,
    DEFAULT_USER_AGENT,
    HttpMethod,
    RobinhoodCryptoClient,
    RobinhoodEndpoint,
    build_query_string,
)
from .signer import ClientCredentials, RequestSigner, SignedRequest, build_message, load_signing_key

__all__ = [
    "AsyncRobinhoodCryptoClient",
    "CLIENT_ORDER_ID_FIELD",
    "ClientCredentials",
    "DEFAULT_USER_AGENT",
    "HttpMethod",
    "LimitOrderConfig",
    "MarketOrderConfig",
    "OrderFilters",
    "OrderRequest",
    "OrderSide",
    "OrderState",
    "OrderType",
    "PriceSide",
    "RequestSigner",
    "RobinhoodCryptoClient",
    "RobinhoodEndpoint",
    "SignedRequest",
    "StopLimitOrderConfig",
    "StopLossOrderConfig",
    "TimeInForce",
    "build_message",
    "build_query_string",
    "load_signing_key",
]
