"""Robinhood Crypto Trading API 클라이언트."""

from .exchange import (
    AsyncRobinhoodCryptoClient,
    ClientCredentials,
    OrderFilters,
    OrderRequest,
    RobinhoodCryptoClient,
)
from .utils.exceptions import (
    ExchangeError,
    HTTPStatusError,
    RequestError,
    ResponseDecodeError,
    SigningError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncRobinhoodCryptoClient",
    "ClientCredentials",
    "ExchangeError",
    "HTTPStatusError",
    "OrderFilters",
    "OrderRequest",
    "RequestError",
    "ResponseDecodeError",
    "RobinhoodCryptoClient",
    "SigningError",
    "TransportError",
]
