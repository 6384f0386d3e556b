"""asyncio 환경에서 사용하는 Robinhood Crypto 클라이언트."""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence, Union

from ..utils.converters import NumberLike
from .models import OrderFilters, OrderRequest, PriceSide
from .robinhood_client import JsonMapping, RobinhoodCryptoClient


class AsyncRobinhoodCryptoClient:
    """동기 클라이언트 호출을 작업 스레드에서 실행하는 비동기 래퍼.

    호출 사이에 공유하는 가변 상태가 없으므로 여러 요청을 동시에 진행할 수 있다.
    타임아웃이 필요하면 호출하는 쪽에서 ``asyncio.wait_for`` 로 감싼다.
    """

    def __init__(self, client: Optional[RobinhoodCryptoClient] = None, **client_kwargs: Any) -> None:
        self._client = client or RobinhoodCryptoClient(**client_kwargs)

    @property
    def client(self) -> RobinhoodCryptoClient:
        return self._client

    async def __aenter__(self) -> "AsyncRobinhoodCryptoClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - 컨텍스트 관리자 편의 기능
        await self.close()

    async def close(self) -> None:
        self._client.close()

    async def _run(self, func, *args: Any, **kwargs: Any) -> Any:
        return await asyncio.to_thread(func, *args, **kwargs)

    async def dispatch(self, path: str, method: str, body: str = "", **kwargs: Any) -> Any:
        return await self._run(self._client.dispatch, path, method, body, **kwargs)

    async def get_best_bid_ask(self, symbols: Optional[Sequence[str]] = None) -> JsonMapping:
        return await self._run(self._client.get_best_bid_ask, symbols)

    async def get_estimated_price(
        self,
        symbol: str,
        side: Union[PriceSide, str],
        quantities: Sequence[NumberLike],
    ) -> JsonMapping:
        return await self._run(self._client.get_estimated_price, symbol, side, quantities)

    async def get_trading_pairs(
        self,
        symbols: Optional[Sequence[str]] = None,
        *,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JsonMapping:
        return await self._run(self._client.get_trading_pairs, symbols, limit=limit, cursor=cursor)

    async def place_order(self, order: Union[OrderRequest, JsonMapping]) -> JsonMapping:
        return await self._run(self._client.place_order, order)

    async def get_order(self, order_id: str) -> JsonMapping:
        return await self._run(self._client.get_order, order_id)

    async def cancel_order(self, order_id: str) -> Any:
        return await self._run(self._client.cancel_order, order_id)

    async def get_orders(
        self,
        filters: Optional[Union[OrderFilters, JsonMapping]] = None,
        *,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JsonMapping:
        return await self._run(self._client.get_orders, filters, limit=limit, cursor=cursor)

    async def get_account(self) -> JsonMapping:
        return await self._run(self._client.get_account)

    async def get_holdings(
        self,
        asset_codes: Optional[Sequence[str]] = None,
        *,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JsonMapping:
        return await self._run(self._client.get_holdings, asset_codes, limit=limit, cursor=cursor)


__all__ = ["AsyncRobinhoodCryptoClient"]
