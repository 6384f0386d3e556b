from __future__ import annotations

import asyncio
import json

import pytest

from http_fakes import DummyResponse, DummySession
from robinhood_crypto.exchange import AsyncRobinhoodCryptoClient
from robinhood_crypto.utils.exceptions import HTTPStatusError


def test_async_client_runs_calls_concurrently(make_client) -> None:
    session = DummySession([DummyResponse(json_payload={"results": []})], repeat=True)
    client = AsyncRobinhoodCryptoClient(make_client(session))

    async def scenario():
        return await asyncio.gather(
            client.get_best_bid_ask(["BTC-USD"]),
            client.get_holdings(["BTC"]),
            client.get_orders({"symbol": "BTC-USD"}, limit=1),
            client.get_trading_pairs(),
        )

    results = asyncio.run(scenario())

    assert results == [{"results": []}] * 4
    urls = sorted(call["url"] for call in session.calls)
    assert urls == [
        "https://trading.robinhood.com/api/v1/crypto/marketdata/best_bid_ask/?symbol=BTC-USD",
        "https://trading.robinhood.com/api/v1/crypto/trading/holdings/?asset_code=BTC",
        "https://trading.robinhood.com/api/v1/crypto/trading/orders/?symbol=BTC-USD&limit=1",
        "https://trading.robinhood.com/api/v1/crypto/trading/trading_pairs/",
    ]


def test_async_place_order_and_cancel(make_client) -> None:
    session = DummySession(
        [
            DummyResponse(json_payload={"id": "order-9"}),
            DummyResponse(text="Cancel request has been submitted for order order-9"),
        ]
    )
    client = AsyncRobinhoodCryptoClient(make_client(session, id_factory=lambda: "cid-1"))

    async def scenario():
        placed = await client.place_order(
            {"symbol": "BTC-USD", "side": "buy", "type": "market", "market_order_config": {"asset_quantity": 0.001}}
        )
        message = await client.cancel_order(placed["id"])
        return placed, message

    placed, message = asyncio.run(scenario())

    assert placed == {"id": "order-9"}
    assert "order-9" in message
    assert json.loads(session.calls[0]["data"])["client_order_id"] == "cid-1"


def test_async_client_propagates_http_errors(make_client) -> None:
    session = DummySession([DummyResponse(status_code=401, json_payload={"type": "client_error"})])
    client = AsyncRobinhoodCryptoClient(make_client(session))

    with pytest.raises(HTTPStatusError) as exc:
        asyncio.run(client.get_account())

    assert exc.value.status_code == 401
