from __future__ import annotations

from typing import Any, Callable, Dict

import pytest

from http_fakes import DummySession
from robinhood_crypto.exchange import RobinhoodCryptoClient

FIXED_TIMESTAMP = 1700000000


@pytest.fixture
def make_client(private_key_b64: str, public_key_b64: str) -> Callable[..., RobinhoodCryptoClient]:
    def factory(session: DummySession, **overrides: Any) -> RobinhoodCryptoClient:
        options: Dict[str, Any] = {
            "api_key": "test-api-key",
            "private_key": private_key_b64,
            "public_key": public_key_b64,
            "base_url": "https://trading.robinhood.com",
            "session": session,
            "clock": lambda: FIXED_TIMESTAMP,
        }
        options.update(overrides)
        return RobinhoodCryptoClient(**options)

    return factory
