from __future__ import annotations

import base64
import sys
from pathlib import Path

import pytest
from nacl.signing import SigningKey

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from robinhood_crypto.config import get_settings  # noqa: E402

ROBINHOOD_ENV_VARS = (
    "ROBINHOOD_API_KEY",
    "ROBINHOOD_PRIVATE_KEY",
    "ROBINHOOD_PUBLIC_KEY",
    "ROBINHOOD_BASE_URL",
    "ROBINHOOD_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    for name in ROBINHOOD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def signing_key() -> SigningKey:
    return SigningKey(bytes(range(32)))


@pytest.fixture(scope="session")
def private_key_b64(signing_key: SigningKey) -> str:
    return base64.b64encode(bytes(signing_key)).decode("ascii")


@pytest.fixture(scope="session")
def public_key_b64(signing_key: SigningKey) -> str:
    return base64.b64encode(bytes(signing_key.verify_key)).decode("ascii")


@pytest.fixture(scope="session")
def secret_key_b64(signing_key: SigningKey) -> str:
    """시드 뒤에 공개키가 붙은 64바이트 NaCl 비밀키."""
    raw = bytes(signing_key) + bytes(signing_key.verify_key)
    return base64.b64encode(raw).decode("ascii")
