from __future__ import annotations

import logging

import pytest

from robinhood_crypto.utils.logger import configure_logging, get_logger


@pytest.fixture
def package_logger():
    logger = logging.getLogger("robinhood_crypto")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_configure_logging_writes_to_log_dir(tmp_path, monkeypatch, package_logger) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FILE_NAME", "client.log")

    configure_logging(force=True)
    get_logger("robinhood_crypto.exchange.robinhood_client").debug("요청 전송")
    for handler in package_logger.handlers:
        handler.flush()

    log_file = tmp_path / "logs" / "client.log"
    assert log_file.exists()
    assert "요청 전송" in log_file.read_text(encoding="utf-8")
    assert package_logger.level == logging.DEBUG
    assert package_logger.propagate is False
