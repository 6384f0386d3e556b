from __future__ import annotations

from pathlib import Path

from robinhood_crypto.config import DEFAULT_BASE_URL, LoggingSettings, RobinhoodSettings, get_settings


def test_robinhood_settings_defaults() -> None:
    settings = RobinhoodSettings.from_env()

    assert settings.api_key is None
    assert settings.private_key is None
    assert settings.rest_base_url == DEFAULT_BASE_URL
    assert settings.timeout == 10.0


def test_robinhood_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("ROBINHOOD_API_KEY", "rh-api-key")
    monkeypatch.setenv("ROBINHOOD_PRIVATE_KEY", "cHJpdmF0ZQ==")
    monkeypatch.setenv("ROBINHOOD_PUBLIC_KEY", "cHVibGlj")
    monkeypatch.setenv("ROBINHOOD_TIMEOUT", "2.5")

    settings = get_settings().robinhood

    assert settings.api_key.get_secret_value() == "rh-api-key"
    assert settings.private_key.get_secret_value() == "cHJpdmF0ZQ=="
    assert settings.public_key.get_secret_value() == "cHVibGlj"
    assert settings.timeout == 2.5
    assert "rh-api-key" not in repr(settings)


def test_invalid_numbers_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("ROBINHOOD_TIMEOUT", "soon")
    monkeypatch.setenv("LOG_BACKUP_COUNT", "many")

    assert RobinhoodSettings.from_env().timeout == 10.0
    assert LoggingSettings.from_env().backup_count == 7


def test_logging_settings_resolve_relative_dir(tmp_path) -> None:
    settings = LoggingSettings(level="debug", log_dir=Path("logs"), file_name="client.log")

    assert settings.normalized_level == "DEBUG"
    assert settings.resolve_log_path(tmp_path) == (tmp_path / "logs").resolve() / "client.log"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
