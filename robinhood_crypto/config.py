"""환경변수 기반 애플리케이션 설정 로더."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr

ROOT_DIR = Path(__file__).resolve().parent.parent
ENV_FILE = ROOT_DIR / ".env"
load_dotenv(ENV_FILE)

DEFAULT_BASE_URL = "https://trading.robinhood.com"


def _to_int(value: str | int | None, default: int) -> int:
    """문자열 값을 정수로 변환한다."""
    if isinstance(value, int):
        return value
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _to_float(value: str | float | None, default: float) -> float:
    """문자열 값을 실수로 변환한다."""
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _secret(name: str) -> Optional[SecretStr]:
    value = os.getenv(name)
    return SecretStr(value) if value else None


class LoggingSettings(BaseModel):
    """로깅 관련 설정."""

    model_config = ConfigDict(populate_by_name=True)

    level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))
    file_name: str = Field(default="robinhood_crypto.log")
    rotation_when: str = Field(default="midnight")
    rotation_interval: int = Field(default=1, ge=1)
    backup_count: int = Field(default=7, ge=0)

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        """환경변수에서 로깅 설정을 생성한다."""
        log_dir_value = os.getenv("LOG_DIR", "logs")
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=Path(log_dir_value).expanduser(),
            file_name=os.getenv("LOG_FILE_NAME", "robinhood_crypto.log"),
            rotation_when=os.getenv("LOG_ROTATION_WHEN", "midnight"),
            rotation_interval=_to_int(os.getenv("LOG_ROTATION_INTERVAL"), 1),
            backup_count=_to_int(os.getenv("LOG_BACKUP_COUNT"), 7),
        )

    @property
    def normalized_level(self) -> str:
        """대문자로 정규화된 로그 레벨."""
        return self.level.upper()

    def resolve_log_dir(self, root_dir: Path) -> Path:
        """루트 경로 기준 로그 디렉터리를 반환한다."""
        if self.log_dir.is_absolute():
            return self.log_dir
        return (root_dir / self.log_dir).resolve()

    def resolve_log_path(self, root_dir: Path) -> Path:
        """루트 경로 기준 로그 파일 전체 경로."""
        return self.resolve_log_dir(root_dir) / self.file_name


class RobinhoodSettings(BaseModel):
    """Robinhood Crypto API 관련 설정."""

    model_config = ConfigDict(populate_by_name=True)

    api_key: Optional[SecretStr] = Field(default=None)
    private_key: Optional[SecretStr] = Field(default=None)
    public_key: Optional[SecretStr] = Field(default=None)
    rest_base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout: float = Field(default=10.0, gt=0)

    @classmethod
    def from_env(cls) -> "RobinhoodSettings":
        """환경변수에서 Robinhood API 설정을 생성한다."""
        return cls(
            api_key=_secret("ROBINHOOD_API_KEY"),
            private_key=_secret("ROBINHOOD_PRIVATE_KEY"),
            public_key=_secret("ROBINHOOD_PUBLIC_KEY"),
            rest_base_url=os.getenv("ROBINHOOD_BASE_URL", DEFAULT_BASE_URL),
            timeout=_to_float(os.getenv("ROBINHOOD_TIMEOUT"), 10.0),
        )


class AppSettings(BaseModel):
    """애플리케이션 전반에 사용되는 설정 묶음."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    root_dir: Path = Field(default=ROOT_DIR)
    environment: str = Field(default="development")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    robinhood: RobinhoodSettings = Field(default_factory=RobinhoodSettings)

    @classmethod
    def load(cls) -> "AppSettings":
        """환경변수 및 기본값을 반영하여 설정 인스턴스를 생성한다."""
        return cls(
            root_dir=ROOT_DIR,
            environment=os.getenv("APP_ENV", "development"),
            logging=LoggingSettings.from_env(),
            robinhood=RobinhoodSettings.from_env(),
        )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """애플리케이션 전역 설정을 캐시하여 반환한다."""
    return AppSettings.load()


__all__ = [
    "AppSettings",
    "DEFAULT_BASE_URL",
    "LoggingSettings",
    "RobinhoodSettings",
    "get_settings",
]
