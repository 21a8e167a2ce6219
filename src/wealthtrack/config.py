"""Engine configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read a positive integer setting, using ``default`` when unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "WealthTrack"
    LOG_FILENAME = "wealthtrack.log"
    ENV_PREFIX = "WEALTHTRACK_"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool(f"{self.ENV_PREFIX}DEV_MODE", default=True)
        self.REMINDER_WINDOW_DAYS = _env_int(f"{self.ENV_PREFIX}REMINDER_WINDOW_DAYS", 30)
        self.CATCH_UP_INTERVAL_MINUTES = _env_int(
            f"{self.ENV_PREFIX}CATCH_UP_INTERVAL_MINUTES", 60
        )
        self.DEFAULT_STRATEGY = (
            os.getenv(f"{self.ENV_PREFIX}DEFAULT_STRATEGY", "snowball").strip().lower()
        )
        if self.DEFAULT_STRATEGY not in {"snowball", "avalanche"}:
            raise ValueError(
                f"{self.ENV_PREFIX}DEFAULT_STRATEGY must be 'snowball' or 'avalanche'."
            )

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv(f"{self.ENV_PREFIX}DATA_DIR", "instance")
        return Path(data_root).expanduser().resolve()


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite; keeps console output quiet."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = False


__all__ = ["BaseConfig", "DevConfig", "TestingConfig"]
