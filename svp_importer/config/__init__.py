from __future__ import annotations

"""Importer settings loader from environment variables."""

from dataclasses import dataclass
from pathlib import Path
import os

CONFIG_DIR = Path(__file__).resolve().parent


def _env_int(name: str, default: int) -> int:
    """Read an int env var with a default."""
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean env var with a default."""
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.lower() in {"1", "true", "yes"}


def _app_env() -> str:
    """Return the application environment name."""
    return os.getenv("APP_ENV") or os.getenv("ENV") or "dev"


@dataclass(frozen=True)
class Settings:
    """Configuration values parsed from the environment."""
    app_env: str
    log_level: str | None
    log_dir: Path | None
    log_json: bool
    text_encoding: str
    max_file_bytes: int

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local", "test"}

    @classmethod
    def from_env(cls) -> "Settings":
        """Construct settings from environment variables."""
        log_level = os.getenv("SVP_LOG_LEVEL")
        log_dir_value = os.getenv("SVP_LOG_DIR", "").strip()
        log_dir = Path(log_dir_value) if log_dir_value else None
        log_json = os.getenv("LOG_FORMAT", "").lower() == "json" or _env_bool("LOG_JSON", False)
        text_encoding = os.getenv("SVP_TEXT_ENCODING", "utf-8-sig").strip() or "utf-8-sig"
        max_file_mb = _env_int("SVP_MAX_FILE_MB", 64)
        if max_file_mb <= 0:
            raise ValueError("SVP_MAX_FILE_MB must be positive.")
        return cls(
            app_env=_app_env(),
            log_level=log_level.upper() if log_level else None,
            log_dir=log_dir,
            log_json=log_json,
            text_encoding=text_encoding,
            max_file_bytes=max_file_mb * 1024 * 1024,
        )
