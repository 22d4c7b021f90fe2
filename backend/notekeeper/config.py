from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# relative to the working directory the server is started from
DEFAULT_DATA_DIR = Path("data")


class Settings(BaseSettings):
    """Runtime configuration, read once from NOTEKEEPER_* env vars (or .env)."""

    model_config = SettingsConfigDict(
        env_prefix="NOTEKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = DEFAULT_DATA_DIR

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_exp_minutes: int = 60 * 24 * 30

    bcrypt_rounds: Optional[int] = None

    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    log_level: str = "INFO"

    @field_validator("jwt_secret")
    @classmethod
    def _secret_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("jwt_secret must not be empty")
        return v

    @field_validator("jwt_exp_minutes")
    @classmethod
    def _positive_expiry(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_exp_minutes must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
