from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ROADSTOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Backend
    BASE_URL: str = "https://api.mapbox.com"
    ACCESS_TOKEN: Optional[str] = None
    USER_AGENT: str = "roadstop/0.1.0"

    # Transport
    DEBUG: bool = False
    TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    MAX_WORKERS: int = Field(default=64, ge=1, description="Threads available to enqueued calls")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
