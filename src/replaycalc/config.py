from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="REPLAYCALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    json_logs: bool = False

    # Display
    max_fraction_digits: int = Field(default=8, ge=0, le=16)


@lru_cache
def get_settings() -> Settings:
    return Settings()
