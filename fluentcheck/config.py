"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Settings loaded from ``FLUENTCHECK_*`` environment variables.

    Only logging and report rendering read these; validation results never
    depend on configuration.
    """

    # Logging
    LOG_LEVEL: str = "warning"
    LOG_JSON: bool = False

    # Report rendering
    REPORT_INDENT: int = 2

    model_config = SettingsConfigDict(
        env_prefix="FLUENTCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
