"""Admission Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Settings only tune observability; no setting can relax an admission rule
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - VM_ADMISSION_ prefix: the validator is embedded in a larger controller process
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Admission settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="VM_ADMISSION_", case_sensitive=False,
    )

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    # Rejections are always logged; accepted requests only when enabled
    log_accepted: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().upper()
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
