from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from plusgrid.olc.encoding import is_valid_code_length
from plusgrid.olc.shortening import is_valid_truncation


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PLUSGRID_",
        case_sensitive=False,
    )

    # Codes
    # 10 digits is roughly a 14m x 14m cell at the equator.
    default_code_length: int = Field(default=10, ge=2)
    # 4 keeps the city-level prefix; 8 shortens as far as possible.
    default_maximum_truncation: int = 4
    max_batch_items: int = Field(default=1000, gt=0)

    # Logging
    log_level: str = "INFO"

    # Cookie/CORS (dev defaults)
    cors_allow_origin: str = "http://localhost:3000"
    cors_allow_credentials: bool = True

    @field_validator("default_code_length")
    @classmethod
    def _check_code_length(cls, v: int) -> int:
        if not is_valid_code_length(v):
            raise ValueError("default_code_length must be even below 10")
        return v

    @field_validator("default_maximum_truncation")
    @classmethod
    def _check_maximum_truncation(cls, v: int) -> int:
        if not is_valid_truncation(v):
            raise ValueError("default_maximum_truncation must be 2, 4, 6 or 8")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
