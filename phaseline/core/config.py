"""
Application configuration using Pydantic Settings.

Values are read from environment variables (and an optional .env file).
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # ===========================================
    # Timeline
    # ===========================================
    # IANA timezone used to resolve "today" when a caller does not pass one
    TIMEZONE: str = "UTC"

    # Share of the project window given to preparation / execution / verification
    PHASE_WINDOW_RATIOS: List[float] = Field(default=[0.4, 0.4, 0.2])

    GENERAL_TASKS_LABEL: str = "General Tasks"
    NO_CREW_MESSAGE: str = "No team members on site"
    LOCK_REASON_TEMPLATE: str = "Previous phase verification not complete ({percent}%)"

    @field_validator("PHASE_WINDOW_RATIOS")
    @classmethod
    def validate_phase_window_ratios(cls, v: List[float]) -> List[float]:
        """One non-negative ratio per phase."""
        if len(v) != 3 or any(r < 0 for r in v):
            raise ValueError("PHASE_WINDOW_RATIOS needs three non-negative values")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
