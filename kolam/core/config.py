"""
Configuration management for the Kolam animator.
Loads settings from environment variables.
"""

from typing import List, Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "kolam"
    app_version: str = "0.1.0"
    env: Literal["development", "staging", "production"] = "development"
    debug: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_allow_origins: List[str] = ["*"]
    cors_allow_credentials: bool = True

    # Drawing surface
    canvas_width: int = 450
    canvas_height: int = 450

    # Playback timing
    base_tick_ms: float = 80.0
    floor_tick_ms: float = 15.0
    default_speed: float = 1.0
    speed_min: float = 0.5  # slider range exposed to the shell
    speed_max: float = 3.0

    # Powder effects
    enable_effects: bool = True
    ground_texture: bool = True
    random_seed: Optional[int] = None  # None = nondeterministic

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    model_config = SettingsConfigDict(
        env_prefix="KOLAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env == "production"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """
    Get settings instance.
    Useful for dependency injection in FastAPI.
    """
    return settings
