"""
Settings Management with Pydantic

Provides type-safe configuration management with:
- Environment variable support (DESK_PLANNER_* prefixes)
- Optional .env file
- Validation of engine and storage options
"""

from typing import Optional
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseSettings):
    """Chunked trial scheduler configuration."""
    model_config = SettingsConfigDict(
        env_prefix="DESK_PLANNER_ENGINE_",
        extra="ignore"
    )

    # Trials per batch between yields to the event loop
    chunk_size: int = Field(default=500, gt=0)

    # Number of recent batches used for the ETA; 0 extrapolates from run start
    eta_window: int = Field(default=0, ge=0)

    random_seed: Optional[int] = None


class StorageConfig(BaseSettings):
    """Saved-run store configuration."""
    model_config = SettingsConfigDict(
        env_prefix="DESK_PLANNER_STORAGE_",
        extra="ignore"
    )

    path: str = "./data/simulations.json"
    key: str = "officeSpaceSimulations"


class DefaultInputs(BaseSettings):
    """Fallback inputs used when a saved record omits them."""
    model_config = SettingsConfigDict(
        env_prefix="DESK_PLANNER_DEFAULT_",
        extra="ignore"
    )

    employee_count: int = Field(default=1000, gt=0)
    days_in_office: int = Field(default=4, ge=0, le=5)
    absenteeism_percent: float = Field(default=15.0, ge=0, lt=100)
    trial_count: int = Field(default=10000, gt=0)


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_prefix="DESK_PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = "INFO"

    engine: EngineConfig = Field(default_factory=EngineConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    defaults: DefaultInputs = Field(default_factory=DefaultInputs)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            engine=EngineConfig(),
            storage=StorageConfig(),
            defaults=DefaultInputs()
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
