"""Configuration management for the Caos engine using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="CAOS_",
        extra="ignore",
    )

    # Rules constants
    defense_base: int = Field(default=15, description="Fixed base of the Defense total")
    pp_base: int = Field(default=2, description="Power Points granted at level 1")
    attribute_display_cap: int = Field(
        default=5, description="Attribute values above this are flagged as special"
    )
    load_penalty: int = Field(
        default=-5, description="Penalty for load-sensitive skills while overloaded"
    )
    proficiency_strategy: str = Field(
        default="none",
        description="Proficiency bonus strategy (none or attribute_times_ordinal)",
    )

    # Data
    skills_catalog_path: Path | None = Field(
        default=None, description="Override path for the skills catalog YAML"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level", alias="LOG_LEVEL")
    log_format: str = Field(
        default="console", description="Log format (console or json)", alias="LOG_FORMAT"
    )

    @property
    def data_dir(self) -> Path:
        """Get the bundled data directory path."""
        return Path(__file__).parent / "game" / "data"

    @property
    def catalog_path(self) -> Path:
        """Get the skills catalog path, honoring the override."""
        return self.skills_catalog_path or self.data_dir / "skills.yaml"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
