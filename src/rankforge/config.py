"""Lightweight configuration for the rank editor core."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Editor settings, overridable through ``RANKFORGE_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="RANKFORGE_", env_file=".env", env_file_encoding="utf-8")

    data_dir: Path = Field(default=Path("rankforge-data"), description="Where editor state such as dismissals lives")
    dismissals_file: str = Field(
        default="dismissed_validations.json",
        description="File name (inside data_dir) holding dismissed advisory keys",
    )
    output_file: Path = Field(default=Path("Ranks.xml"), description="Default target of the XML export")
    undo_capacity: int = Field(default=50, description="Maximum number of commands kept for undo", gt=0)
    backup_retention: int = Field(
        default=10,
        description="How many backups the external backup service should keep",
        ge=0,
    )
    new_rank_salary: int = Field(default=30, description="Salary given to the very first rank added", ge=0)
    new_rank_xp_step: int = Field(
        default=100,
        description="XP added on top of the last rank when a rank is appended at the end",
        gt=0,
    )

    @property
    def dismissals_path(self) -> Path:
        return self.data_dir / self.dismissals_file


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
