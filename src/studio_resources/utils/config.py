# src/studio_resources/utils/config.py
"""
Settings for the resource forecast CLI, loaded from the environment / .env.

Only the caller layer reads these. The forecasting functions take every
input as an argument.
"""

from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ForecastSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RESOURCE_",
        env_ignore_empty=True,
        extra="ignore",
    )

    default_zoom: str = "1y"
    # Comma-separated in the environment: RESOURCE_DEFAULT_STATUSES=Active,Booked
    default_statuses: str = "Active,Prospect,Bidding,Booked"
    data_dir: Path = Path("data")
    curve_settings_path: Path = Path("resource-curve-settings.json")

    @field_validator("default_zoom")
    @classmethod
    def _known_zoom(cls, value: str) -> str:
        if value not in ("3m", "6m", "1y", "2y"):
            raise ValueError(f"Unknown zoom level: {value!r}")
        return value

    @property
    def status_list(self) -> List[str]:
        return [s.strip() for s in self.default_statuses.split(",") if s.strip()]

    def __repr__(self):
        return f"<ForecastSettings zoom={self.default_zoom} data_dir={self.data_dir}>"


# Singleton
settings = ForecastSettings()
