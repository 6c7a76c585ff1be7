"""
Application configuration using Pydantic settings.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fintrack.services.aggregation_service import WEEKDAYS


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "FinTrack"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/fintrack.sqlite"
    auto_create_tables: bool = False

    # Analytics
    budget_alert_threshold: float = 0.8
    top_n: int = 5
    week_start: str = "sunday"  # monday..sunday
    # Heuristic only: descriptions matching this are treated as recurring income
    recurring_income_pattern: str = r"salary|wage|payroll|monthly|weekly"

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    @field_validator("week_start", mode="before")
    @classmethod
    def check_week_start(cls, v):
        name = str(v).strip().lower()
        if name not in WEEKDAYS:
            raise ValueError(f"week_start must be one of {', '.join(WEEKDAYS)}, got {v!r}")
        return name

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
