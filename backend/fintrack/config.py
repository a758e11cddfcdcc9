"""Configuration settings for the application."""
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "fintrack balances API"
    debug: bool = False
    log_level: str = "INFO"

    # IANA zone used for calendar days and "today"; empty keeps each
    # timestamp's own wall clock
    timezone: str = ""

    # Per-day income/expense subtotals: none, sign or type
    default_breakdown: str = "none"

    # Default window for /balances/history
    history_days: int = 90

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    def resolve_tz(self) -> Optional[tzinfo]:
        """Resolve the configured zone, or None when unset."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {self.timezone}") from e


settings = Settings()
