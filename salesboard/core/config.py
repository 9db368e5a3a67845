from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so local/dev .env can include optional integrations.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Sales Performance Dashboard"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None, alias="SUPABASE_SERVICE_ROLE_KEY"
    )
    supabase_anon_key: Optional[str] = Field(default=None, alias="SUPABASE_ANON_KEY")

    commission_rate: Decimal = Field(default=Decimal("0.25"), alias="COMMISSION_RATE")
    withholding_rate: Decimal = Field(default=Decimal("0.20"), alias="WITHHOLDING_RATE")
    withholding_limit_amount: Decimal = Field(
        default=Decimal("3000"), alias="WITHHOLDING_LIMIT_AMOUNT"
    )
    commission_payable_after_days: int = Field(default=7, alias="COMMISSION_PAYABLE_AFTER_DAYS")
    commission_recent_limit: int = Field(default=10, alias="COMMISSION_RECENT_LIMIT")
    leaderboard_top_count: int = Field(default=4, alias="LEADERBOARD_TOP_COUNT")

    reporting_timezone: str = Field(default="UTC", alias="REPORTING_TIMEZONE")
    # Pins "now" for every report, e.g. to line up with a fixed demo dataset.
    reporting_reference_date: Optional[datetime] = Field(
        default=None, alias="REPORTING_REFERENCE_DATE"
    )

    reseed_secret: Optional[str] = Field(default=None, alias="RESEED_SECRET")
    reseed_random_seed: int = Field(default=2026, alias="RESEED_RANDOM_SEED")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
