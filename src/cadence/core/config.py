from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # infra
    app_name: str = "cadence"
    environment: str = Field("dev", alias="APP_ENV", description="dev|stage|prod")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # identity
    auth_secret: str = Field("dev-secret", alias="AUTH_SECRET")
    auth_max_age_sec: int = Field(24 * 3600, alias="AUTH_MAX_AGE_SEC")

    # db / cache
    database_dsn: str = Field("sqlite+aiosqlite:///./cadence.db", alias="DATABASE_DSN")
    redis_url: str | None = Field(None, alias="REDIS_URL")

    # networking
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")

    # simulation
    tick_interval_seconds: float = Field(1.0, alias="TICK_INTERVAL_SECONDS")
    starting_balance: Decimal = Field(Decimal("500.00"), alias="STARTING_BALANCE")
    settle_activity_on_clear: bool = Field(False, alias="SETTLE_ACTIVITY_ON_CLEAR")
    housing_check_interval_hours: int = Field(24, alias="HOUSING_CHECK_INTERVAL_HOURS")
    streaming_interval_days: int = Field(7, alias="STREAMING_INTERVAL_DAYS")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return str(v).strip().upper() if v else "INFO"

    @field_validator("redis_url", mode="before")
    @classmethod
    def _empty_redis(cls, v: str | None) -> str | None:
        if not v:
            return None
        return v


settings = Settings()
