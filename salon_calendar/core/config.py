from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    BUSINESS_TIMEZONE: str = "Europe/Madrid"

    BOOKING_API_BASE_URL: str = "http://localhost:8000/api"
    BOOKING_API_TOKEN: str | None = None
    BOOKING_API_TIMEOUT_SECONDS: float = 10.0

    GRID_START_HOUR: int = 8
    GRID_END_HOUR: int = 20
    DAY_HOUR_HEIGHT_PX: float = 80
    DAY_MIN_HEIGHT_PX: float = 60
    WEEK_HOUR_HEIGHT_PX: float = 60
    WEEK_MIN_HEIGHT_PX: float = 40
    DEFAULT_BOOKING_DURATION_MINUTES: int = 60


settings = Settings()
