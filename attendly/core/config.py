from datetime import time

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    DATABASE_URL: str = "postgresql+asyncpg://attend:attend_secret@db:5432/attendly"
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Check-ins strictly after this local time of day are "late"
    LATE_THRESHOLD_TIME: str = "09:30"
    # Completed days shorter than this become "half-day" (unless late)
    HALF_DAY_HOURS: float = 4.0

    EXPORT_TIME_FORMAT: str = "%I:%M:%S %p"

    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    RUN_MIGRATIONS_ON_STARTUP: bool = True
    LOG_LEVEL: str = "INFO"

    @property
    def late_threshold(self) -> time:
        return time.fromisoformat(self.LATE_THRESHOLD_TIME)


settings = Settings()
