"""Application settings, loaded from the environment and ``.env``."""
from __future__ import annotations
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ROSTER_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/1fdUtE6p0TppmMAQi4Uv206ba8IxXIx8C/export?format=csv"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATA_DIR: Path = Path("data")
    DATABASE_URL: str | None = None

    ROSTER_CSV_URL: str = DEFAULT_ROSTER_CSV_URL
    SERVICE_TIMEZONE: str = "America/Santiago"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Force-grant admin access; never enable in production.
    BYPASS_ADMIN: bool = False

    ABSENCE_ALERT_THRESHOLD: int = 3
    RECENT_ATTENDANCE_DAYS: int = 60

    LOG_LEVEL: str = "INFO"
    API_BASE_URL: str = "http://127.0.0.1:8000"
    DASHBOARD_REFRESH_SECONDS: int = 30

    @property
    def data_dir(self) -> Path:
        return self.DATA_DIR

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DATA_DIR / 'churchdash.db'}"


settings = Settings()
