from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    database_url: str = "sqlite:///./goaltracker.db"
    # Timezone used for "now", week boundaries and day comparisons.
    # Examples: "America/New_York", "Europe/London", or "local" to use system tz.
    timezone: str = "local"

    # Drop folder for goal JSON files (e.g. a synced iCloud Drive folder).
    # Leave unset to disable the importer.
    inbox_dir: str | None = None
    inbox_poll_seconds: float = 5.0

    # Rollover + archival on application start
    run_startup_jobs: bool = True

    log_level: str = "INFO"

    # Allow empty env strings for optional fields
    @field_validator("inbox_dir", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v

    class Config:
        env_file = ".env"


settings = Settings()
