from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root and .env so it loads even if you start uvicorn from a subfolder
PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    # Loads from OS environment first; .env is used for local dev
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # REST Countries upstream
    REST_COUNTRIES_API_URL: str = "https://restcountries.com/v3.1"
    REST_CALL_TIME_OUT: int = Field(default=60000, gt=0)  # milliseconds

    # Snapshot cache
    CACHE_TTL: int = Field(default=600, gt=0)  # seconds
    CACHE_MAX_ENTRIES: int = Field(default=1, ge=1)

    # Per-client throttle on the public endpoints (slowapi / limits syntax)
    RATE_LIMIT: str = "10/5 minutes"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"


settings = Settings()
