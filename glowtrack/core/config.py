from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    APP_NAME: str = "Glow Track API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite:///./glowtrack.db"

    EXPIRY_SOON_DAYS: int = 90
    COUNTDOWN_TICK_SECONDS: int = 10

    PAO_OPTIONS: List[int] = [2, 6, 12, 18, 24, 36]
    PAO_MAX_MONTHS: int = 120

    SCHEDULER_ENABLED: bool = True
    FRESHNESS_SWEEP_INTERVAL_HOURS: int = 24

    LOG_LEVEL: str = "INFO"

    ALLOWED_ORIGINS: List[str] = ["http://localhost", "http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
