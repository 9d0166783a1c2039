"""Application configuration via environment variables."""

import json
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: str = '["http://localhost:3000"]'

    # Snapshot persistence (one JSON file per collection)
    DATA_DIR: str = "data"
    PERSISTENCE_ENABLED: bool = True
    SEED_LEAVE_TYPES: bool = True

    # Rate limiting (slowapi syntax)
    WRITE_RATE_LIMIT: str = "120/minute"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS JSON string into a list."""
        try:
            return json.loads(self.CORS_ORIGINS)
        except (json.JSONDecodeError, TypeError):
            return ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
