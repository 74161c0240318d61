from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

from .models.game import RoundOrder, ScoreScale


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Map collaborator; guessing is disabled without a key
    GOOGLE_MAPS_API_KEY: Optional[str] = None

    # Server (local only, photos never leave this machine)
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Ingestion
    EXTRACTION_CONCURRENCY: int = 4
    MAX_UPLOAD_FILES: int = 200

    # Game Configuration
    DEFAULT_ROUND_ORDER: RoundOrder = RoundOrder.SEQUENTIAL
    DEFAULT_SCORE_SCALE: ScoreScale = ScoreScale.COUNTRY

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def map_enabled(self) -> bool:
        return bool(self.GOOGLE_MAPS_API_KEY)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
