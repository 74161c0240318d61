from functools import lru_cache

from fastapi import Depends, HTTPException, status

from .config import Settings, get_settings
from .services.store import GameStore


@lru_cache()
def get_store() -> GameStore:
    """Get the game store of this process."""
    settings = get_settings()
    return GameStore(concurrency=settings.EXTRACTION_CONCURRENCY)


def require_map(settings: Settings = Depends(get_settings)) -> Settings:
    """Guessing needs the map collaborator, which needs an API key."""
    if not settings.map_enabled:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Add GOOGLE_MAPS_API_KEY to enable map guesses."
        )
    return settings
