from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List


class RoundOrder(str, Enum):
    """How playable photos are ordered into rounds."""
    SEQUENTIAL = "sequential"
    SHUFFLED = "shuffled"


class ScoreScale(str, Enum):
    """Named difficulty curve used to score a guess."""
    CITY = "city"
    STATE = "state"
    COUNTRY = "country"


class Stage(str, Enum):
    """Discrete phase of the game."""
    SETUP = "setup"
    GUESSING = "guessing"
    RESOLVED = "resolved"
    COMPLETE = "complete"


class Coordinate(BaseModel):
    """A latitude/longitude pair in degrees."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    class Config:
        frozen = True


class GuessRequest(BaseModel):
    """Request for submitting a guess."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    def to_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class GuessResponse(BaseModel):
    """Response after locking in a guess."""
    distance_km: float
    distance_label: str
    score: int
    actual_latitude: float
    actual_longitude: float
    round_completed: bool
    game_completed: bool


class GameStartRequest(BaseModel):
    """Request to start a new game; omitted fields fall back to settings."""
    order: Optional[RoundOrder] = None
    scale: Optional[ScoreScale] = None


class PhotoSummary(BaseModel):
    """One uploaded photo as listed on the setup screen."""
    id: str
    name: str
    url: str
    has_gps: bool


class UploadSummary(BaseModel):
    """Result of an ingestion batch."""
    total: int
    playable: int
    excluded: int
    photos: List[PhotoSummary]
    message: Optional[str] = None


class RoundResponse(BaseModel):
    """Response with round details."""
    round_number: int
    photo_id: str
    photo_name: str
    photo_url: str
    guess_latitude: Optional[float] = None
    guess_longitude: Optional[float] = None
    actual_latitude: Optional[float] = None
    actual_longitude: Optional[float] = None
    distance_km: Optional[float] = None
    distance_label: Optional[str] = None
    score: Optional[int] = None


class GameStateResponse(BaseModel):
    """Snapshot of the game for the round and results screens."""
    stage: Stage
    order: Optional[RoundOrder] = None
    scale: Optional[ScoreScale] = None
    round_number: int = 0
    total_rounds: int = 0
    progress: float = 0.0
    total_score: int = 0
    reveal: bool = False
    current_round: Optional[RoundResponse] = None


class ScaleOption(BaseModel):
    """A selectable scoring profile."""
    value: ScoreScale
    label: str
    description: str
    scale_km: float
    falloff: float


class ConfigResponse(BaseModel):
    """Setup screen configuration, including map readiness."""
    map_enabled: bool
    map_api_key: Optional[str] = None
    default_order: RoundOrder
    default_scale: ScoreScale
    scales: List[ScaleOption]
